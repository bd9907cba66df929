"""Milestone closer entry point.

Runs one pass over the repository's milestones (as a GitHub Actions step or
from the command line). Usage: milestone-closer [--config PATH] [--check].
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from milestone_closer.adapters import GitHubAdapter, GitPlatformError
from milestone_closer.config import AppConfig, load_config
from milestone_closer.logging import MilestoneLogging
from milestone_closer.services import MilestoneProcessor


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="milestone-closer",
        description="Close milestones without open issues; optionally reopen regressed ones",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def set_failed(message: str) -> None:
    """Report run failure to the Actions runner (workflow command)."""
    print(f"::error::{message}", flush=True)


def run(config: AppConfig) -> MilestoneProcessor:
    """Build adapter and processor from config and run one pass."""
    log = logging.getLogger("milestone_closer.run")
    adapter = GitHubAdapter(token=config.processor.repo_token, api_url=config.github.api_url)
    processor = MilestoneProcessor(config.processor, adapter, config.github)
    operations_left = processor.process_milestones()
    log.info(
        "Done | repo=%s | closed=%s | reopened=%s | operations_left=%s",
        config.github.repository,
        len(processor.closed_milestones),
        len(processor.reopened_milestones),
        operations_left,
    )
    return processor


def main(argv: list[str] | None = None) -> int:
    """Entry point: load config, run one pass, return exit code."""
    args = parse_args(argv)
    log = logging.getLogger("milestone_closer")

    config_path = args.config
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")
            logging.basicConfig(level=logging.INFO)
            log.warning("config.yaml not found, using config.example.yaml")

    try:
        config = load_config(config_path)
    except ValidationError as e:
        logging.basicConfig(level=logging.INFO)
        log.error("Invalid configuration: %s", e)
        set_failed(f"Invalid configuration: {e}")
        return 1

    if args.check:
        print("Config OK:", config.github.repository, f"minimum_issues={config.processor.minimum_issues}")
        return 0

    MilestoneLogging(config.logging).setup()

    try:
        run(config)
    except KeyboardInterrupt:
        log.error("Interrupted; milestones changed so far stay changed")
        set_failed("Interrupted")
        return 1
    except GitPlatformError as e:
        log.error("GitHub API error: %s", e)
        set_failed(str(e))
        return 1
    except Exception as e:
        log.exception("Fatal error: %s", e)
        set_failed(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
