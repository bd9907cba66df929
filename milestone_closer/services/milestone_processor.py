"""Milestone processor: close finished milestones, reopen regressed ones.

One run walks the pages of a MilestoneSource. Each page costs one
operation from a fixed budget; every milestone on a page is triaged and
closed, reopened or skipped. Adapter errors are not caught here.
"""

import logging
from enum import Enum
from typing import List

from milestone_closer.adapters.base import GitPlatformAdapter
from milestone_closer.config import GitHubConfig, ProcessorOptions
from milestone_closer.models import Milestone
from milestone_closer.services.milestone_source import (
    MilestoneSource,
    build_milestone_source,
    is_related_mode,
)

OPERATIONS_PER_RUN = 100

LOG = logging.getLogger("milestone_closer.processor")


class TriageAction(str, Enum):
    """What to do with one milestone."""

    SKIP = "skip"
    CLOSE = "close"
    REOPEN = "reopen"


class MilestoneProcessor:
    """Triage milestones page by page within the operations budget."""

    def __init__(
        self,
        options: ProcessorOptions,
        adapter: GitPlatformAdapter,
        github: GitHubConfig,
        source: MilestoneSource | None = None,
    ) -> None:
        self.options = options
        self._adapter = adapter
        self._repo = github.repository
        self._source = source or build_milestone_source(adapter, options, github)
        self._event_pull_request = github.event_name == "pull_request"
        self.operations_left = OPERATIONS_PER_RUN
        # Never set yet: no detection for a missing related milestone exists
        self.related_not_found = False
        self.closed_milestones: List[Milestone] = []
        self.reopened_milestones: List[Milestone] = []

        if options.debug_only:
            LOG.warning("Executing in debug mode. Debug output will be written but no milestones will be processed.")

    def process_milestones(self, page: int = 1) -> int:
        """Process pages starting at page; return operations left."""
        related = is_related_mode(self.options)
        reopen = self.options.reopen_active

        while True:
            if self.operations_left <= 0:
                LOG.warning("Reached max number of operations to process. Exiting.")
                return 0

            milestones = self._source.fetch(page)
            self.operations_left -= 1

            if not milestones and not reopen:
                LOG.debug("No more milestones found to process. Exiting.")
                return self.operations_left
            if related and not reopen and self.operations_left < OPERATIONS_PER_RUN - 1:
                LOG.debug("Passing milestone last check. Exiting.")
                return self.operations_left
            if related and not reopen and self.related_not_found:
                LOG.debug("Related milestone not found while related-only is enabled. Exiting.")
                return self.operations_left

            for milestone in milestones:
                self._process_one(milestone)

            page += 1

    def triage(self, milestone: Milestone) -> TriageAction:
        """Decide the action for one milestone.

        Reopening is checked first, so a closed milestone with open issues
        is reopened regardless of minimum_issues.
        """
        if milestone.state == "closed" and self.options.reopen_active and milestone.open_issues > 0:
            return TriageAction.REOPEN
        if milestone.total_issues < self.options.minimum_issues:
            LOG.debug(
                "Skipping %s because it has less than %s issues",
                milestone.title,
                self.options.minimum_issues,
            )
            return TriageAction.SKIP
        if milestone.state == "open" and milestone.open_issues > 0:
            LOG.debug("Skipping %s because it has open issues/prs", milestone.title)
            return TriageAction.SKIP
        if milestone.state == "open":
            return TriageAction.CLOSE
        LOG.debug("Skipping %s because it is already closed", milestone.title)
        return TriageAction.SKIP

    def _process_one(self, milestone: Milestone) -> None:
        LOG.debug(
            "Found milestone: milestone #%s - %s last updated %s",
            milestone.number,
            milestone.title,
            milestone.updated_at,
        )
        action = self.triage(milestone)
        if action is TriageAction.REOPEN:
            self.open_milestone(milestone)
        elif action is TriageAction.CLOSE:
            # Close instantly; milestones cannot be tagged for a second pass
            self.close_milestone(milestone)

    def close_milestone(self, milestone: Milestone) -> None:
        """Record and (unless debug_only) close the milestone."""
        if self._event_pull_request and self.options.related_only:
            LOG.info(
                'Closing only the related milestone #%s - "%s" (debug_only=%s)',
                milestone.number,
                milestone.title,
                self.options.debug_only,
            )
        else:
            LOG.info(
                'Closing milestone #%s - "%s" (debug_only=%s): no open issues left',
                milestone.number,
                milestone.title,
                self.options.debug_only,
            )

        self.closed_milestones.append(milestone)

        if self.options.debug_only:
            return

        self._adapter.update_milestone_state(self._repo, milestone.number, "closed")

    def open_milestone(self, milestone: Milestone) -> None:
        """Record and (unless debug_only) reopen the milestone."""
        LOG.info(
            'Reopening milestone #%s - "%s" (debug_only=%s): %s open issues',
            milestone.number,
            milestone.title,
            self.options.debug_only,
            milestone.open_issues,
        )

        self.reopened_milestones.append(milestone)

        if self.options.debug_only:
            return

        self._adapter.update_milestone_state(self._repo, milestone.number, "open")
