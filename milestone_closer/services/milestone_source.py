"""Milestone sources: where the processor gets its pages of candidates.

The fetch mode is chosen once per run by build_milestone_source:
- all milestones (open, plus closed when reopening is enabled)
- related milestones (linked to the pull requests of the pushed commit)
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List

from milestone_closer.adapters.base import GitPlatformAdapter
from milestone_closer.config import GitHubConfig, ProcessorOptions
from milestone_closer.models import Milestone

PER_PAGE = 100

LOG = logging.getLogger("milestone_closer.source")


def unique_milestones(*groups: Iterable[Milestone]) -> List[Milestone]:
    """Union milestone groups by id, keeping the first occurrence and order."""
    seen: set[int] = set()
    result: List[Milestone] = []
    for group in groups:
        for milestone in group:
            if milestone.id in seen:
                continue
            seen.add(milestone.id)
            result.append(milestone)
    return result


class MilestoneSource(ABC):
    """Paginated supplier of candidate milestones (pages start at 1)."""

    @abstractmethod
    def fetch(self, page: int) -> List[Milestone]:
        """Return the milestones on the given page; empty when exhausted."""
        ...


class AllMilestonesSource(MilestoneSource):
    """All open milestones of the repo, plus closed ones when reopening."""

    def __init__(
        self,
        adapter: GitPlatformAdapter,
        repo: str,
        include_closed: bool = False,
        per_page: int = PER_PAGE,
    ) -> None:
        self._adapter = adapter
        self._repo = repo
        self._include_closed = include_closed
        self._per_page = per_page

    def fetch(self, page: int) -> List[Milestone]:
        LOG.debug("Getting all milestones (page %s)", page)
        opened = self._adapter.list_milestones(self._repo, "open", page=page, per_page=self._per_page)
        if not self._include_closed:
            return unique_milestones(opened)
        closed = self._adapter.list_milestones(self._repo, "closed", page=page, per_page=self._per_page)
        return unique_milestones(opened, closed)


class RelatedMilestonesSource(MilestoneSource):
    """Milestones linked to the event that triggered the run.

    For a push, these are the milestones of the pull requests associated
    with the pushed commit. Other events yield no candidates. Candidates
    are resolved once and served as a single page.
    """

    def __init__(
        self,
        adapter: GitPlatformAdapter,
        repo: str,
        event_name: str,
        sha: str,
        related_only: bool = True,
        related_active: bool = False,
    ) -> None:
        self._adapter = adapter
        self._repo = repo
        self._event_name = event_name
        self._sha = sha
        self._related_only = related_only
        self._related_active = related_active
        self._candidates: List[Milestone] | None = None

    def fetch(self, page: int) -> List[Milestone]:
        if page > 1:
            return []
        if self._candidates is None:
            self._candidates = self._resolve()
        return list(self._candidates)

    def _resolve(self) -> List[Milestone]:
        own: List[Milestone] = []
        if self._related_only:
            LOG.debug("Getting self milestone...")
            if self._event_name == "push":
                own = self._from_commit()
            else:
                LOG.debug("Event %r has no derivable related milestone", self._event_name)
        if self._related_active:
            # TODO: collect milestones of open PRs and of issues with any milestone once the widening rules are agreed
            LOG.debug("related-active widening is not executed; no extra milestones collected")
        return unique_milestones(own)

    def _from_commit(self) -> List[Milestone]:
        if not self._sha:
            LOG.warning("Push event without commit SHA; no related milestone")
            return []
        pulls = self._adapter.list_pull_requests_for_commit(self._repo, self._sha)
        found = []
        for pr in pulls:
            if pr.milestone is None:
                continue
            LOG.debug("PR #%s is linked to milestone #%s", pr.number, pr.milestone.number)
            found.append(pr.milestone)
        return found


def is_related_mode(options: ProcessorOptions) -> bool:
    """Related mode narrows candidates to the triggering event (related-only or related-active)."""
    return options.related_only or options.related_active


def build_milestone_source(
    adapter: GitPlatformAdapter,
    options: ProcessorOptions,
    github: GitHubConfig,
) -> MilestoneSource:
    """Pick the fetch mode for this run from the options."""
    if is_related_mode(options):
        return RelatedMilestonesSource(
            adapter,
            github.repository,
            event_name=github.event_name,
            sha=github.sha,
            related_only=options.related_only,
            related_active=options.related_active,
        )
    return AllMilestonesSource(adapter, github.repository, include_closed=options.reopen_active)
