"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import List, Literal

from milestone_closer.models import Milestone, PullRequest

MilestoneState = Literal["open", "closed"]


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Abstract interface for the milestone operations of a Git hosting
    platform."""

    @abstractmethod
    def list_milestones(
        self,
        repo: str,
        state: MilestoneState,
        page: int = 1,
        per_page: int = 100,
    ) -> List[Milestone]:
        """Fetch one page of milestones in the given state."""
        ...

    @abstractmethod
    def update_milestone_state(self, repo: str, milestone_number: int, state: MilestoneState) -> Milestone:
        """Set milestone state (open or closed)."""
        ...

    def list_pull_requests_for_commit(self, repo: str, sha: str) -> List[PullRequest]:
        """List pull requests associated with a commit. Override if needed."""
        return []
