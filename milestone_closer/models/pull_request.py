"""Pull request model (only the fields used to find related milestones)."""

from pydantic import BaseModel

from milestone_closer.models.milestone import Milestone


class PullRequest(BaseModel):
    """Pull request with its linked milestone, if any."""

    number: int
    title: str
    state: str
    milestone: Milestone | None = None
