"""Git hosting platform milestone model."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class Milestone(BaseModel):
    """Milestone grouping issues and pull requests.

    Counts are aggregated by the platform; the closer only reads them and
    requests state transitions.
    """

    id: int
    number: int
    title: str
    description: str = ""
    updated_at: datetime | None = None
    open_issues: int = Field(default=0, ge=0)
    closed_issues: int = Field(default=0, ge=0)
    state: Literal["open", "closed"] = "open"

    @property
    def total_issues(self) -> int:
        """Open plus closed issues/PRs in the milestone."""
        return self.open_issues + self.closed_issues
