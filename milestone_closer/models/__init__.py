"""Data models for milestones and pull requests (Pydantic)."""

from milestone_closer.models.milestone import Milestone
from milestone_closer.models.pull_request import PullRequest

__all__ = ["Milestone", "PullRequest"]
