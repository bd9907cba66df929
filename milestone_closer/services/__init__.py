"""Milestone sources and the milestone processor."""

from milestone_closer.services.milestone_processor import (
    OPERATIONS_PER_RUN,
    MilestoneProcessor,
    TriageAction,
)
from milestone_closer.services.milestone_source import (
    PER_PAGE,
    AllMilestonesSource,
    MilestoneSource,
    RelatedMilestonesSource,
    build_milestone_source,
)

__all__ = [
    "OPERATIONS_PER_RUN",
    "PER_PAGE",
    "AllMilestonesSource",
    "MilestoneProcessor",
    "MilestoneSource",
    "RelatedMilestonesSource",
    "TriageAction",
    "build_milestone_source",
]
