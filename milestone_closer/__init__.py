"""Milestone closer: close milestones with no open issues, reopen regressed ones."""

__version__ = "0.1.0"
