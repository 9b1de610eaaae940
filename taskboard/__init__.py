"""Taskboard API: teams, boards, lists and cards behind token authentication."""

__version__ = "0.1.0"
