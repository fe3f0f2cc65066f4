"""Document navigation history."""

from .history import HistoryEntry, NavigationHistory

__all__ = ["HistoryEntry", "NavigationHistory"]
