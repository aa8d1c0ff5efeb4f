"""Navigation adapters."""

from .history_navigator import HistoryNavigator

__all__ = ['HistoryNavigator']
