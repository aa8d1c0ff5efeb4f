"""Injectable search state container."""

from .search_state_store import SearchStateStore, StateListener

__all__ = ['SearchStateStore', 'StateListener']
