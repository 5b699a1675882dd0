"""
Runtime package: symbol publication and registry synchronization.
"""

from .concurrency import NullLock, ReadWriteLock, get_lock, with_lock
from .namespace import SymbolTable

__all__ = ["NullLock", "ReadWriteLock", "SymbolTable", "get_lock", "with_lock"]
