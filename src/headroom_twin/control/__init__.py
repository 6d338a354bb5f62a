"""Process-level state for the headroom twin.

This module provides the store that owns the live hall snapshot.
"""

from .state_store import HallStateStore

__all__ = [
    'HallStateStore',
]
