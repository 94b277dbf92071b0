"""
Sparkle Persistence Boundary.

Snapshot models that round-trip a GameState through JSON, and a small file
store for hosts that want to keep a game across restarts.
"""

from sparkle.persistence.models import GameSnapshot, dump_state, load_state
from sparkle.persistence.store import SnapshotStore

__all__ = [
    "GameSnapshot",
    "SnapshotStore",
    "dump_state",
    "load_state",
]
