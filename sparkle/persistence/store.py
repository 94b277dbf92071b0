"""
Sparkle - Snapshot Store

Keeps the latest snapshot of a game in a JSON file.
"""

import logging
from pathlib import Path

from sparkle.engine.state import GameState
from sparkle.persistence.models import dump_state, load_state

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Saves and loads one game's snapshot at a fixed path."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def save(self, state: GameState) -> None:
        """Write the snapshot atomically (temp file, then rename)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(dump_state(state), encoding="utf-8")
        tmp.replace(self.path)

    def load(self) -> GameState | None:
        """Return the saved state, or None if nothing has been saved yet."""
        if not self.path.exists():
            return None
        state = load_state(self.path.read_text(encoding="utf-8"))
        logger.info("Loaded snapshot from %s (turn %d)", self.path, state.turn_number)
        return state

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
