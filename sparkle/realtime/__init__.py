"""
Sparkle Realtime Host.

Thread-safe session state and the timer host that re-submits delayed
follow-up commands.
"""

from sparkle.realtime.scheduler import DelayedActionScheduler
from sparkle.realtime.session import GameSession

__all__ = [
    "DelayedActionScheduler",
    "GameSession",
]
