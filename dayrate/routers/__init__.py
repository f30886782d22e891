"""API routers."""
from dayrate.routers import badges, bot, entries, health, stats

__all__ = [
    "badges",
    "bot",
    "entries",
    "health",
    "stats",
]
