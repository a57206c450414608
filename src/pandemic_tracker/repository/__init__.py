"""Persistence adapters for tracked games."""

from pandemic_tracker.repository.json_store import (
    InvalidGameNameError,
    JsonGameRepository,
    game_slug,
)

__all__ = ["InvalidGameNameError", "JsonGameRepository", "game_slug"]
