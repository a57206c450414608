"""JSON-based repository for tracked games."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import TypeAdapter

from pandemic_tracker.domain import models as dm

logger = logging.getLogger(__name__)

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


class InvalidGameNameError(ValueError):
    """Raised when a game name maps to an empty file key."""


def game_slug(game_name: str) -> str:
    """File-system friendly key for a game name."""

    slug = _SLUG_PATTERN.sub("-", game_name.lower()).strip("-")
    if not slug:
        raise InvalidGameNameError(f"game name {game_name!r} has no usable characters")
    return slug


class JsonGameRepository:
    """Persist games as JSON snapshots on disk."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._adapter: TypeAdapter[dm.GameState] = TypeAdapter(dm.GameState)

    def _path_for(self, game_name: str) -> Path:
        return self.base_path / f"game_{game_slug(game_name)}.json"

    def save(self, state: dm.GameState) -> Path:
        """Serialize a game to disk and return the snapshot path.

        The snapshot is written next to the target and renamed over it, so a
        reader never observes a half-written file.
        """

        path = self._path_for(state.game_name)
        payload = self._adapter.dump_json(state, indent=2)
        staging = path.with_suffix(".json.tmp")
        staging.write_bytes(payload)
        staging.replace(path)
        logger.debug("saved game %r to %s", state.game_name, path)
        return path

    def load(self, game_name: str) -> dm.GameState:
        """Load a previously saved game snapshot.

        Raises ``FileNotFoundError`` for unknown games and
        ``pydantic.ValidationError`` for malformed snapshots.
        """

        return self.load_path(self._path_for(game_name))

    def load_path(self, path: Path) -> dm.GameState:
        data = path.read_bytes()
        return self._adapter.validate_json(data)

    def exists(self, game_name: str) -> bool:
        return self._path_for(game_name).exists()

    def list_games(self) -> list[str]:
        """Return the game names currently persisted in the repository."""

        names: list[str] = []
        for path in sorted(self.base_path.glob("game_*.json")):
            try:
                names.append(self.load_path(path).game_name)
            except ValueError:  # pragma: no cover - ignored malformed file
                logger.warning("skipping unreadable snapshot %s", path)
                continue
        return names

    def delete(self, game_name: str) -> None:
        """Remove a game snapshot if it exists."""

        path = self._path_for(game_name)
        if path.exists():
            path.unlink()
