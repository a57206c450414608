"""Runtime primitives backing the tracker HTTP API."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from pandemic_tracker import commands
from pandemic_tracker.config import Settings, get_settings
from pandemic_tracker.domain import models as dm
from pandemic_tracker.domain import session
from pandemic_tracker.domain.rules_config import DEFAULT_RULES, RulesConfig
from pandemic_tracker.factory import new_game_from_file
from pandemic_tracker.repository import JsonGameRepository, game_slug

logger = logging.getLogger(__name__)


class GameExistsError(ValueError):
    """A game with the requested name is already stored."""


class GameService:
    """Load, mutate and persist games one command at a time.

    Every game gets its own lock; a command loads the snapshot, runs, and
    saves while holding it, so readers always see a consistent joint state
    of both decks.
    """

    def __init__(
        self,
        repository: JsonGameRepository,
        *,
        settings: Settings,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> None:
        self._repository = repository
        self._settings = settings
        self._rules = rules
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _locked(self, game_name: str) -> Iterator[None]:
        key = game_slug(game_name)
        with self._locks_guard:
            lock = self._locks.setdefault(key, threading.Lock())
        with lock:
            yield

    def list_games(self) -> list[str]:
        return self._repository.list_games()

    def get_game(self, game_name: str) -> dm.GameState:
        """Load a single game or raise ``FileNotFoundError``."""

        with self._locked(game_name):
            return self._repository.load(game_name)

    def create_game(
        self,
        game_name: str,
        *,
        shock_markers: int | None = None,
        infection_rate: int | None = None,
    ) -> dm.GameState:
        """Start a game from the configured catalog and persist it."""

        with self._locked(game_name):
            if self._repository.exists(game_name):
                raise GameExistsError(f"game {game_name!r} already exists")
            state = new_game_from_file(
                self._settings.catalog_path,
                game_name,
                shock_markers=self._settings.shock_markers if shock_markers is None else shock_markers,
                infection_rate=(
                    self._settings.infection_rate if infection_rate is None else infection_rate
                ),
                rules=self._rules,
            )
            self._repository.save(state)
        return state

    def run_command(self, game_name: str, line: str) -> commands.CommandResult:
        """Execute a command line and persist the game when it changed."""

        with self._locked(game_name):
            state = self._repository.load(game_name)
            result = commands.execute(state, line, rules=self._rules)
            if result.mutated:
                self._repository.save(state)
                logger.info("game %r: %s", game_name, result.message)
        return result

    def location_report(
        self, game_name: str, names: list[str] | None = None
    ) -> list[session.LocationReport]:
        state = self.get_game(game_name)
        return session.location_report(state, names, rules=self._rules)

    def striation_report(self, game_name: str) -> list[session.StriationBand]:
        state = self.get_game(game_name)
        return session.striation_report(state, rules=self._rules)

    @staticmethod
    def to_summary_dict(state: dm.GameState) -> dict[str, object]:
        """Return a JSON-friendly overview of a game."""

        deck = state.city_deck
        return {
            "game_name": state.game_name,
            "infection_rate": state.infection_rate,
            "outbreaks": state.outbreaks,
            "location_count": len(state.locations),
            "city_cards_drawn": len(deck.drawn),
            "city_cards_total": len(deck.cards),
            "striation_count": sum(1 for s in state.infection_deck.striations if s.members),
            "infection_discard_size": len(state.infection_deck.drawn),
        }


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig = DEFAULT_RULES
    ) -> None:
        self.settings = settings or get_settings()
        self.repository = JsonGameRepository(self.settings.data_dir)
        self.rules = rules
        self.games = GameService(self.repository, settings=self.settings, rules=rules)


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
