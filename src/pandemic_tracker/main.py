"""Console entrypoint: start or resume a tracked game and feed it commands."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable
from typing import TextIO

from pandemic_tracker import commands
from pandemic_tracker.config import Settings, get_settings
from pandemic_tracker.domain import models as dm
from pandemic_tracker.domain.errors import CatalogError
from pandemic_tracker.factory import new_game_from_file
from pandemic_tracker.repository import JsonGameRepository

logger = logging.getLogger(__name__)

QUIT_COMMANDS = {"quit", "exit"}


def open_game(repository: JsonGameRepository, settings: Settings, game_name: str) -> dm.GameState:
    """Resume a saved game, or start one from the configured catalog."""

    if repository.exists(game_name):
        logger.info("resuming game %r", game_name)
        return repository.load(game_name)
    state = new_game_from_file(
        settings.catalog_path,
        game_name,
        shock_markers=settings.shock_markers,
        infection_rate=settings.infection_rate,
    )
    repository.save(state)
    return state


def run_loop(
    state: dm.GameState,
    repository: JsonGameRepository,
    lines: Iterable[str],
    out: TextIO,
) -> None:
    """Run command lines until exhausted or a quit command is read."""

    for line in lines:
        text = line.strip()
        if not text:
            continue
        if text.lower() in QUIT_COMMANDS:
            break
        result = commands.execute(state, text)
        print(result.message, file=out)
        if result.mutated:
            repository.save(state)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Track deck state for a game session")
    parser.add_argument("game_name", help="Name of the game to start or resume")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = get_settings()
    repository = JsonGameRepository(settings.data_dir)
    try:
        state = open_game(repository, settings, args.game_name)
    except CatalogError as exc:
        logger.error("%s", exc)
        return 1

    run_loop(state, repository, sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual launch helper
    sys.exit(main())
