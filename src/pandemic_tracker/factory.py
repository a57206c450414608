"""Construction of fresh games from a location catalog file.

The catalog is a JSON document of the form::

    {"cities": [
        {"name": "Atlanta", "disease": "blue", "neighbors": ["Chicago"],
         "panic_level": 0, "num_infections": 0, "quarantined": false},
        ...
    ]}

Only ``name`` and ``disease`` are required.  A catalog that cannot be read or
validated is a startup failure and raises :class:`CatalogError`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from pandemic_tracker.domain.city_deck import new_city_deck
from pandemic_tracker.domain.diseases import DEFAULT_DISEASES
from pandemic_tracker.domain.enums import DiseaseType
from pandemic_tracker.domain.errors import CatalogError
from pandemic_tracker.domain.infection_deck import new_infection_deck, split_infection_deck
from pandemic_tracker.domain.models import MAX_INFECTION_LEVEL, GameState, Location, LocationName
from pandemic_tracker.domain.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


class CatalogEntry(BaseModel):
    """One city as written in the catalog file."""

    name: str = Field(min_length=1)
    disease: DiseaseType
    neighbors: list[str] = Field(default_factory=list)
    panic_level: int = Field(default=0, ge=0)
    num_infections: int = Field(default=0, ge=0, le=MAX_INFECTION_LEVEL)
    quarantined: bool = False


class Catalog(BaseModel):
    cities: list[CatalogEntry]


def load_catalog(path: Path | str) -> dict[LocationName, Location]:
    """Read and validate a catalog file into a location arena."""

    catalog_path = Path(path)
    try:
        data = catalog_path.read_bytes()
    except OSError as exc:
        raise CatalogError(f"Could not read cities file at {catalog_path}: {exc}") from exc
    try:
        catalog = Catalog.model_validate_json(data)
    except ValidationError as exc:
        raise CatalogError(f"Invalid cities JSON file at {catalog_path}: {exc}") from exc
    return build_locations(catalog.cities)


def build_locations(entries: list[CatalogEntry]) -> dict[LocationName, Location]:
    """Turn catalog entries into locations, rejecting duplicates and dangling neighbours."""

    arena: dict[LocationName, Location] = {}
    for entry in entries:
        name = LocationName(entry.name)
        if name in arena:
            raise CatalogError(f"Duplicate city {entry.name} in catalog")
        arena[name] = Location(
            name=name,
            disease=entry.disease,
            neighbors=[LocationName(neighbor) for neighbor in entry.neighbors],
            infection_level=entry.num_infections,
            quarantined=entry.quarantined,
            panic_level=entry.panic_level,
        )
    for location in arena.values():
        unknown = [neighbor for neighbor in location.neighbors if neighbor not in arena]
        if unknown:
            raise CatalogError(f"{location.name} lists unknown neighbours: {', '.join(unknown)}")
    return arena


def new_game(
    game_name: str,
    arena: dict[LocationName, Location],
    *,
    shock_markers: int | None = None,
    infection_rate: int | None = None,
    striation_sizes: list[int] | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> GameState:
    """Create a fresh game state over ``arena``."""

    markers = rules.deck.shock_markers_per_game if shock_markers is None else shock_markers
    rate = rules.deck.default_infection_rate if infection_rate is None else infection_rate
    names = list(arena)
    if striation_sizes:
        deck = split_infection_deck(names, striation_sizes)
    else:
        deck = new_infection_deck(names)

    logger.info(
        "starting game %r with %d locations and %d shock markers", game_name, len(names), markers
    )
    return GameState(
        game_name=game_name,
        locations=arena,
        diseases=list(DEFAULT_DISEASES),
        city_deck=new_city_deck(names, markers),
        infection_deck=deck,
        infection_rate=rate,
        outbreaks=0,
    )


def new_game_from_file(
    catalog_path: Path | str,
    game_name: str,
    *,
    shock_markers: int | None = None,
    infection_rate: int | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> GameState:
    """Load a catalog file and start a game over it."""

    return new_game(
        game_name,
        load_catalog(catalog_path),
        shock_markers=shock_markers,
        infection_rate=infection_rate,
        rules=rules,
    )
