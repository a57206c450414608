"""Dataclasses describing the tracked game state.

The whole session is one aggregate, :class:`GameState`.  Locations live in a
single arena (``GameState.locations``) keyed by name; both decks refer to
locations by name only, so the location records are mutated in exactly one
place.  Everything derived from the decks (phase arithmetic, probabilities,
outbreak eligibility) is computed on demand by the rule modules and never
stored here, which keeps a snapshot loadable without recomputation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NewType

from .enums import DiseaseType

LocationName = NewType("LocationName", str)

MAX_INFECTION_LEVEL = 3


@dataclass(slots=True)
class Location:
    """A city on the board."""

    name: LocationName
    disease: DiseaseType
    neighbors: list[LocationName] = field(default_factory=list)
    infection_level: int = 0
    quarantined: bool = False
    panic_level: int = 0


@dataclass(frozen=True, slots=True)
class DiseaseData:
    """Display metadata for a disease category (read-only)."""

    type: DiseaseType
    display_name: str
    color: str


@dataclass(frozen=True, slots=True)
class CityCard:
    """One card of the city deck: a location card or a shock marker."""

    label: str
    is_shock: bool = False


@dataclass(slots=True)
class CityDeck:
    """Player (city) deck: full card set plus the labels drawn so far, in order."""

    cards: list[CityCard] = field(default_factory=list)
    drawn: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Striation:
    """Shuffled, unordered group of undrawn infection cards."""

    members: set[LocationName] = field(default_factory=set)


@dataclass(slots=True)
class InfectionDeck:
    """Infection deck split into striations.

    ``striations[0]`` is the band nearest the next draw.  ``drawn`` is the
    discard pile, most recent card first.
    """

    striations: list[Striation] = field(default_factory=list)
    drawn: list[LocationName] = field(default_factory=list)


@dataclass(slots=True)
class GameState:
    """Root aggregate persisted as one snapshot."""

    game_name: str
    locations: dict[LocationName, Location] = field(default_factory=dict)
    diseases: list[DiseaseData] = field(default_factory=list)
    city_deck: CityDeck = field(default_factory=CityDeck)
    infection_deck: InfectionDeck = field(default_factory=InfectionDeck)
    infection_rate: int = 2
    outbreaks: int = 0
