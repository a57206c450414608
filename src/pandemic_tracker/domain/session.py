"""Game session operations composing the registry and both decks.

Every operation validates its inputs before touching state, so a raised
:class:`~pandemic_tracker.domain.errors.TrackerError` leaves the aggregate
exactly as it was.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from . import city_deck, infection_deck, locations
from .diseases import get_disease_data
from .enums import BandKind, DiseaseType, ProbabilityTier
from .errors import (
    InvalidInfectionRateError,
    QuarantineAlreadySetError,
    QuarantineNotSetError,
)
from .models import MAX_INFECTION_LEVEL, DiseaseData, GameState, LocationName
from .probability import classify_probability, is_excluded, probability_of_location
from .rules_config import DEFAULT_RULES, RulesConfig


@dataclass(slots=True)
class InfectionResult:
    """Outcome of an ordinary infection draw."""

    location: LocationName
    infection_level: int
    outbreak: bool
    quarantine_absorbed: bool
    detail: str


@dataclass(slots=True)
class ShockResult:
    """Outcome of a shock (epidemic) draw."""

    location: LocationName
    marker: str
    infection_level: int
    outbreak: bool
    quarantine_absorbed: bool
    new_striation_size: int
    detail: str


@dataclass(slots=True)
class LocationReport:
    """Read-only view of one location for rendering."""

    name: LocationName
    disease: DiseaseType
    probability: float
    tier: ProbabilityTier
    infection_level: int
    quarantined: bool
    can_outbreak: bool


@dataclass(slots=True)
class StriationBand:
    """One column of the striated display."""

    kind: BandKind
    index: int | None
    locations: list[LocationReport]


def infect(state: GameState, name: str) -> InfectionResult:
    """Draw ``name`` from the infection deck and infect it once."""

    location = locations.get_location(state.locations, name)
    infection_deck.draw_infection(state.infection_deck, name)

    if location.quarantined:
        location.quarantined = False
        return InfectionResult(
            location=location.name,
            infection_level=location.infection_level,
            outbreak=False,
            quarantine_absorbed=True,
            detail=f"{location.name} was quarantined; quarantine removed",
        )

    outbreak = locations.infect_location(location)
    if outbreak:
        state.outbreaks += 1
        detail = f"{location.name} outbreaks"
    else:
        detail = f"Infected {location.name} ({location.infection_level})"
    return InfectionResult(
        location=location.name,
        infection_level=location.infection_level,
        outbreak=outbreak,
        quarantine_absorbed=False,
        detail=detail,
    )


def cause_shock(state: GameState, name: str) -> ShockResult:
    """Resolve a shock card pulling ``name`` and restack the discard pile."""

    location = locations.get_location(state.locations, name)
    city_deck.next_shock_marker(state.city_deck)
    infection_deck.check_pull_from_bottom(state.infection_deck, name)

    infection_deck.pull_from_bottom(state.infection_deck, name)
    marker = city_deck.draw_shock_marker(state.city_deck)

    outbreak = False
    absorbed = location.quarantined
    if absorbed:
        location.quarantined = False
        detail = f"Shock in {location.name} absorbed by quarantine"
    else:
        outbreak = location.infection_level > 0
        locations.escalate_location(location)
        if outbreak:
            state.outbreaks += 1
            detail = f"Shock in {location.name}; {location.name} outbreaks"
        else:
            detail = f"Shock in {location.name}"

    infection_deck.shuffle_drawn(state.infection_deck)
    return ShockResult(
        location=location.name,
        marker=marker,
        infection_level=location.infection_level,
        outbreak=outbreak,
        quarantine_absorbed=absorbed,
        new_striation_size=infection_deck.striation_size(state.infection_deck.striations[0]),
        detail=detail,
    )


def draw_city_card(state: GameState, name: str) -> None:
    """Record a location card dealt from the city deck."""

    location = locations.get_location(state.locations, name)
    city_deck.draw_city(state.city_deck, location.name)


def draw_shock_marker(state: GameState) -> str:
    return city_deck.draw_shock_marker(state.city_deck)


def quarantine(state: GameState, name: str) -> None:
    location = locations.get_location(state.locations, name)
    if location.quarantined:
        raise QuarantineAlreadySetError(f"{location.name} is already quarantined")
    location.quarantined = True


def remove_quarantine(state: GameState, name: str) -> None:
    location = locations.get_location(state.locations, name)
    if not location.quarantined:
        raise QuarantineNotSetError(f"{location.name} is not quarantined")
    location.quarantined = False


def set_infection_level(state: GameState, name: str, level: int) -> None:
    """Correct a location's infection level by hand."""

    location = locations.get_location(state.locations, name)
    locations.set_infection_level(location, level)


def set_infection_rate(state: GameState, rate: int) -> None:
    if rate < 1:
        raise InvalidInfectionRateError(f"infection rate must be at least 1, got {rate}")
    state.infection_rate = rate


def can_outbreak(state: GameState, name: str) -> bool:
    """Whether ``name`` could outbreak in the next draw window."""

    location = locations.get_location(state.locations, name)
    if location.infection_level == 0:
        return False
    if is_excluded(state, name):
        return False
    return (
        location.infection_level == MAX_INFECTION_LEVEL
        or name in infection_deck.bottom_striation(state.infection_deck).members
    )


def get_disease(state: GameState, disease: DiseaseType | str) -> DiseaseData:
    return get_disease_data(state.diseases, disease)


def location_report(
    state: GameState,
    names: Iterable[str] | None = None,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[LocationReport]:
    """Report rows for ``names`` (all locations when omitted), most at risk first."""

    selected = list(state.locations) if names is None else list(names)
    ordered = locations.sort_by_infection_level(state.locations, selected)
    return [_report_row(state, name, rules) for name in ordered]


def striation_report(state: GameState, *, rules: RulesConfig = DEFAULT_RULES) -> list[StriationBand]:
    """Bands for the striated display, most recent first.

    The discard pile comes first, then every non-empty striation from the
    one nearest the next draw outwards.
    """

    deck = state.infection_deck
    bands = [
        StriationBand(
            kind=BandKind.DRAWN,
            index=None,
            locations=location_report(state, deck.drawn, rules=rules),
        )
    ]
    for index, striation in enumerate(deck.striations):
        if not striation.members:
            continue
        bands.append(
            StriationBand(
                kind=BandKind.STRIATION,
                index=index,
                locations=location_report(state, striation.members, rules=rules),
            )
        )
    return bands


def _report_row(state: GameState, name: LocationName, rules: RulesConfig) -> LocationReport:
    location = state.locations[name]
    excluded = is_excluded(state, name)
    probability = probability_of_location(state, name, rules=rules)
    return LocationReport(
        name=location.name,
        disease=location.disease,
        probability=probability,
        tier=classify_probability(probability, excluded=excluded, rules=rules),
        infection_level=location.infection_level,
        quarantined=location.quarantined,
        can_outbreak=can_outbreak(state, name),
    )
