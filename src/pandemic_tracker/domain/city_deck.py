"""City (player) deck rules: draws, shock markers and phase arithmetic.

The deck of ``N`` cards holding ``E`` shock markers is dealt in ``E`` equal
phases of ``N // E`` cards, and the setup rules guarantee exactly one shock
marker per phase.  Knowing how many cards and markers have been drawn is
therefore enough to tell whether the current phase still owes its marker
and how many cards it could be hiding among.

Example with 53 cards and 5 markers (10 per phase): after 3 draws and no
marker, the marker is one of the remaining 7 cards of phase 0, and the
chance that one of the next two cards is it is ``2 / 7``.  Once phase 0 has
produced its marker the chance is zero until draw 10 opens phase 1.
"""

from __future__ import annotations

from collections.abc import Iterable

from .errors import DuplicateDrawError, LocationNotFoundError, ShockMarkersExhaustedError
from .models import CityCard, CityDeck, LocationName
from .rules_config import DEFAULT_RULES, RulesConfig

SHOCK_LABEL_PREFIX = "shock-"


def new_city_deck(names: Iterable[str], shock_markers: int) -> CityDeck:
    """Build the full card set: one card per location plus the shock markers."""

    if shock_markers < 0:
        raise ValueError(f"shock marker count must be non-negative, got {shock_markers}")
    cards = [CityCard(label=name) for name in names]
    cards.extend(
        CityCard(label=f"{SHOCK_LABEL_PREFIX}{index}", is_shock=True)
        for index in range(1, shock_markers + 1)
    )
    return CityDeck(cards=cards)


def total_cards(deck: CityDeck) -> int:
    return len(deck.cards)


def shock_marker_count(deck: CityDeck) -> int:
    return sum(1 for card in deck.cards if card.is_shock)


def shock_markers_drawn(deck: CityDeck) -> int:
    markers = {card.label for card in deck.cards if card.is_shock}
    return sum(1 for label in deck.drawn if label in markers)


def cards_per_shock_phase(deck: CityDeck) -> int:
    """Size of one phase; zero when the deck carries no shock markers."""

    markers = shock_marker_count(deck)
    if markers == 0:
        return 0
    return total_cards(deck) // markers


def draw_city(deck: CityDeck, name: str) -> None:
    """Record a dealt location card."""

    if name in deck.drawn:
        raise DuplicateDrawError(f"{name} has already been drawn from the city deck")
    if not any(card.label == name and not card.is_shock for card in deck.cards):
        raise LocationNotFoundError(f"No city called {name} in the city deck")
    deck.drawn.append(name)


def draw_shock_marker(deck: CityDeck) -> str:
    """Record a drawn shock marker and return its label."""

    next_label = next_shock_marker(deck)
    deck.drawn.append(next_label)
    return next_label


def next_shock_marker(deck: CityDeck) -> str:
    """Label of the marker the next shock draw will consume, or raise if none remain."""

    drawn = set(deck.drawn)
    for card in deck.cards:
        if card.is_shock and card.label not in drawn:
            return card.label
    raise ShockMarkersExhaustedError(
        f"Already drawn {shock_markers_drawn(deck)} shock markers this game, "
        "there shouldn't be any more"
    )


def undrawn_locations(deck: CityDeck) -> list[LocationName]:
    drawn = set(deck.drawn)
    return [
        LocationName(card.label)
        for card in deck.cards
        if not card.is_shock and card.label not in drawn
    ]


def probability_of_shock_this_draw(deck: CityDeck, *, rules: RulesConfig = DEFAULT_RULES) -> float:
    """Chance that the next dealt pair of cards contains a shock marker."""

    per_phase = cards_per_shock_phase(deck)
    if per_phase == 0:
        return 0.0
    markers_drawn = shock_markers_drawn(deck)
    if markers_drawn >= shock_marker_count(deck):
        return 0.0
    drawn = len(deck.drawn)
    phase = drawn // per_phase
    if phase != markers_drawn:
        return 0.0
    remaining_in_phase = per_phase - (drawn % per_phase)
    return min(1.0, rules.deck.shock_draw_window / remaining_in_phase)
