"""Infection deck rules built around striations.

Each shock shuffles the infection discard pile and stacks it back on top of
the deck, so the deck is layered into bands (striations) of known members
in unknown order.  ``striations[0]`` is the band the next ordinary draw
comes from; later bands sit beneath it.  Only membership is tracked, never
order within a band.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .errors import DuplicateDrawError, LocationNotFoundError
from .models import InfectionDeck, LocationName, Striation


def new_infection_deck(names: Iterable[str]) -> InfectionDeck:
    """One striation holding every location."""

    return InfectionDeck(striations=[Striation(members={LocationName(name) for name in names})])


def split_infection_deck(names: Sequence[str], sizes: Sequence[int]) -> InfectionDeck:
    """Split ``names`` into consecutive striations of the given sizes.

    Whatever is left after the listed sizes forms one final striation.
    """

    if any(size <= 0 for size in sizes) or sum(sizes) > len(names):
        raise ValueError(f"cannot split {len(names)} locations into striations of {list(sizes)}")
    striations: list[Striation] = []
    start = 0
    for size in sizes:
        striations.append(Striation(members={LocationName(n) for n in names[start : start + size]}))
        start += size
    if start < len(names):
        striations.append(Striation(members={LocationName(n) for n in names[start:]}))
    return InfectionDeck(striations=striations)


def striation_size(striation: Striation) -> int:
    return len(striation.members)


def striation_members(striation: Striation) -> list[LocationName]:
    """Members in a stable display order."""

    return sorted(striation.members)


def bottom_striation(deck: InfectionDeck) -> Striation:
    """The first non-empty striation, or an empty one when nothing is left to draw."""

    for striation in deck.striations:
        if striation.members:
            return striation
    return Striation()


def deepest_striation(deck: InfectionDeck) -> Striation:
    """The last non-empty striation, which holds the physical bottom card."""

    for striation in reversed(deck.striations):
        if striation.members:
            return striation
    return Striation()


def _containing_striation(deck: InfectionDeck, name: str) -> Striation | None:
    for striation in deck.striations:
        if name in striation.members:
            return striation
    return None


def draw_infection(deck: InfectionDeck, name: str) -> None:
    """Move ``name`` from its striation to the top of the discard pile."""

    if name in deck.drawn:
        raise DuplicateDrawError(f"{name} has already been drawn from the infection deck")
    striation = _containing_striation(deck, name)
    if striation is None:
        raise LocationNotFoundError(f"No city called {name} in the infection deck")
    striation.members.discard(LocationName(name))
    deck.drawn.insert(0, LocationName(name))


def check_pull_from_bottom(deck: InfectionDeck, name: str) -> None:
    """Raise unless ``name`` can be pulled by a shock."""

    if name in deck.drawn or name in deepest_striation(deck).members:
        return
    if _containing_striation(deck, name) is not None:
        raise LocationNotFoundError(f"{name} is not at the bottom of the infection deck")
    raise LocationNotFoundError(f"No city called {name} in the infection deck")


def pull_from_bottom(deck: InfectionDeck, name: str) -> None:
    """Pull the card a shock names onto the top of the discard pile.

    Eligible cards are those already in the discard pile, which move to the
    top of the pile, and those still in the deepest striation.  A card in any
    band above the deepest one cannot be the bottom card.
    """

    check_pull_from_bottom(deck, name)
    location = LocationName(name)
    if location in deck.drawn:
        deck.drawn.remove(location)
    else:
        deepest_striation(deck).members.discard(location)
    deck.drawn.insert(0, location)


def shuffle_drawn(deck: InfectionDeck) -> None:
    """Stack the whole discard pile back on top of the deck as one new striation."""

    if not deck.drawn:
        return
    remaining = [striation for striation in deck.striations if striation.members]
    deck.striations = [Striation(members=set(deck.drawn)), *remaining]
    deck.drawn = []


def deck_locations(deck: InfectionDeck) -> list[LocationName]:
    """Every card in the deck, drawn pile first, then striations in order."""

    names: list[LocationName] = list(deck.drawn)
    for striation in deck.striations:
        names.extend(striation_members(striation))
    return names


def probability_of_drawing(deck: InfectionDeck, name: str, infection_rate: int) -> float:
    """Chance ``name`` comes up in the next non-shock infection step."""

    if name in deck.drawn:
        return min(1.0, infection_rate / (1 + len(deck.drawn)))
    bottom = bottom_striation(deck)
    if name in bottom.members:
        return 1.0 / striation_size(bottom)
    return 0.0
