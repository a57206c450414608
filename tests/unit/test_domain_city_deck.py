"""Tests for the city deck and its shock phase arithmetic."""

from __future__ import annotations

import pytest

from pandemic_tracker.domain import city_deck
from pandemic_tracker.domain.errors import (
    DuplicateDrawError,
    LocationNotFoundError,
    ShockMarkersExhaustedError,
)


def _names(count: int) -> list[str]:
    return [f"City {index:02d}" for index in range(count)]


def test_new_deck_counts():
    deck = city_deck.new_city_deck(["A", "B", "C"], 1)
    assert city_deck.total_cards(deck) == 4
    assert city_deck.shock_marker_count(deck) == 1
    assert city_deck.cards_per_shock_phase(deck) == 4
    assert city_deck.shock_markers_drawn(deck) == 0


def test_negative_marker_count_rejected():
    with pytest.raises(ValueError):
        city_deck.new_city_deck(["A"], -1)


def test_draw_rejects_duplicates_and_unknown_names():
    deck = city_deck.new_city_deck(["A", "B"], 1)
    city_deck.draw_city(deck, "A")
    with pytest.raises(DuplicateDrawError, match="already been drawn"):
        city_deck.draw_city(deck, "A")
    with pytest.raises(LocationNotFoundError):
        city_deck.draw_city(deck, "Z")
    with pytest.raises(LocationNotFoundError):
        city_deck.draw_city(deck, "shock-1")
    assert deck.drawn == ["A"]


def test_shock_markers_exhaust():
    deck = city_deck.new_city_deck(["A", "B"], 2)
    assert city_deck.draw_shock_marker(deck) == "shock-1"
    assert city_deck.draw_shock_marker(deck) == "shock-2"
    with pytest.raises(ShockMarkersExhaustedError):
        city_deck.draw_shock_marker(deck)
    assert city_deck.shock_markers_drawn(deck) == 2
    assert len(deck.drawn) == 2


def test_phase_probability_example():
    deck = city_deck.new_city_deck(_names(90), 6)
    assert city_deck.total_cards(deck) == 96
    assert city_deck.cards_per_shock_phase(deck) == 16
    for name in _names(5):
        city_deck.draw_city(deck, name)
    assert city_deck.probability_of_shock_this_draw(deck) == pytest.approx(2 / 11)
    assert city_deck.probability_of_shock_this_draw(deck) == pytest.approx(0.1818, abs=1e-4)


def test_phase_probability_zero_once_phase_marker_drawn():
    deck = city_deck.new_city_deck(_names(90), 6)
    city_deck.draw_city(deck, "City 00")
    city_deck.draw_shock_marker(deck)
    assert city_deck.probability_of_shock_this_draw(deck) == 0.0


def test_next_phase_reopens_shock_risk():
    deck = city_deck.new_city_deck(_names(90), 6)
    for name in _names(15):
        city_deck.draw_city(deck, name)
    city_deck.draw_shock_marker(deck)
    assert len(deck.drawn) == 16
    assert city_deck.probability_of_shock_this_draw(deck) == pytest.approx(2 / 16)


def test_probability_capped_at_one_on_last_card_of_phase():
    deck = city_deck.new_city_deck(_names(90), 6)
    for name in _names(15):
        city_deck.draw_city(deck, name)
    assert city_deck.probability_of_shock_this_draw(deck) == 1.0


def test_probability_zero_without_markers_or_after_all_drawn():
    assert city_deck.probability_of_shock_this_draw(city_deck.new_city_deck(["A"], 0)) == 0.0

    deck = city_deck.new_city_deck(["A", "B"], 1)
    city_deck.draw_shock_marker(deck)
    city_deck.draw_city(deck, "A")
    city_deck.draw_city(deck, "B")
    assert city_deck.probability_of_shock_this_draw(deck) == 0.0


def test_undrawn_locations():
    deck = city_deck.new_city_deck(["A", "B", "C"], 1)
    city_deck.draw_city(deck, "B")
    assert city_deck.undrawn_locations(deck) == ["A", "C"]
