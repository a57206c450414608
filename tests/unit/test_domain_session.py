"""Tests for game session operations."""

from __future__ import annotations

import copy

import pytest

from pandemic_tracker.domain import infection_deck
from pandemic_tracker.domain import models as dm
from pandemic_tracker.domain import session
from pandemic_tracker.domain.enums import BandKind, DiseaseType, ProbabilityTier
from pandemic_tracker.domain.errors import (
    DuplicateDrawError,
    InvalidInfectionRateError,
    LocationNotFoundError,
    QuarantineAlreadySetError,
    QuarantineNotSetError,
    ShockMarkersExhaustedError,
    UnknownDiseaseError,
)
from pandemic_tracker.factory import new_game

NAMES = ("Atlanta", "Chicago", "Lima", "Tokyo")


def _state(shock_markers: int = 2, striation_sizes: list[int] | None = None) -> dm.GameState:
    arena = {
        dm.LocationName(name): dm.Location(
            name=dm.LocationName(name),
            disease=DiseaseType.RED if name == "Tokyo" else DiseaseType.BLUE,
        )
        for name in NAMES
    }
    return new_game(
        "Session",
        arena,
        shock_markers=shock_markers,
        infection_rate=2,
        striation_sizes=striation_sizes,
    )


def _assert_partition(state: dm.GameState) -> None:
    cards = infection_deck.deck_locations(state.infection_deck)
    assert sorted(cards) == sorted(state.locations)


def test_infect_increments_level():
    state = _state()
    result = session.infect(state, "Atlanta")
    assert result.infection_level == 1
    assert result.outbreak is False
    assert state.locations["Atlanta"].infection_level == 1
    assert state.infection_deck.drawn == ["Atlanta"]


def test_infect_twice_fails_without_mutation():
    state = _state()
    session.infect(state, "Atlanta")
    snapshot = copy.deepcopy(state)
    with pytest.raises(DuplicateDrawError):
        session.infect(state, "Atlanta")
    assert state == snapshot


def test_infect_unknown_location():
    state = _state()
    with pytest.raises(LocationNotFoundError):
        session.infect(state, "Paris")


def test_infect_quarantined_location_absorbs_infection():
    state = _state()
    session.quarantine(state, "Lima")
    result = session.infect(state, "Lima")
    assert result.quarantine_absorbed is True
    assert state.locations["Lima"].quarantined is False
    assert state.locations["Lima"].infection_level == 0
    assert "Lima" in state.infection_deck.drawn


def test_infect_at_max_level_signals_outbreak():
    state = _state()
    session.set_infection_level(state, "Tokyo", 3)
    result = session.infect(state, "Tokyo")
    assert result.outbreak is True
    assert result.infection_level == 3
    assert state.outbreaks == 1


def test_cause_shock_restacks_discard_pile():
    state = _state()
    session.infect(state, "Atlanta")
    session.infect(state, "Chicago")
    result = session.cause_shock(state, "Tokyo")

    assert result.marker == "shock-1"
    assert result.infection_level == 3
    assert result.new_striation_size == 3
    assert state.infection_deck.striations[0].members == {"Atlanta", "Chicago", "Tokyo"}
    assert state.infection_deck.drawn == []
    assert state.city_deck.drawn == ["shock-1"]
    _assert_partition(state)


def test_cause_shock_on_drawn_location():
    state = _state()
    session.infect(state, "Atlanta")
    session.cause_shock(state, "Atlanta")
    assert state.infection_deck.striations[0].members == {"Atlanta"}
    assert state.locations["Atlanta"].infection_level == 3
    _assert_partition(state)


def test_cause_shock_on_infected_location_counts_outbreak():
    state = _state()
    session.set_infection_level(state, "Lima", 1)
    result = session.cause_shock(state, "Lima")
    assert result.outbreak is True
    assert state.outbreaks == 1


def test_cause_shock_quarantined_still_restacks():
    state = _state()
    session.infect(state, "Atlanta")
    session.quarantine(state, "Tokyo")
    result = session.cause_shock(state, "Tokyo")
    assert result.quarantine_absorbed is True
    assert state.locations["Tokyo"].infection_level == 0
    assert state.locations["Tokyo"].quarantined is False
    assert state.infection_deck.drawn == []
    assert state.infection_deck.striations[0].members == {"Atlanta", "Tokyo"}


def test_cause_shock_exhausted_leaves_state_unchanged():
    state = _state(shock_markers=1)
    session.cause_shock(state, "Atlanta")
    snapshot = copy.deepcopy(state)
    with pytest.raises(ShockMarkersExhaustedError):
        session.cause_shock(state, "Chicago")
    assert state == snapshot


def test_cause_shock_unknown_location_consumes_no_marker():
    state = _state()
    with pytest.raises(LocationNotFoundError):
        session.cause_shock(state, "Paris")
    assert state.city_deck.drawn == []


def test_cause_shock_rejects_card_in_next_draw_band():
    state = _state(striation_sizes=[2])
    snapshot = copy.deepcopy(state)
    with pytest.raises(LocationNotFoundError):
        session.cause_shock(state, "Atlanta")
    assert state == snapshot

    result = session.cause_shock(state, "Tokyo")
    assert result.infection_level == 3
    assert [s.members for s in state.infection_deck.striations] == [
        {"Tokyo"},
        {"Atlanta", "Chicago"},
        {"Lima"},
    ]
    _assert_partition(state)


def test_quarantine_toggles():
    state = _state()
    session.quarantine(state, "Chicago")
    with pytest.raises(QuarantineAlreadySetError, match="already quarantined"):
        session.quarantine(state, "Chicago")
    session.remove_quarantine(state, "Chicago")
    with pytest.raises(QuarantineNotSetError, match="not quarantined"):
        session.remove_quarantine(state, "Chicago")


def test_can_outbreak_rules():
    state = _state(striation_sizes=[2])
    session.set_infection_level(state, "Atlanta", 3)
    session.set_infection_level(state, "Chicago", 1)
    session.set_infection_level(state, "Lima", 3)

    assert session.can_outbreak(state, "Atlanta") is True
    assert session.can_outbreak(state, "Chicago") is True
    assert session.can_outbreak(state, "Tokyo") is False
    # Lima sits outside the bottom striation, so its probability is zero
    assert session.can_outbreak(state, "Lima") is False


def test_can_outbreak_requires_nonzero_probability():
    state = _state()
    session.set_infection_level(state, "Atlanta", 3)
    session.quarantine(state, "Atlanta")
    assert session.can_outbreak(state, "Atlanta") is False


def test_level_three_in_discard_pile_can_outbreak():
    state = _state()
    session.set_infection_level(state, "Atlanta", 2)
    session.infect(state, "Atlanta")
    assert session.can_outbreak(state, "Atlanta") is True


def test_draw_city_card_and_marker():
    state = _state()
    session.draw_city_card(state, "Lima")
    assert session.draw_shock_marker(state) == "shock-1"
    assert state.city_deck.drawn == ["Lima", "shock-1"]
    with pytest.raises(LocationNotFoundError):
        session.draw_city_card(state, "Paris")


def test_set_infection_rate():
    state = _state()
    session.set_infection_rate(state, 3)
    assert state.infection_rate == 3
    with pytest.raises(InvalidInfectionRateError):
        session.set_infection_rate(state, 0)
    assert state.infection_rate == 3


def test_get_disease():
    state = _state()
    assert session.get_disease(state, DiseaseType.RED).display_name == "Red"
    with pytest.raises(UnknownDiseaseError):
        session.get_disease(state, "green")


def test_location_report_orders_most_infected_first():
    state = _state(striation_sizes=[3])
    session.set_infection_level(state, "Lima", 2)
    session.quarantine(state, "Chicago")
    rows = session.location_report(state)

    assert [row.name for row in rows] == ["Lima", "Atlanta", "Chicago", "Tokyo"]
    by_name = {row.name: row for row in rows}
    assert by_name["Chicago"].tier is ProbabilityTier.SAFE
    assert by_name["Chicago"].probability == 0.0
    assert by_name["Tokyo"].tier is ProbabilityTier.SAFE
    assert by_name["Lima"].tier is ProbabilityTier.CAUTION
    assert by_name["Lima"].can_outbreak is True


def test_location_report_for_subset():
    state = _state()
    rows = session.location_report(state, ["Tokyo", "Atlanta"])
    assert [row.name for row in rows] == ["Atlanta", "Tokyo"]


def test_striation_report_bands():
    state = _state()
    session.infect(state, "Atlanta")
    session.cause_shock(state, "Tokyo")
    session.infect(state, "Chicago")

    bands = session.striation_report(state)
    assert [band.kind for band in bands] == [BandKind.DRAWN, BandKind.STRIATION, BandKind.STRIATION]
    assert [row.name for row in bands[0].locations] == ["Chicago"]
    assert bands[1].index == 0
    assert {row.name for row in bands[1].locations} == {"Atlanta", "Tokyo"}
    assert [row.name for row in bands[2].locations] == ["Lima"]
    assert bands[0].locations[0].tier is ProbabilityTier.CRITICAL
