"""Combine city deck phase state and infection deck striations into draw odds.

    P(location) = P(shock) * P(pulled | shock) + (1 - P(shock)) * P(drawn | no shock)

A location that is quarantined, or that sits neither in the bottom striation
nor in the discard pile, is structurally excluded: its probability is exactly
zero and it is classified without looking at the arithmetic at all.
"""

from __future__ import annotations

from .city_deck import probability_of_shock_this_draw
from .enums import ProbabilityTier
from .infection_deck import bottom_striation, probability_of_drawing, striation_size
from .locations import get_location
from .models import GameState
from .rules_config import DEFAULT_RULES, RulesConfig


def is_excluded(state: GameState, name: str) -> bool:
    """True when ``name`` cannot come up in the next draw window."""

    location = get_location(state.locations, name)
    if location.quarantined:
        return True
    deck = state.infection_deck
    if name in bottom_striation(deck).members:
        return False
    return not (name in deck.drawn and state.infection_rate > 0)


def _shock_branch(state: GameState, name: str) -> float:
    deck = state.infection_deck
    bottom = bottom_striation(deck)
    if name in bottom.members:
        return 1.0 / striation_size(bottom)
    if name in deck.drawn:
        return min(1.0, state.infection_rate / (1 + len(deck.drawn)))
    return 0.0


def probability_of_location(
    state: GameState,
    name: str,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> float:
    """Probability in ``[0, 1]`` that ``name`` is drawn in the next window."""

    if is_excluded(state, name):
        return 0.0
    p_shock = probability_of_shock_this_draw(state.city_deck, rules=rules)
    p_shock_branch = _shock_branch(state, name)
    p_no_shock_branch = probability_of_drawing(state.infection_deck, name, state.infection_rate)
    probability = p_shock * p_shock_branch + (1.0 - p_shock) * p_no_shock_branch
    return max(0.0, min(1.0, probability))


def classify_probability(
    probability: float,
    *,
    excluded: bool,
    rules: RulesConfig = DEFAULT_RULES,
) -> ProbabilityTier:
    """Band a probability into the safe / caution / critical tiers."""

    if excluded:
        return ProbabilityTier.SAFE
    if probability > rules.probability.critical_threshold:
        return ProbabilityTier.CRITICAL
    return ProbabilityTier.CAUTION
