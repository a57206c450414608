"""Declarative rule configuration for the deck model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DeckRules:
    """City and infection deck constants."""

    shock_markers_per_game: int = 5
    # two city cards are dealt per turn, so shock risk is judged over both
    shock_draw_window: int = 2
    default_infection_rate: int = 2


@dataclass(frozen=True, slots=True)
class ProbabilityRules:
    """Thresholds used to band per-location probabilities."""

    critical_threshold: float = 0.8


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    deck: DeckRules = DeckRules()
    probability: ProbabilityRules = ProbabilityRules()


DEFAULT_RULES = RulesConfig()
