"""Deck model and probability rules for the pandemic tracker.

The package is purely in-memory and exposes:

* Dataclasses describing the tracked game state (see :mod:`models`).
* Enumerations, error kinds and rule configuration objects.
* Rule functions for the location registry, the city deck, the striated
  infection deck, the probability engine and the game session.

Persistence and the command surfaces live outside this package and only
call into :mod:`session`.
"""

from . import (
    city_deck,
    diseases,
    enums,
    errors,
    infection_deck,
    locations,
    models,
    probability,
    rules_config,
    session,
)

__all__ = [
    "city_deck",
    "diseases",
    "enums",
    "errors",
    "infection_deck",
    "locations",
    "models",
    "probability",
    "rules_config",
    "session",
]
