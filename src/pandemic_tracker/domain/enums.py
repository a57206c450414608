"""Enumerations shared across the tracker domain."""

from __future__ import annotations

from enum import StrEnum


class DiseaseType(StrEnum):
    """Category tag assigned to every location in the catalog."""

    YELLOW = "yellow"
    RED = "red"
    BLACK = "black"
    BLUE = "blue"
    FADED = "faded"


class ProbabilityTier(StrEnum):
    """Risk band used when rendering per-location draw probabilities."""

    SAFE = "safe"
    CAUTION = "caution"
    CRITICAL = "critical"


class BandKind(StrEnum):
    """Kinds of band reported for striated rendering."""

    DRAWN = "drawn"
    STRIATION = "striation"
