"""Exceptions raised by the deck model and game session.

Every error is local and recoverable: the command layer catches
:class:`TrackerError` and reports ``str(exc)`` to the player.  Operations
validate before they mutate, so a raised error never leaves partial state.
"""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for every recoverable tracker failure."""


class LocationNotFoundError(TrackerError, LookupError):
    """A referenced location (or card to pull) is not in the relevant collection."""


class AmbiguousLocationError(TrackerError, ValueError):
    """A prefix lookup matched more than one location."""


class DuplicateDrawError(TrackerError, ValueError):
    """A location card has already been drawn from the deck in question."""


class ShockMarkersExhaustedError(TrackerError, ValueError):
    """Every shock marker in the city deck has already been drawn."""


class QuarantineAlreadySetError(TrackerError, ValueError):
    """Quarantine requested for a location that is already quarantined."""


class QuarantineNotSetError(TrackerError, ValueError):
    """Quarantine removal requested for a location that is not quarantined."""


class UnknownDiseaseError(TrackerError, LookupError):
    """No metadata is registered for the requested disease tag."""


class InvalidInfectionLevelError(TrackerError, ValueError):
    """An infection level outside the 0..3 range was supplied."""


class InvalidInfectionRateError(TrackerError, ValueError):
    """An infection rate below one was supplied."""


class CatalogError(TrackerError):
    """The location catalog file could not be read or is malformed."""
