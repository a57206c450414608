"""Location registry: lookups, filters and infection-level transitions.

The catalog is the ``GameState.locations`` arena (name -> :class:`Location`,
in catalog order).  Lookups never copy records; callers receive the arena
entry itself, and only :mod:`pandemic_tracker.domain.session` mutates it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .enums import DiseaseType
from .errors import AmbiguousLocationError, InvalidInfectionLevelError, LocationNotFoundError
from .models import MAX_INFECTION_LEVEL, Location, LocationName

Catalog = Mapping[LocationName, Location]


def get_location(catalog: Catalog, name: str) -> Location:
    """Exact, case-sensitive lookup."""

    location = catalog.get(LocationName(name))
    if location is None:
        raise LocationNotFoundError(f"No city named {name}")
    return location


def get_location_by_prefix(catalog: Catalog, prefix: str) -> Location:
    """Case-insensitive prefix lookup that must match exactly one location."""

    needle = prefix.lower()
    matches = [location for location in catalog.values() if location.name.lower().startswith(needle)]
    if not matches:
        raise LocationNotFoundError(f"{prefix} is not a prefix for any city")
    if len(matches) > 1:
        raise AmbiguousLocationError(f"'{prefix}' is ambiguous")
    return matches[0]


def with_disease(catalog: Catalog, disease: DiseaseType | str) -> list[Location]:
    """Locations carrying ``disease``, in catalog order."""

    return [location for location in catalog.values() if location.disease == disease]


def location_names(catalog: Catalog) -> list[LocationName]:
    return list(catalog.keys())


def infection_sort_key(location: Location) -> tuple[int, str]:
    """Order most-infected first, ties broken by name."""

    return (-location.infection_level, location.name)


def sort_by_infection_level(catalog: Catalog, names: Iterable[str]) -> list[LocationName]:
    """Return ``names`` ordered by :func:`infection_sort_key`."""

    locations = [get_location(catalog, name) for name in names]
    return [location.name for location in sorted(locations, key=infection_sort_key)]


def infect_location(location: Location) -> bool:
    """Add one infection; return ``True`` instead when the location would overflow."""

    if location.infection_level >= MAX_INFECTION_LEVEL:
        return True
    location.infection_level += 1
    return False


def escalate_location(location: Location) -> None:
    location.infection_level = MAX_INFECTION_LEVEL


def set_infection_level(location: Location, level: int) -> None:
    """Overwrite the infection level after validating the 0..3 range."""

    if not 0 <= level <= MAX_INFECTION_LEVEL:
        raise InvalidInfectionLevelError(
            f"infection level must be between 0 and {MAX_INFECTION_LEVEL}, got {level}"
        )
    location.infection_level = level
