"""Text command surface over the game session.

Each command line is ``<verb> [argument]``; location arguments accept the
full name or any unambiguous case-insensitive prefix.  :func:`execute` never
raises for player mistakes: every domain error comes back as a failed
:class:`CommandResult` carrying the error text.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from pandemic_tracker.domain import session
from pandemic_tracker.domain.errors import TrackerError
from pandemic_tracker.domain.locations import get_location_by_prefix
from pandemic_tracker.domain.models import GameState, Location, LocationName
from pandemic_tracker.domain.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandResult:
    """Outcome of one command line."""

    success: bool
    message: str
    mutated: bool = False
    data: dict[str, object] = field(default_factory=dict)


class CommandError(TrackerError):
    """Malformed or unknown command line."""


Handler = Callable[[GameState, str, RulesConfig], CommandResult]


def resolve_location(state: GameState, text: str) -> Location:
    """Exact name first, then unique prefix."""

    exact = state.locations.get(LocationName(text))
    if exact is not None:
        return exact
    return get_location_by_prefix(state.locations, text)


def _require_argument(verb: str, argument: str) -> str:
    if not argument:
        raise CommandError(f"{verb} needs a location")
    return argument


def _infect(state: GameState, argument: str, _rules: RulesConfig) -> CommandResult:
    location = resolve_location(state, _require_argument("infect", argument))
    result = session.infect(state, location.name)
    return CommandResult(
        True,
        result.detail,
        mutated=True,
        data={
            "location": result.location,
            "infection_level": result.infection_level,
            "outbreak": result.outbreak,
            "quarantine_absorbed": result.quarantine_absorbed,
        },
    )


def _shock(state: GameState, argument: str, _rules: RulesConfig) -> CommandResult:
    location = resolve_location(state, _require_argument("shock", argument))
    result = session.cause_shock(state, location.name)
    return CommandResult(
        True,
        result.detail,
        mutated=True,
        data={
            "location": result.location,
            "marker": result.marker,
            "infection_level": result.infection_level,
            "outbreak": result.outbreak,
            "quarantine_absorbed": result.quarantine_absorbed,
            "new_striation_size": result.new_striation_size,
        },
    )


def _quarantine(state: GameState, argument: str, _rules: RulesConfig) -> CommandResult:
    location = resolve_location(state, _require_argument("quarantine", argument))
    session.quarantine(state, location.name)
    return CommandResult(True, f"Quarantined {location.name}", mutated=True)


def _unquarantine(state: GameState, argument: str, _rules: RulesConfig) -> CommandResult:
    location = resolve_location(state, _require_argument("unquarantine", argument))
    session.remove_quarantine(state, location.name)
    return CommandResult(True, f"Removed quarantine from {location.name}", mutated=True)


def _city(state: GameState, argument: str, _rules: RulesConfig) -> CommandResult:
    target = _require_argument("city", argument)
    if target.lower() in {"shock", "epidemic"}:
        marker = session.draw_shock_marker(state)
        return CommandResult(True, f"Drew shock marker {marker}", mutated=True)
    location = resolve_location(state, target)
    session.draw_city_card(state, location.name)
    return CommandResult(True, f"Drew city card {location.name}", mutated=True)


def _rate(state: GameState, argument: str, _rules: RulesConfig) -> CommandResult:
    try:
        rate = int(argument)
    except ValueError as exc:
        raise CommandError(f"rate needs a whole number, got {argument!r}") from exc
    session.set_infection_rate(state, rate)
    return CommandResult(True, f"Infection rate is now {rate}", mutated=True)


def _set_level(state: GameState, argument: str, _rules: RulesConfig) -> CommandResult:
    # location names may contain spaces, the level is always the last word
    target, _, level_text = argument.rpartition(" ")
    if not target or not level_text:
        raise CommandError("set needs a location and a level")
    try:
        level = int(level_text)
    except ValueError as exc:
        raise CommandError(f"set needs a whole number level, got {level_text!r}") from exc
    location = resolve_location(state, target.strip())
    session.set_infection_level(state, location.name, level)
    return CommandResult(
        True,
        f"{location.name} is now at level {level}",
        mutated=True,
        data={"location": location.name, "infection_level": level},
    )


def _disease(state: GameState, argument: str, _rules: RulesConfig) -> CommandResult:
    if not argument:
        raise CommandError("disease needs a disease name")
    data = session.get_disease(state, argument.lower())
    return CommandResult(
        True,
        f"{data.display_name} ({data.color})",
        data={"disease": data.type, "display_name": data.display_name, "color": data.color},
    )


def _status(state: GameState, argument: str, rules: RulesConfig) -> CommandResult:
    names = None
    if argument:
        names = [resolve_location(state, part.strip()).name for part in argument.split(",")]
    rows = session.location_report(state, names, rules=rules)
    lines = [
        f"{row.name} {row.probability:.2f} [{row.tier}] level={row.infection_level}"
        + (" quarantined" if row.quarantined else "")
        for row in rows
    ]
    return CommandResult(
        True,
        "\n".join(lines),
        data={"outbreaks": state.outbreaks, "infection_rate": state.infection_rate},
    )


COMMANDS: dict[str, Handler] = {
    "infect": _infect,
    "i": _infect,
    "shock": _shock,
    "epidemic": _shock,
    "e": _shock,
    "quarantine": _quarantine,
    "q": _quarantine,
    "unquarantine": _unquarantine,
    "uq": _unquarantine,
    "city": _city,
    "c": _city,
    "rate": _rate,
    "set": _set_level,
    "disease": _disease,
    "d": _disease,
    "status": _status,
    "s": _status,
}


def execute(state: GameState, line: str, *, rules: RulesConfig = DEFAULT_RULES) -> CommandResult:
    """Parse and run one command line against ``state``."""

    text = line.strip()
    if not text:
        return CommandResult(False, "empty command")
    verb, _, argument = text.partition(" ")
    handler = COMMANDS.get(verb.lower())
    if handler is None:
        return CommandResult(False, f"Unrecognized command {verb}")
    try:
        return handler(state, argument.strip(), rules)
    except TrackerError as exc:
        logger.debug("command %r rejected: %s", text, exc)
        return CommandResult(False, str(exc))
