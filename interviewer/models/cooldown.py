"""Cooldown-related data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CooldownStatus:
    """Whether a new session is blocked, and for how long."""

    active: bool
    remaining_ms: int


@dataclass(frozen=True)
class DurationParts:
    """A millisecond count decomposed into calendar units."""

    days: int
    hours: int
    minutes: int
    seconds: int
