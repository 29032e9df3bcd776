"""Cooldown module."""

from .store import CooldownStore, ICooldownStore, format_duration

__all__ = ["CooldownStore", "ICooldownStore", "format_duration"]
