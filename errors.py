# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Root of every error raised by the simulator."""


class InvalidConfiguration(EnigmaError):
    """Bad wiring table, reflector, plugboard or machine settings."""


class InvalidSymbol(EnigmaError):
    """A character or signal outside the 26-letter alphabet."""
