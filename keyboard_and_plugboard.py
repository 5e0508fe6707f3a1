# keyboard_and_plugboard.py
from __future__ import annotations

import string
from collections.abc import Iterable, Sequence

from debug import Debug
from errors import InvalidConfiguration, InvalidSymbol

debug = Debug()

ALPHABET = string.ascii_uppercase
SIZE = len(ALPHABET)

_LETTER_TO_SYMBOL: dict[str, int] = {ch: i for i, ch in enumerate(ALPHABET)}


# ── Alphabet / symbol model ───────────────────────────────────────
def to_symbol(letter: str) -> int:
    """'A'..'Z' → 0..25. No case folding; that belongs to text I/O."""
    try:
        return _LETTER_TO_SYMBOL[letter]
    except (KeyError, TypeError):
        raise InvalidSymbol(f"Invalid character {letter!r} for current alphabet.") from None


def to_letter(symbol: int) -> str:
    """0..25 → 'A'..'Z'."""
    if isinstance(symbol, bool) or not isinstance(symbol, int) or not (0 <= symbol < SIZE):
        raise InvalidSymbol(f"Signal {symbol!r} out of range 0–{SIZE - 1}")
    return ALPHABET[symbol]


def coerce_symbol(value: int | str, what: str = "value") -> int:
    """Accept a 0-based integer or a single letter and return the symbol.

    Used for configuration input, so failures are configuration errors.
    """
    if isinstance(value, str):
        if len(value) != 1 or value not in _LETTER_TO_SYMBOL:
            raise InvalidConfiguration(f"{what} {value!r} must be a single letter A–Z")
        return _LETTER_TO_SYMBOL[value]
    if isinstance(value, bool) or not isinstance(value, int) or not (0 <= value < SIZE):
        raise InvalidConfiguration(f"{what} {value!r} must be an integer in 0–{SIZE - 1}")
    return value


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    """Boundary between letters and integer signals."""

    # letter → integer signal
    def forward(self, letter: str) -> int:
        signal = to_symbol(letter)
        debug.log("keyboard", f"{letter}->{signal}")
        return signal

    # integer signal → letter
    def backward(self, signal: int) -> str:
        letter = to_letter(signal)
        debug.log("keyboard", f"{signal}->{letter}")
        return letter

    def __repr__(self) -> str:
        return f"<Keyboard {ALPHABET}>"


# ── Plugboard ─────────────────────────────────────────────────────
Pair = str | tuple[str, str] | tuple[int, int]


class Plugboard:
    def __init__(self, pairs: Sequence[Pair] = ()) -> None:
        self._wiring: list[int] = list(range(SIZE))
        used: set[int] = set()

        for raw in pairs:
            a, b = self._normalise(raw)

            if a == b:
                raise InvalidConfiguration(
                    f"Plugboard cannot map a symbol to itself: {ALPHABET[a]}"
                )
            if a in used or b in used:
                dup = a if a in used else b
                raise InvalidConfiguration(
                    f"Character {ALPHABET[dup]!r} already used in plugboard"
                )

            # passed validation → commit swap
            self._wiring[a], self._wiring[b] = b, a
            used.update((a, b))

    @staticmethod
    def _normalise(raw: Pair) -> tuple[int, int]:
        if isinstance(raw, str):
            if len(raw) != 2:
                raise InvalidConfiguration(f"Pair {raw!r} must be exactly 2 symbols")
            raw = (raw[0], raw[1])
        try:
            a, b = raw
        except (TypeError, ValueError):
            raise InvalidConfiguration(f"Pair {raw!r} must be exactly 2 symbols") from None
        return coerce_symbol(a, "Plug"), coerce_symbol(b, "Plug")

    @classmethod
    def from_string(cls, text: str) -> "Plugboard":
        """Build from the key-sheet notation ``"AB CD EF"``."""
        return cls(text.split())

    # ── signal path ----------------------------------------------
    def swap(self, signal: int) -> int:
        mapped = self._wiring[signal]
        debug.log("plugboard", f"{signal}->{mapped}")
        return mapped

    forward = swap        # alias: signal in
    backward = swap       # alias: signal out

    # ── inspection -----------------------------------------------
    @property
    def wiring(self) -> tuple[int, ...]:
        return tuple(self._wiring)

    def unplugged(self) -> list[bool]:
        """True for every symbol with no cable attached."""
        return [i == j for i, j in enumerate(self._wiring)]

    def connections(self) -> list[tuple[str, str]]:
        """Pairs back out as letters, lower letter first, sorted."""
        return [
            (ALPHABET[i], ALPHABET[j])
            for i, j in enumerate(self._wiring)
            if i < j
        ]

    def __len__(self) -> int:
        return len(self.connections())

    def __str__(self) -> str:
        return " ".join(a + b for a, b in self.connections())

    def __repr__(self) -> str:
        return f"<Plugboard {self}>"


def parse_pairs(tokens: Iterable[str]) -> list[str]:
    """Upper-case and split free-form pair input (``"ab cd"`` or ``["AB"]``)."""
    out: list[str] = []
    for token in tokens:
        out.extend(token.upper().split())
    return out
