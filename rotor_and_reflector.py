# rotor_and_reflector.py
from __future__ import annotations

from collections.abc import Iterable, Sequence

from debug import Debug
from errors import InvalidConfiguration
from keyboard_and_plugboard import ALPHABET, SIZE, coerce_symbol

debug = Debug()


def parse_wiring(wiring: str | Sequence[int]) -> list[int]:
    """Turn ``"EKMF..."`` or a list of ints into a 26-entry integer table."""
    if isinstance(wiring, str):
        if len(wiring) != SIZE or any(c not in ALPHABET for c in wiring):
            raise InvalidConfiguration(
                f"Wiring {wiring!r} must be {SIZE} letters A–Z"
            )
        return [ALPHABET.index(c) for c in wiring]

    if not isinstance(wiring, Sequence):
        raise InvalidConfiguration(
            f"Wiring {wiring!r} must be a letter string or a list of {SIZE} ints"
        )
    table = list(wiring)
    if len(table) != SIZE:
        raise InvalidConfiguration(f"Wiring must have {SIZE} entries, got {len(table)}")
    return [coerce_symbol(v, "Wiring entry") for v in table]


def parse_notches(notches: str | Iterable[int | str]) -> frozenset[int]:
    """``"ZM"`` or ``[12, 25]`` → notch positions."""
    if isinstance(notches, str):
        notches = list(notches)
    elif not isinstance(notches, (list, tuple, set, frozenset)):
        raise InvalidConfiguration(
            f"Notches {notches!r} must be a letter string or a list of positions"
        )
    return frozenset(coerce_symbol(n, "Notch") for n in notches)


def _shifted(sig: int, position: int, ring_setting: int, table: list[int]) -> int:
    shift = position - ring_setting
    mapped = table[(sig + shift) % SIZE]
    return (mapped - shift) % SIZE


class Rotor:
    """One wheel: fixed wiring, ring offset, rotating position, notches.

    ``steppable=False`` pins the rotor in place (the thin fourth wheel of
    the naval machine never moves).
    """

    def __init__(
        self,
        wiring: str | Sequence[int],
        notches: str | Iterable[int | str] = "",
        *,
        ring_setting: int | str = 0,
        position: int | str = 0,
        steppable: bool = True,
        name: str = "",
    ) -> None:
        fwd = parse_wiring(wiring)
        if sorted(fwd) != list(range(SIZE)):
            raise InvalidConfiguration("wiring must be a permutation of alphabet")

        # integer lookup tables
        self._fwd = fwd
        self._rev = [0] * SIZE
        for i, j in enumerate(fwd):
            self._rev[j] = i

        self.name = name
        self.notches = parse_notches(notches)
        self.ring_setting = coerce_symbol(ring_setting, "Ring setting")
        self.position = coerce_symbol(position, "Position")
        self.steppable = steppable

    # ── ring & position helpers ──────────────────────────────────
    def set_ring(self, ring: int | str) -> "Rotor":
        self.ring_setting = coerce_symbol(ring, "Ring setting")
        return self

    def set_position(self, position: int | str) -> "Rotor":
        self.position = coerce_symbol(position, "Position")
        return self

    @property
    def window(self) -> str:
        """Letter currently showing in the machine's window."""
        return ALPHABET[self.position]

    # ── stepping --------------------------------------------------
    def is_at_notch(self) -> bool:
        return self.position in self.notches

    def advance(self) -> None:
        self.position = (self.position + 1) % SIZE
        debug.log("rotor", f"{self.name or 'rotor'} -> {self.window}")

    # ── signal paths ---------------------------------------------
    def forward(self, sig: int, position: int | None = None, ring_setting: int | None = None) -> int:
        """Right-to-left pass. Position/ring default to the rotor's own state."""
        return _shifted(
            sig,
            self.position if position is None else position,
            self.ring_setting if ring_setting is None else ring_setting,
            self._fwd,
        )

    def backward(self, sig: int, position: int | None = None, ring_setting: int | None = None) -> int:
        """Left-to-right pass; exact inverse of :meth:`forward`."""
        return _shifted(
            sig,
            self.position if position is None else position,
            self.ring_setting if ring_setting is None else ring_setting,
            self._rev,
        )

    @property
    def wiring(self) -> str:
        return "".join(ALPHABET[i] for i in self._fwd)

    def __repr__(self) -> str:
        label = f"{self.name} " if self.name else ""
        return f"<Rotor {label}pos={self.window} ring={ALPHABET[self.ring_setting]}>"


class Reflector:
    """Fixed involution with no fixed points. No moving state."""

    def __init__(self, wiring: str | Sequence[int], *, name: str = "") -> None:
        table = parse_wiring(wiring)

        # ensure involution property (w[i] = j ⇒ w[j] = i) and no self-maps
        for i, j in enumerate(table):
            if i == j:
                raise InvalidConfiguration(
                    f"Reflector maps {ALPHABET[i]!r} to itself"
                )
            if table[j] != i:
                raise InvalidConfiguration(
                    "Reflector wiring must be an involution with no fixed points"
                )

        self.name = name
        self._map = table

    def reflect(self, sig: int) -> int:
        mapped = self._map[sig]
        debug.log("reflector", f"{sig}->{mapped}")
        return mapped

    @property
    def wiring(self) -> str:
        return "".join(ALPHABET[i] for i in self._map)

    def __repr__(self) -> str:
        return f"<Reflector {self.name or self.wiring}>"
