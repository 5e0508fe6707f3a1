# enigma.py  ────────────────────────────────────────────────────────
"""The machine: plugboard → rotors → reflector → rotors → plugboard.

Rotors are held left-to-right as written on a key sheet; the rightmost
rotor is the fastest. A machine object is one session. There is no
reset: build a new one from the same settings to start over.
Not thread-safe; independent machines share nothing.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from debug import Debug
from errors import InvalidConfiguration
from keyboard_and_plugboard import ALPHABET, Keyboard, Plugboard, coerce_symbol
from rotor_and_reflector import Reflector, Rotor

debug = Debug()


class Enigma:
    def __init__(
        self,
        rotors: Sequence[Rotor],
        reflector: Reflector,
        plugboard: Plugboard | None = None,
        *,
        ring_settings: Sequence[int | str] | None = None,
        positions: Sequence[int | str] | None = None,
    ) -> None:
        if not rotors:
            raise InvalidConfiguration("machine needs at least one rotor")
        if len({id(r) for r in rotors}) != len(rotors):
            raise InvalidConfiguration("the same Rotor object appears twice")

        self.kb         = Keyboard()
        self.pb         = plugboard if plugboard is not None else Plugboard()
        self.rotors     = list(rotors)
        self.reflector  = reflector

        # fastest first; a fixed rotor ends the drive chain
        self._chain = self._drive_chain(self.rotors)

        if ring_settings is not None:
            self.set_rings(ring_settings)
        if positions is not None:
            self.set_positions(positions)

    @staticmethod
    def _drive_chain(rotors: list[Rotor]) -> list[Rotor]:
        chain: list[Rotor] = []
        for rotor in reversed(rotors):
            if not rotor.steppable:
                break
            chain.append(rotor)
        driven = len(chain)
        if any(r.steppable for r in rotors[: len(rotors) - driven]):
            raise InvalidConfiguration(
                "a steppable rotor sits left of a fixed one and could never move"
            )
        return chain

    # ── ring & position helpers ─────────────────────────────────

    def set_rings(self, rings: Sequence[int | str]) -> None:
        """Ring settings, left-to-right, 0-based ints or letters."""
        if len(rings) != len(self.rotors):
            raise InvalidConfiguration("ring_settings length mismatch")
        values = [coerce_symbol(r, "Ring setting") for r in rings]
        for rotor, ring in zip(self.rotors, values):
            rotor.set_ring(ring)

    def set_positions(self, positions: Sequence[int | str]) -> None:
        """Rotate each rotor to its start position ("AAA" or [0, 0, 0])."""
        if len(positions) != len(self.rotors):
            raise InvalidConfiguration("positions length mismatch")
        values = [coerce_symbol(p, "Position") for p in positions]
        for rotor, pos in zip(self.rotors, values):
            rotor.set_position(pos)

    @property
    def positions(self) -> tuple[int, ...]:
        return tuple(r.position for r in self.rotors)

    @property
    def window(self) -> str:
        return "".join(ALPHABET[p] for p in self.positions)

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self) -> None:
        """Advance rotors one key-press.

        Each pawl sits above the notch ring of the rotor to its right. When
        it catches a notch it pushes both that rotor and its own one, which
        is where the middle rotor's double step comes from. All notch states
        are read before anything moves.
        """
        chain = self._chain
        if not chain:
            return
        at_notch = [r.is_at_notch() for r in chain]

        advance = [False] * len(chain)
        advance[0] = True
        for i in range(len(chain) - 1):
            if at_notch[i]:
                advance[i] = True
                advance[i + 1] = True

        for rotor, go in zip(chain, advance):
            if go:
                rotor.advance()

    # ── encipher one symbol  ────────────────────────────────────

    def encipher(self, signal: int) -> int:
        """Step, then run one symbol (0–25) round the circuit."""
        self._step_rotors()
        debug.log("stepping", f"Rotor pos {self.window}")

        x = self.pb.swap(signal)

        for rotor in reversed(self.rotors):
            x = rotor.forward(x, rotor.position, rotor.ring_setting)

        x = self.reflector.reflect(x)

        for rotor in self.rotors:
            x = rotor.backward(x, rotor.position, rotor.ring_setting)

        x = self.pb.swap(x)
        debug.log("encipher", f"{signal}->{x}")
        return x

    def encipher_stream(self, signals: Iterable[int]) -> Iterator[int]:
        """Lazy, one output per input; state advances only as it is consumed."""
        for signal in signals:
            yield self.encipher(signal)

    def encipher_letter(self, letter: str) -> str:
        return self.kb.backward(self.encipher(self.kb.forward(letter)))

    def encipher_text(self, text: str) -> str:
        """Letters A–Z only; clean free text with ``utilities.preprocess_message``."""
        signals = [self.kb.forward(ch) for ch in text]
        return "".join(self.kb.backward(s) for s in self.encipher_stream(signals))

    def __repr__(self) -> str:
        names = " ".join(r.name or "?" for r in self.rotors)
        return f"<Enigma {names} / {self.reflector.name or '?'} pos={self.window} plugs={self.pb}>"
