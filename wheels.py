# wheels.py
"""Wheel database.

Historical wiring tables live here as plain data; ``Rotor`` and
``Reflector`` carry no hard-coded constants. A :class:`WheelCatalog`
turns a name into a fresh wheel object, and can be extended from JSON so
alternate tables need no code change.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from errors import InvalidConfiguration
from rotor_and_reflector import Reflector, Rotor

_num_re = re.compile(r"^([A-Za-z]+)(\d+)$")
_ROMAN = {"I": 1, "II": 2, "III": 3, "IV": 4, "V": 5, "VI": 6, "VII": 7, "VIII": 8}


@dataclass(frozen=True, slots=True)
class RotorSpec:
    wiring: str
    notches: str = ""
    steppable: bool = True


# ────────────────────────────────────────────────────────────────────────
#  Historical tables
# ────────────────────────────────────────────────────────────────────────

ROTORS: Dict[str, RotorSpec] = {
    "I":        RotorSpec("EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    "II":       RotorSpec("AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    "III":      RotorSpec("BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    "IV":       RotorSpec("ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    "V":        RotorSpec("VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    # naval wheels carry two notches
    "VI":       RotorSpec("JPGVOUMFYQBENHZRDKASXLICTW", "ZM"),
    "VII":      RotorSpec("NZJHGRCXMYSWBOUFAIVLPEKQDT", "ZM"),
    "VIII":     RotorSpec("FKQHTLXOCBJSPDZRAMEWNIUYGV", "ZM"),
    # M4 thin wheels: never step
    "BETA":     RotorSpec("LEYJVCNIXWPBQMDRTAKZGFUHOS", "", steppable=False),
    "GAMMA":    RotorSpec("FSOKANUERHMBTIYCWLQPZXVGJD", "", steppable=False),
    "IDENTITY": RotorSpec("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "A"),
}

REFLECTORS: Dict[str, str] = {
    "A":      "EJMZALYXVBWFCRQUONTSPIKHGD",
    "B":      "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "C":      "FVPJIAOYEDRZXWGCTKUQSBNMHL",
    "B-THIN": "ENKQAUYWJICOPBLMDXZVFTHRGS",
    "C-THIN": "RDOBJNTKVEHMLFCWZAXGYIPSUQ",
    "MIRROR": "ZYXWVUTSRQPONMLKJIHGFEDCBA",
}


def _require_name(name: Any, what: str) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidConfiguration(f"{what} name {name!r} must be a non-empty string")
    return name.upper()


def _section(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = payload.get(key, {})
    if not isinstance(section, dict):
        raise InvalidConfiguration(f"'{key}' must map names to wirings, got {type(section).__name__}")
    return section


def _nat_key(name: str):
    """Natural-sort wheel names so I, II, ..., VIII come before BETA, R1, R2, R10."""
    if name in _ROMAN:
        return (0, "", _ROMAN[name])
    m = _num_re.match(name)
    if m:
        prefix, num = m.groups()
        return (1, prefix, int(num))
    return (2, name, 0)


class WheelCatalog:
    """Named wiring tables → fresh Rotor / Reflector objects."""

    def __init__(
        self,
        rotors: Dict[str, RotorSpec] | None = None,
        reflectors: Dict[str, str] | None = None,
    ) -> None:
        self.rotors: Dict[str, RotorSpec] = {}
        self.reflectors: Dict[str, str] = {}
        for name, spec in (ROTORS if rotors is None else rotors).items():
            self.add_rotor(name, spec)
        for name, wiring in (REFLECTORS if reflectors is None else reflectors).items():
            self.add_reflector(name, wiring)

    # ── registration ─────────────────────────────────────────────
    def add_rotor(self, name: str, spec: RotorSpec) -> None:
        # build once so a broken table fails here, not at first use
        key = _require_name(name, "Rotor")
        Rotor(spec.wiring, spec.notches, name=key)
        self.rotors[key] = spec

    def add_reflector(self, name: str, wiring: str) -> None:
        key = _require_name(name, "Reflector")
        Reflector(wiring, name=key)
        self.reflectors[key] = wiring

    def update_from_dict(self, payload: Dict[str, Any]) -> "WheelCatalog":
        """Merge ``{"rotors": {...}, "reflectors": {...}}`` into the catalog."""
        for name, entry in _section(payload, "rotors").items():
            if isinstance(entry, str):
                spec = RotorSpec(entry)
            elif isinstance(entry, dict) and "wiring" in entry:
                spec = RotorSpec(
                    entry["wiring"],
                    entry.get("notches", ""),
                    bool(entry.get("steppable", True)),
                )
            else:
                raise InvalidConfiguration(f"Rotor entry {name!r} needs a 'wiring' field")
            self.add_rotor(name, spec)

        for name, wiring in _section(payload, "reflectors").items():
            self.add_reflector(name, wiring)
        return self

    @classmethod
    def from_json(cls, path: str | Path, *, include_builtin: bool = True) -> "WheelCatalog":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise InvalidConfiguration(f"{path}: wheel file must hold a JSON object")
        catalog = cls() if include_builtin else cls({}, {})
        return catalog.update_from_dict(data)

    # ── lookup ───────────────────────────────────────────────────
    def rotor_names(self) -> List[str]:
        return sorted(self.rotors, key=_nat_key)

    def reflector_names(self) -> List[str]:
        return sorted(self.reflectors, key=_nat_key)

    def rotor_spec(self, name: str) -> RotorSpec:
        try:
            return self.rotors[_require_name(name, "Rotor")]
        except KeyError:
            raise InvalidConfiguration(
                f"Unknown rotor {name!r}. Expected one of {self.rotor_names()}"
            ) from None

    def make_rotor(
        self,
        name: str,
        ring_setting: int | str = 0,
        position: int | str = 0,
        *,
        steppable: bool | None = None,
    ) -> Rotor:
        spec = self.rotor_spec(name)
        return Rotor(
            spec.wiring,
            spec.notches,
            ring_setting=ring_setting,
            position=position,
            steppable=spec.steppable if steppable is None else steppable,
            name=name.upper(),
        )

    def make_reflector(self, name: str) -> Reflector:
        try:
            wiring = self.reflectors[_require_name(name, "Reflector")]
        except KeyError:
            raise InvalidConfiguration(
                f"Unknown reflector {name!r}. Expected one of {self.reflector_names()}"
            ) from None
        return Reflector(wiring, name=name.upper())


DEFAULT_CATALOG = WheelCatalog()
