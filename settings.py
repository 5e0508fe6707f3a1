# settings.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from enigma import Enigma
from errors import InvalidConfiguration
from keyboard_and_plugboard import ALPHABET, Plugboard, coerce_symbol
from wheels import DEFAULT_CATALOG, WheelCatalog

REQUIRED_KEYS = {"rotors", "reflector"}


def _as_letters(values: List[int | str], what: str) -> str:
    return "".join(ALPHABET[coerce_symbol(v, what)] for v in values)


def _split_setting(value: Any) -> List[int | str]:
    # "ADU" → ["A", "D", "U"]; lists pass through
    if isinstance(value, str):
        return list(value.replace(" ", ""))
    if isinstance(value, (list, tuple)):
        return list(value)
    raise InvalidConfiguration(f"Expected a letter string or a list, got {value!r}")


def _split_names(value: Any, what: str) -> List[str]:
    # "I II III" or ["I", "II", "III"]
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return list(value)
    raise InvalidConfiguration(f"'{what}' must be a string or a list of strings, got {value!r}")


@dataclass(slots=True)
class MachineSettings:
    """Everything a key sheet specifies for one session.

    Rotor names, rings and positions are left-to-right. Rings and positions
    accept 0-based ints or letters; empty means all ``A``.
    """

    rotors: List[str]
    reflector: str
    ring_settings: List[int | str] = field(default_factory=list)
    positions: List[int | str] = field(default_factory=list)
    plugs: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.rotors:
            raise InvalidConfiguration("settings need at least one rotor")
        if not all(isinstance(r, str) for r in self.rotors):
            raise InvalidConfiguration(f"rotor names must be strings, got {self.rotors!r}")
        if not isinstance(self.reflector, str):
            raise InvalidConfiguration(f"reflector name must be a string, got {self.reflector!r}")
        n = len(self.rotors)
        if not self.ring_settings:
            self.ring_settings = [0] * n
        if not self.positions:
            self.positions = [0] * n
        if len(self.ring_settings) != n:
            raise InvalidConfiguration(
                f"{len(self.ring_settings)} ring settings for {n} rotors"
            )
        if len(self.positions) != n:
            raise InvalidConfiguration(f"{len(self.positions)} positions for {n} rotors")

    # ── build ────────────────────────────────────────────────────
    def build(self, catalog: WheelCatalog | None = None) -> Enigma:
        """Fresh machine at the start positions. Call again to "rewind"."""
        catalog = catalog or DEFAULT_CATALOG
        rotor_objs = [
            catalog.make_rotor(name, ring, pos)
            for name, ring, pos in zip(self.rotors, self.ring_settings, self.positions)
        ]
        return Enigma(
            rotor_objs,
            catalog.make_reflector(self.reflector),
            Plugboard(self.plugs),
        )

    # ── (de)serialisation ────────────────────────────────────────
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MachineSettings":
        missing = REQUIRED_KEYS - data.keys()
        if missing:
            raise InvalidConfiguration(f"Missing keys in config: {', '.join(sorted(missing))}")

        rotors = _split_names(data["rotors"], "rotors")
        plugs = _split_names(data.get("plugs", data.get("plugboard", [])), "plugs")

        return cls(
            rotors=rotors,
            reflector=data["reflector"],
            ring_settings=_split_setting(data.get("ring_settings", [])),
            positions=_split_setting(data.get("positions", [])),
            plugs=plugs,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rotors": list(self.rotors),
            "reflector": self.reflector,
            "ring_settings": _as_letters(self.ring_settings, "Ring setting"),
            "positions": _as_letters(self.positions, "Position"),
            "plugs": list(self.plugs),
        }

    def __str__(self) -> str:
        d = self.to_dict()
        plugs = " ".join(d["plugs"]) or "-"
        return (
            f"{' '.join(d['rotors'])} / {d['reflector']} / "
            f"rings {d['ring_settings']} / start {d['positions']} / plugs {plugs}"
        )


def load_settings(path: str | Path) -> MachineSettings:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidConfiguration(f"{path}: not valid JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"{path}: config must be a JSON object")
    return MachineSettings.from_dict(data)


def save_settings(path: str | Path, settings: MachineSettings) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2) + "\n", encoding="utf-8")
