# settings_generator.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from random import Random, SystemRandom
from typing import List

from keyboard_and_plugboard import ALPHABET
from settings import MachineSettings, save_settings
from wheels import DEFAULT_CATALOG, WheelCatalog

# Army / air-force wheel set; thin wheels only make sense with a thin reflector
FIELD_ROTORS = ["I", "II", "III", "IV", "V"]
FIELD_REFLECTORS = ["B", "C"]

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    k = min(k, len(ALPHABET) // 2)
    pool = list(ALPHABET)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def generate_settings(
    rng: Random | SystemRandom,
    *,
    rotor_count: int = 3,
    plug_pairs: int = 10,
    rotors: List[str] | None = None,
    reflectors: List[str] | None = None,
    catalog: WheelCatalog | None = None,
) -> MachineSettings:
    """Draw one day's key: distinct rotors, a reflector, rings, start, plugs."""
    catalog = catalog or DEFAULT_CATALOG
    rotor_pool = rotors or FIELD_ROTORS
    refl_pool = reflectors or FIELD_REFLECTORS

    for name in rotor_pool:
        catalog.rotor_spec(name)
    if rotor_count < 1 or rotor_count > len(rotor_pool):
        raise ValueError(f"rotor_count must be 1–{len(rotor_pool)}, got {rotor_count}")

    return MachineSettings(
        rotors=rng.sample(rotor_pool, rotor_count),
        reflector=rng.choice(refl_pool),
        ring_settings=[rng.choice(ALPHABET) for _ in range(rotor_count)],
        positions=[rng.choice(ALPHABET) for _ in range(rotor_count)],
        plugs=choose_pairs(plug_pairs, rng),
    )


def parse_cli(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a random daily Enigma key")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument("--rotors", type=int, default=3, help="How many rotors (default 3)")
    p.add_argument("--plugs", type=int, default=10, help="Plug pairs (default 10)")
    p.add_argument(
        "--outfile",
        type=Path,
        default=Path("enigma_config.json"),
        help="Destination JSON file (default: enigma_config.json)",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_cli(argv)
    rng = build_rng(args.seed)

    try:
        cfg = generate_settings(rng, rotor_count=args.rotors, plug_pairs=args.plugs)
    except ValueError as exc:
        sys.exit(f"Failed to generate settings: {exc}")

    save_settings(args.outfile, cfg)
    print(f"Wrote {args.outfile}\n"
        f"   rotors      : {' '.join(cfg.rotors)}\n"
        f"   reflector   : {cfg.reflector}\n"
        f"   rings       : {''.join(cfg.ring_settings)}\n"
        f"   start       : {''.join(cfg.positions)}\n"
        f"   plug pairs  : {len(cfg.plugs)}")


if __name__ == "__main__":
    main()
