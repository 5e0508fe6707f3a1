# main.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from debug import Debug
from keyboard_and_plugboard import parse_pairs
from settings import MachineSettings, load_settings, save_settings
from utilities import group_blocks, preprocess_message
from wheels import DEFAULT_CATALOG, WheelCatalog

debug = Debug()


# ────────────────────────────────────────────────────────────────────────
#  1. Settings & wheel loading helpers
# ────────────────────────────────────────────────────────────────────────


def load_catalog(path: str | None) -> WheelCatalog:
    if not path:
        return DEFAULT_CATALOG
    return WheelCatalog.from_json(path)


def settings_from_args(args: argparse.Namespace) -> MachineSettings:
    """`--config FILE` wins; otherwise the individual switches."""
    if args.config:
        return load_settings(args.config)

    return MachineSettings.from_dict({
        "rotors": args.rotors.upper(),
        "reflector": args.reflector.upper(),
        "ring_settings": args.rings.upper() if args.rings else [],
        "positions": args.positions.upper() if args.positions else [],
        "plugs": parse_pairs(args.plugs or []),
    })


# ────────────────────────────────────────────────────────────────────────
#  2. Cipher helpers
# ────────────────────────────────────────────────────────────────────────


def run_message(
    settings: MachineSettings,
    catalog: WheelCatalog,
    text: str,
    *,
    space: str = "",
) -> str:
    """Encipher *text* on a freshly built machine (i.e. from the start key)."""
    machine = settings.build(catalog)
    return machine.encipher_text(preprocess_message(text, space=space))


def list_wheels(catalog: WheelCatalog) -> str:
    rotors = []
    for name in catalog.rotor_names():
        spec = catalog.rotor_spec(name)
        flags = f"notch {spec.notches}" if spec.notches else "no notch"
        if not spec.steppable:
            flags += ", fixed"
        rotors.append(f"  {name:<9} {spec.wiring}  ({flags})")
    reflectors = [f"  {n:<9} {catalog.reflectors[n]}" for n in catalog.reflector_names()]
    return "\n".join(["Rotors:", *rotors, "Reflectors:", *reflectors])


# ────────────────────────────────────────────────────────────────────────
#  3. CLI
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with an Enigma machine")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to encipher. If omitted, reads stdin or starts an interactive prompt.")
    p.add_argument("--config", metavar="FILE", help="Load machine settings from JSON instead of the switches below.")
    p.add_argument("--rotors", default="I II III", help="Rotor names left to right. Default: 'I II III'")
    p.add_argument("--reflector", default="B", help="Reflector name. Default: B")
    p.add_argument("--rings", metavar="LETTERS", help="Ring settings left to right, e.g. AAA")
    p.add_argument("--positions", metavar="LETTERS", help="Start positions left to right, e.g. AAA")
    p.add_argument("--plugs", nargs="*", metavar="PAIR", help="Plugboard pairs, e.g. AB CD EF")
    p.add_argument("--wheels", metavar="FILE", help="Extra rotor/reflector tables from JSON.")
    p.add_argument("--space", default="", metavar="LETTER", help="Letter substituted for spaces (default: drop them)")
    p.add_argument("--block", type=int, default=5, help="Output group size, 0 for none. Default: 5")
    p.add_argument("--save-config", metavar="FILE", help="Write the effective settings to JSON.")
    p.add_argument("--list-wheels", action="store_true", help="Print the wheel catalog and exit.")
    p.add_argument("--debug", nargs="+", metavar="COMPONENT", choices=Debug.components(), help="Log these components to stderr.")
    p.add_argument("--log-file", metavar="FILE", help="Also write debug log here.")
    return p.parse_args(argv)


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)

    if args.debug:
        Debug.configure(log_to=args.log_file)
        debug.enable(*args.debug)

    try:
        catalog = load_catalog(args.wheels)
        if args.list_wheels:
            print(list_wheels(catalog))
            return

        settings = settings_from_args(args)
        settings.build(catalog)  # fail fast before reading any text
    except (ValueError, OSError) as exc:
        sys.exit(f"Failed to load configuration: {exc}")

    if args.save_config:
        save_settings(Path(args.save_config), settings)

    def emit(text: str) -> None:
        try:
            out = run_message(settings, catalog, text, space=args.space)
        except ValueError as exc:
            sys.exit(f"Cannot encipher: {exc}")
        print(group_blocks(out, args.block))

    # one-shot mode ------------------------------------------------------
    if args.message is not None:
        emit(args.message)
        return

    if not sys.stdin.isatty():
        emit(sys.stdin.read())
        return

    # interactive REPL ---------------------------------------------------
    print(f"Settings: {settings}")
    print("Every line starts from the start position. Blank line to quit.")
    while True:
        try:
            txt = input("> ")
        except EOFError:
            break
        if not txt.strip():
            break
        emit(txt)


if __name__ == "__main__":
    main()
