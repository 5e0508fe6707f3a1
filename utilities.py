# utilities.py
from __future__ import annotations

from keyboard_and_plugboard import ALPHABET

# ────────────────────────────────────────────────────────────────────────
#  Text preprocessing
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, *, space: str = "") -> str:
    """Upper-case, replace spaces with *space* ('' drops them, operators
    often used 'X'), and drop every other non-alphabet character."""
    space = space.upper()
    if space and space not in ALPHABET:
        raise ValueError(f"space filler {space!r} must be a letter A–Z")
    text = msg.upper().replace(" ", space)
    return "".join(ch for ch in text if ch in ALPHABET)


def group_blocks(text: str, block: int = 5, sep: str = " ") -> str:
    """Split into fixed-size groups for display: 'BDZGO BDZGO'."""
    if block <= 0:
        return text
    return sep.join(text[i : i + block] for i in range(0, len(text), block))
