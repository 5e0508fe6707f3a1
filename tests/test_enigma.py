"""
Machine stepping and signal path.
Run with:  python -m pytest tests/ -v
"""

from random import Random

import pytest

from enigma import Enigma
from errors import InvalidConfiguration, InvalidSymbol
from keyboard_and_plugboard import Plugboard
from settings import MachineSettings
from settings_generator import generate_settings
from wheels import DEFAULT_CATALOG


def machine(rotors="I II III", reflector="B", rings="AAA", start="AAA", plugs=()):
    return MachineSettings(
        rotors=rotors.split(),
        reflector=reflector,
        ring_settings=list(rings),
        positions=list(start),
        plugs=list(plugs),
    ).build()


def windows(m, presses):
    out = []
    for _ in range(presses):
        m.encipher(0)
        out.append(m.window)
    return out

# ── Double step ───────────────────────────────────────────────────────────────
def test_middle_rotor_double_steps():
    # III on the right turns over at V, II in the middle at E
    m = machine(start="ADU")
    assert windows(m, 4) == ["ADV", "AEW", "BFX", "BFY"]

def test_middle_rotor_on_its_notch_steps_itself_and_left():
    m = machine(start="AEU")
    # first press: middle sits on its notch → middle and left both move
    # second press: right was on its notch → middle moves again, left stays
    assert windows(m, 2) == ["BFV", "BGW"]

def test_no_double_step_without_notch():
    m = machine(start="AAA")
    assert windows(m, 3) == ["AAB", "AAC", "AAD"]

def test_fast_rotor_carry_on_two_notch_rotor():
    m = machine(rotors="I II VI", start="AAL")
    # VI turns over at M and again at Z
    assert windows(m, 2) == ["AAM", "ABN"]
    m = machine(rotors="I II VI", start="AAY")
    assert windows(m, 2) == ["AAZ", "ABA"]

def test_left_rotor_notch_has_no_effect():
    m = machine(start="QAA")
    assert windows(m, 1) == ["QAB"]

# ── Known vectors ─────────────────────────────────────────────────────────────
def test_known_vector_home_settings():
    assert machine().encipher_text("AAAAA") == "BDZGO"

def test_known_vector_ring_settings():
    assert machine(rings="BBB").encipher_text("AAAAA") == "EWTYX"

def test_four_rotor_beta_at_a_matches_three_rotor_b():
    m4 = machine(rotors="BETA I II III", reflector="B-THIN", rings="AAAA", start="AAAA")
    assert m4.encipher_text("AAAAA") == "BDZGO"

def test_thin_rotor_never_moves():
    m4 = machine(rotors="GAMMA I II III", reflector="C-THIN", rings="AAAA", start="CZZZ")
    for _ in range(1000):
        m4.encipher(3)
    assert m4.window[0] == "C"

# ── Signal path ───────────────────────────────────────────────────────────────
def test_full_path_is_self_inverse():
    plugs = ["AF", "TV", "KO", "BL", "RW"]
    plain = "THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG" * 20
    cipher = machine("II V III", rings="HEU", start="MCU", plugs=plugs).encipher_text(plain)
    assert cipher != plain
    assert machine("II V III", rings="HEU", start="MCU", plugs=plugs).encipher_text(cipher) == plain

@pytest.mark.parametrize("seed", range(5))
def test_self_inverse_for_random_keys(seed):
    key = generate_settings(Random(seed))
    plain = [Random(seed).randrange(26) for _ in range(300)]
    cipher = list(key.build().encipher_stream(plain))
    assert list(key.build().encipher_stream(cipher)) == plain

def test_no_letter_enciphers_to_itself():
    out = machine(plugs=["AZ", "BY"]).encipher_text("A" * 500)
    assert "A" not in out

def test_stepping_is_deterministic():
    a, b = machine(start="XEV"), machine(start="XEV")
    assert windows(a, 700) == windows(b, 700)

def test_period_of_three_rotor_stepping():
    # double step skips one middle position per left turn: 26 * 25 * 26
    m = machine(start="AAA")
    seen = windows(m, 26 * 25 * 26)
    assert seen[-1] == "AAA"
    assert "AAA" not in seen[:-1]

def test_stream_is_lazy():
    m = machine()
    gen = m.encipher_stream([0, 0, 0])
    assert m.window == "AAA"
    next(gen)
    assert m.window == "AAB"
    assert len(list(gen)) == 2

def test_invalid_letter_rejected_before_stepping():
    m = machine()
    with pytest.raises(InvalidSymbol):
        m.encipher_text("AAa")
    assert m.window == "AAA"

def test_encipher_letter():
    assert machine().encipher_letter("A") == "B"

def test_machines_share_no_state():
    a, b = machine(), machine()
    a.encipher_text("AAAAAAAAAA")
    assert b.window == "AAA"
    assert b.encipher_text("AAAAA") == "BDZGO"

# ── Generalised stepping ──────────────────────────────────────────────────────
def test_fourth_steppable_rotor_is_driven_by_third():
    rotors = [DEFAULT_CATALOG.make_rotor(n) for n in ("IV", "I", "II", "III")]
    m = Enigma(rotors, DEFAULT_CATALOG.make_reflector("B"), positions="AQAA")
    # I sits on its notch: it steps itself and drives IV
    assert windows(m, 1) == ["BRAB"]

def test_fixed_rotor_can_be_forced_by_flag():
    rotors = [
        DEFAULT_CATALOG.make_rotor("I", steppable=False),
        DEFAULT_CATALOG.make_rotor("II"),
        DEFAULT_CATALOG.make_rotor("III"),
    ]
    m = Enigma(rotors, DEFAULT_CATALOG.make_reflector("B"), positions="AEV")
    assert windows(m, 1) == ["AFW"]

def test_single_rotor_machine():
    m = Enigma([DEFAULT_CATALOG.make_rotor("I")], DEFAULT_CATALOG.make_reflector("B"))
    assert windows(m, 27)[-1] == "B"

# ── Configuration errors ──────────────────────────────────────────────────────
def test_rejects_no_rotors():
    with pytest.raises(InvalidConfiguration):
        Enigma([], DEFAULT_CATALOG.make_reflector("B"))

def test_rejects_shared_rotor_object():
    r = DEFAULT_CATALOG.make_rotor("I")
    with pytest.raises(InvalidConfiguration):
        Enigma([r, r, DEFAULT_CATALOG.make_rotor("II")], DEFAULT_CATALOG.make_reflector("B"))

def test_rejects_steppable_rotor_left_of_fixed():
    rotors = [DEFAULT_CATALOG.make_rotor(n) for n in ("I", "BETA", "II", "III")]
    with pytest.raises(InvalidConfiguration):
        Enigma(rotors, DEFAULT_CATALOG.make_reflector("B-THIN"))

def test_rejects_mismatched_ring_and_position_counts():
    rotors = [DEFAULT_CATALOG.make_rotor(n) for n in ("I", "II", "III")]
    refl = DEFAULT_CATALOG.make_reflector("B")
    with pytest.raises(InvalidConfiguration):
        Enigma(rotors, refl, ring_settings="AA")
    with pytest.raises(InvalidConfiguration):
        Enigma(rotors, refl, positions=[0, 0, 0, 0])

def test_explicit_plugboard_is_used():
    rotors = [DEFAULT_CATALOG.make_rotor(n) for n in ("I", "II", "III")]
    m = Enigma(rotors, DEFAULT_CATALOG.make_reflector("B"), Plugboard(["BQ"]))
    # B out of the rotors is rerouted to Q
    assert m.encipher_letter("A") == "Q"
