"""
Rotor and reflector wiring.
Run with:  python -m pytest tests/ -v
"""

import pytest

from errors import InvalidConfiguration
from rotor_and_reflector import Reflector, Rotor, parse_wiring
from wheels import REFLECTORS, ROTORS, DEFAULT_CATALOG

ROTOR_I = ROTORS["I"].wiring

# ── Rotor ─────────────────────────────────────────────────────────────────────
def test_forward_at_home_position_is_raw_wiring():
    r = Rotor(ROTOR_I)
    assert [r.forward(x) for x in range(26)] == parse_wiring(ROTOR_I)

def test_forward_accounts_for_position():
    r = Rotor(ROTOR_I, position="B")
    # input A enters the wiring at B (K), then shifts back by one → J
    assert r.forward(0) == 9

def test_ring_setting_cancels_position():
    r = Rotor(ROTOR_I)
    assert r.forward(0, position=5, ring_setting=5) == r.forward(0, 0, 0)

@pytest.mark.parametrize("name", sorted(ROTORS))
def test_backward_inverts_forward_everywhere(name):
    r = DEFAULT_CATALOG.make_rotor(name)
    for p in range(26):
        for ring in range(26):
            for x in range(26):
                assert r.backward(r.forward(x, p, ring), p, ring) == x

def test_explicit_position_does_not_mutate_rotor():
    r = Rotor(ROTOR_I, position=3)
    r.forward(0, 10, 4)
    assert r.position == 3

def test_notch_and_advance():
    r = Rotor(ROTOR_I, "Q", position="P")
    assert not r.is_at_notch()
    r.advance()
    assert r.window == "Q"
    assert r.is_at_notch()

def test_advance_wraps_round():
    r = Rotor(ROTOR_I, position="Z")
    r.advance()
    assert r.position == 0

def test_two_notches_and_none():
    r = Rotor(ROTORS["VI"].wiring, "ZM")
    assert r.notches == {12, 25}
    assert not Rotor(ROTOR_I, "").is_at_notch()

@pytest.mark.parametrize("wiring", [
    "ABC",
    "A" * 26,
    "EKMFLGDQVZNTOWYHXUSPAIBRCE",
    "ekmflgdqvzntowyhxuspaibrcj",
    list(range(25)),
    list(range(1, 27)),
    5,
    None,
])
def test_rotor_rejects_bad_wiring(wiring):
    with pytest.raises(InvalidConfiguration):
        Rotor(wiring)

@pytest.mark.parametrize("kwargs", [
    {"notches": "1"},
    {"notches": 5},
    {"ring_setting": 26},
    {"position": -1},
    {"position": "AA"},
])
def test_rotor_rejects_bad_settings(kwargs):
    with pytest.raises(InvalidConfiguration):
        Rotor(ROTOR_I, **kwargs)

def test_rotor_accepts_integer_table():
    assert Rotor(list(range(26))).wiring == "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# ── Reflector ─────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("name", sorted(REFLECTORS))
def test_reflector_has_no_fixed_points(name):
    refl = DEFAULT_CATALOG.make_reflector(name)
    assert all(refl.reflect(x) != x for x in range(26))

@pytest.mark.parametrize("name", sorted(REFLECTORS))
def test_reflector_is_an_involution(name):
    refl = DEFAULT_CATALOG.make_reflector(name)
    assert all(refl.reflect(refl.reflect(x)) == x for x in range(26))

def test_reflector_rejects_fixed_point():
    # B with Y and A swapped into self-maps
    wiring = "A" + REFLECTORS["B"][1:24] + "Y" + REFLECTORS["B"][25]
    with pytest.raises(InvalidConfiguration):
        Reflector(wiring)

def test_reflector_rejects_non_involution():
    with pytest.raises(InvalidConfiguration):
        Reflector(ROTOR_I)

def test_reflector_rejects_short_wiring():
    with pytest.raises(InvalidConfiguration):
        Reflector("BADC")
    with pytest.raises(InvalidConfiguration):
        Reflector(5)
