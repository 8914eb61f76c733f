# tests/test_engine/test_scalar.py
from fractions import Fraction
import cmath
import math

import pytest

from zxopt.scalar import Scalar


def number_after(**calls):
    s = Scalar()
    for name, args in calls.items():
        getattr(s, name)(*args)
    return s.to_number()


def test_default_is_one():
    assert Scalar().to_number() == pytest.approx(1)
    assert Scalar().to_string() == "sqrt(2)^0"


@pytest.mark.parametrize("phase, expected", [
    (0, 2),
    (Fraction(1, 2), 1 + 1j),
    (Fraction(3, 2), 1 - 1j),
    (Fraction(1, 4), 1 + cmath.exp(1j * math.pi / 4)),
])
def test_add_node(phase, expected):
    assert number_after(add_node=(phase,)) == pytest.approx(expected)


def test_add_node_pi_is_zero():
    s = Scalar()
    s.add_node(1)
    assert s.is_zero
    assert s.to_number() == 0
    assert s.to_string() == "0"


@pytest.mark.parametrize("p1, p2", [
    (0, 0), (1, 1), (0, 1), (Fraction(1, 4), Fraction(1, 2)), (Fraction(3, 4), 1),
])
def test_add_spider_pair(p1, p2):
    e1 = cmath.exp(1j * math.pi * float(p1))
    e2 = cmath.exp(1j * math.pi * float(p2))
    expected = (1 + e1 + e2 - e1 * e2) / math.sqrt(2)
    assert number_after(add_spider_pair=(p1, p2)) == pytest.approx(expected)


def test_phase_wraps():
    s = Scalar()
    s.add_phase(Fraction(3, 2))
    s.add_phase(Fraction(3, 4))
    assert s.phase == Fraction(1, 4)


def test_mult_and_copy():
    a = Scalar()
    a.add_power(3)
    a.add_phase(Fraction(1, 2))
    b = a.copy()
    b.add_float(0.5)
    assert a.floatfactor == 1.0
    a.mult_with_scalar(b)
    assert a.power2 == 6
    assert a.phase == 1
    assert a.to_number() == pytest.approx(-0.5 * 8)


def test_zero_is_absorbing():
    a = Scalar()
    z = Scalar()
    z.add_float(0)
    a.mult_with_scalar(z)
    assert a.is_zero


def test_equality_by_value():
    a = Scalar()
    a.add_power(2)
    b = Scalar()
    b.add_float(2)
    assert a == b
    b.add_phase(1)
    assert a != b


def test_set_unknown():
    s = Scalar()
    s.add_power(5)
    s.add_float(0)
    s.set_unknown()
    assert s.to_number() == pytest.approx(1)
