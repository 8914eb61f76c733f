# tests/test_engine/test_budget.py
import pytest

from zxopt.budget import Budget


def test_unlimited():
    budget = Budget.unlimited()
    budget.spend(1000)
    assert not budget.exhausted
    assert budget.remaining is None


def test_max_steps():
    budget = Budget(max_steps=3)
    assert budget.remaining == 3
    budget.spend()
    budget.spend(2)
    assert budget.remaining == 0
    assert budget.exhausted
    budget.spend()
    assert budget.remaining == 0


def test_cancel():
    budget = Budget(max_steps=10)
    budget.cancel()
    assert budget.exhausted
    assert "exhausted=True" in repr(budget)


def test_zero_time_limit():
    assert Budget(time_limit=0).exhausted


def test_generous_time_limit():
    assert not Budget(time_limit=3600).exhausted


def test_negative_steps():
    with pytest.raises(ValueError):
        Budget(max_steps=-1)
