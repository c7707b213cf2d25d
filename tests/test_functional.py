from dataclasses import FrozenInstanceError

import pytest

from budgetcore.functional import Left, Nothing, Right, Some, safe_lookup


def test_maybe_map():
    assert Some(5).map(lambda x: x * 2).get_or_else(0) == 10
    mapped_nothing = Nothing().map(lambda x: x * 2)
    assert mapped_nothing.is_none()
    assert mapped_nothing.get_or_else(0) == 0


def test_either_map_and_bind():
    def half(x: int):
        if x % 2:
            return Left("odd")
        return Right(x // 2)

    assert Right(4).bind(half) == Right(2)
    assert Right(3).bind(half).get_error() == "odd"
    assert Left("original").bind(half) == Left("original")
    assert Left("e").map(lambda x: x + 1).is_left()
    assert Right(1).map(lambda x: x + 1).get_or_else(0) == 2


def test_safe_lookup():
    budgets = {"Food": 1}
    assert safe_lookup(budgets, "Food") == Some(1)
    assert safe_lookup(budgets, "food").is_none()


def test_results_are_immutable_values():
    assert Some(1) != Right(1)
    assert Left("x") != Right("x")
    assert Nothing() == Nothing()
    assert Right(2).value == 2
    assert Left("bad").error == "bad"
    with pytest.raises(FrozenInstanceError):
        Some(1).value = 2
    with pytest.raises(ValueError):
        Right(1).get_error()
