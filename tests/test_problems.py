import random

import pytest
from pydantic import ValidationError

from operations import Operation
from problems import digit_width, generate_problem, operand_bound, product_band


class _Edge:
    """randint stand-in that always picks the top (or bottom) of the range."""

    def __init__(self, top=True):
        self.top = top
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return b if self.top else a


def test_digit_width_thresholds():
    assert digit_width(1) == 1
    assert digit_width(199) == 1
    assert digit_width(200) == 2
    assert digit_width(399) == 2
    assert digit_width(400) == 3
    assert digit_width(800) == 5
    assert digit_width(1000) == 5  # capped, not 6


def test_operand_bound_by_level():
    for level in range(1, 200):
        assert operand_bound(level) == 9
    for level in range(200, 400):
        assert operand_bound(level) == 99
    assert operand_bound(600) == 9999
    assert operand_bound(1000) == 99999


def test_product_band_is_inclusive():
    assert product_band(1) == 9
    assert product_band(100) == 9
    assert product_band(101) == 99
    assert product_band(500) == 99
    assert product_band(501) == 999
    assert product_band(1000) == 999


def test_addition_uses_digit_bound():
    rng = _Edge()
    p = generate_problem(Operation.ADDITION, 250, rng)
    assert rng.calls == [(1, 99), (1, 99)]
    assert (p.operand1, p.operand2, p.answer, p.symbol) == (99, 99, 198, "+")


def test_subtraction_subtrahend_bounded_by_minuend():
    rng = random.Random(7)
    for level in (1, 199, 200, 650, 1000):
        for _ in range(200):
            p = generate_problem("subtraction", level, rng)
            assert 1 <= p.operand2 <= p.operand1 <= operand_bound(level)
            assert p.answer == p.operand1 - p.operand2 >= 0
            assert p.symbol == "-"


def test_subtraction_can_reach_zero():
    p = generate_problem(Operation.SUBTRACTION, 1, _Edge())
    assert p.operand1 == p.operand2 == 9
    assert p.answer == 0


def test_multiplication_bands():
    rng = random.Random(11)
    for _ in range(300):
        p = generate_problem(Operation.MULTIPLICATION, 1, rng)
        assert 1 <= p.operand1 <= 9 and 1 <= p.operand2 <= 9
        assert p.answer == p.operand1 * p.operand2
    edge = _Edge()
    p = generate_problem(Operation.MULTIPLICATION, 600, edge)
    assert edge.calls == [(1, 999), (1, 999)]
    assert p.answer == 999 * 999 and p.symbol == "×"


def test_division_is_exact():
    rng = random.Random(3)
    for level in (1, 100, 101, 500, 501, 1000):
        for _ in range(200):
            p = generate_problem(Operation.DIVISION, level, rng)
            assert p.operand1 % p.operand2 == 0
            assert p.operand1 // p.operand2 == p.answer
            assert 1 <= p.answer <= product_band(level)
            assert 1 <= p.operand2 <= product_band(level)


def test_division_dividend_exceeds_band():
    p = generate_problem(Operation.DIVISION, 501, _Edge())
    assert p.operand2 == 999 and p.answer == 999
    assert p.operand1 == 998001
    assert p.symbol == "÷"


def test_lowest_draws():
    for op in Operation:
        p = generate_problem(op, 1, _Edge(top=False))
        assert p.operand1 >= 1 and p.operand2 >= 1


def test_problem_is_frozen():
    p = generate_problem(Operation.ADDITION, 1, random.Random(1))
    with pytest.raises(ValidationError):
        p.answer = 0
