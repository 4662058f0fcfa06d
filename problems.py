"""
Problem generation.

Operands are drawn uniformly from bounds derived from the level:
  - addition/subtraction widen by one digit every 200 levels (max 5 digits)
  - multiplication/division use three bands: <=100, <=500, above
Division draws the quotient and divisor from the band and derives the
dividend, so the quotient is always exact.
"""

from __future__ import annotations

import random as _random
from typing import Any, Callable, Dict, Tuple

from pydantic import BaseModel, ConfigDict

from operations import Operation

MAX_DIGITS = 5
DIGIT_STEP = 200

# (highest level in band, largest operand); the last band is open-ended
PRODUCT_BANDS: Tuple[Tuple[int, int], ...] = ((100, 9), (500, 99))
PRODUCT_TOP = 999


class Problem(BaseModel):
    model_config = ConfigDict(frozen=True)

    operand1: int
    operand2: int
    answer: int
    symbol: str


def digit_width(level: int) -> int:
    return min(MAX_DIGITS, level // DIGIT_STEP + 1)


def operand_bound(level: int) -> int:
    """Largest operand for addition/subtraction at this level (9, 99, ... 99999)."""
    return 10 ** digit_width(level) - 1


def product_band(level: int) -> int:
    """Largest operand (or quotient/divisor) for multiplication/division."""
    for top_level, bound in PRODUCT_BANDS:
        if level <= top_level:
            return bound
    return PRODUCT_TOP


def _addition(level: int, rng: Any) -> Problem:
    bound = operand_bound(level)
    a = rng.randint(1, bound)
    b = rng.randint(1, bound)
    return Problem(operand1=a, operand2=b, answer=a + b, symbol=Operation.ADDITION.symbol)


def _subtraction(level: int, rng: Any) -> Problem:
    a = rng.randint(1, operand_bound(level))
    # b may equal a, giving 0
    b = rng.randint(1, a)
    return Problem(operand1=a, operand2=b, answer=a - b, symbol=Operation.SUBTRACTION.symbol)


def _multiplication(level: int, rng: Any) -> Problem:
    bound = product_band(level)
    a = rng.randint(1, bound)
    b = rng.randint(1, bound)
    return Problem(operand1=a, operand2=b, answer=a * b, symbol=Operation.MULTIPLICATION.symbol)


def _division(level: int, rng: Any) -> Problem:
    bound = product_band(level)
    quotient = rng.randint(1, bound)
    divisor = rng.randint(1, bound)
    return Problem(
        operand1=quotient * divisor,
        operand2=divisor,
        answer=quotient,
        symbol=Operation.DIVISION.symbol,
    )


_GENERATORS: Dict[Operation, Callable[[int, Any], Problem]] = {
    Operation.ADDITION: _addition,
    Operation.SUBTRACTION: _subtraction,
    Operation.MULTIPLICATION: _multiplication,
    Operation.DIVISION: _division,
}


def generate_problem(operation: Operation | str, level: int, rng: Any = None) -> Problem:
    """
    Build a fresh problem for (operation, level).

    `rng` only needs a `randint(a, b)` method (inclusive bounds); defaults to
    the module-level `random`.
    """
    op = Operation(operation)
    return _GENERATORS[op](level, rng or _random)
