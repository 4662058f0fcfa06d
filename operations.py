from __future__ import annotations

from enum import Enum
from typing import Dict, List


class Operation(str, Enum):
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def path(self) -> str:
        return f"/game/{self.value}"


_SYMBOLS: Dict[Operation, str] = {
    Operation.ADDITION: "+",
    Operation.SUBTRACTION: "-",
    Operation.MULTIPLICATION: "×",
    Operation.DIVISION: "÷",
}


def list_operations() -> List[Dict[str, str]]:
    # order matches the home screen grid
    return [
        {"id": op.value, "name": op.display_name, "symbol": op.symbol, "path": op.path}
        for op in Operation
    ]
