"""Core value types for condfmt.

Operators and operands are small frozen dataclasses/enums.
Each literal operand carries its comparison kind, fixed at parse time
from the literal syntax.
"""

from dataclasses import dataclass
from enum import Enum


class Operator(Enum):
    """Comparison operators, keyed by their template token."""

    EQUAL = "="
    LESS = "<"
    LESS_OR_EQUAL = "<="
    GREATER = ">"
    GREATER_OR_EQUAL = ">="
    RANGE = "~"

    @classmethod
    def from_token(cls, token: str) -> "Operator | None":
        """Return the operator for a token, or None if it is not one."""
        for op in cls:
            if op.value == token:
                return op
        return None

    @property
    def symbol(self) -> str:
        return self.value


class ValueKind(Enum):
    """Comparison kinds.

    NUMBER only appears when integer/float strictness is disabled.
    """

    INTEGER = "int"
    FLOAT = "float"
    NUMBER = "number"
    TEXT = "str"
    OBJECT = "object"

    @property
    def is_numeric(self) -> bool:
        return self in (ValueKind.INTEGER, ValueKind.FLOAT, ValueKind.NUMBER)


@dataclass(frozen=True)
class PointerRef:
    """Reference to a positional render argument: {index}."""

    index: int

    def __str__(self) -> str:
        return f"{{{self.index}}}"


@dataclass(frozen=True)
class NumberLiteral:
    """Numeric literal. kind is INTEGER or FLOAT depending on how it was written."""

    value: int | float
    kind: ValueKind = ValueKind.INTEGER

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StringLiteral:
    """Raw text literal."""

    value: str
    kind: ValueKind = ValueKind.TEXT

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RangeLiteral:
    """Inclusive low..high bounds, only valid with Operator.RANGE."""

    low: float
    high: float

    def __str__(self) -> str:
        return f"{self.low:g}..{self.high:g}"


Operand = PointerRef | NumberLiteral | StringLiteral | RangeLiteral
