"""Core types for condfmt.

All data structures are dataclasses with attribute access.
"""

from condfmt.core.condition import (
    ELSE_POINTER,
    Branch,
    CompiledTemplate,
    Condition,
)
from condfmt.core.types import (
    NumberLiteral,
    Operand,
    Operator,
    PointerRef,
    RangeLiteral,
    StringLiteral,
    ValueKind,
)

__all__ = [
    # Model
    "ELSE_POINTER",
    "Branch",
    "CompiledTemplate",
    "Condition",
    # Operands
    "NumberLiteral",
    "Operand",
    "Operator",
    "PointerRef",
    "RangeLiteral",
    "StringLiteral",
    "ValueKind",
]
