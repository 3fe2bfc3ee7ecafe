"""Evaluates conditions against positional render arguments.

First matching branch wins; the else branch is used when nothing matches.
"""

from typing import Any, Sequence

from condfmt.config import Config
from condfmt.core.condition import Branch, Condition
from condfmt.core.types import (
    NumberLiteral,
    Operator,
    PointerRef,
    RangeLiteral,
    StringLiteral,
    ValueKind,
)
from condfmt.errors import (
    InvalidRangeError,
    NullArgumentError,
    PointerOutOfRangeError,
    TypeMismatchError,
    UnsupportedOperatorError,
)
from condfmt.utils.logger import get_logger

logger = get_logger(__name__)


def resolve_pointer(index: int, args: Sequence[Any]) -> Any:
    """Return args[index], failing on a missing or None argument."""
    if index < 0 or index >= len(args):
        logger.debug(f"Pointer {{{index}}} out of range for {len(args)} arg(s)")
        raise PointerOutOfRangeError(index, len(args))
    value = args[index]
    if value is None:
        logger.debug(f"Argument {index} is None")
        raise NullArgumentError(index)
    return value


class ConditionEvaluator:
    """Tests branches and applies conditions.

    strict_number_kinds: when True, ints and floats are different kinds and
    comparing one to the other is a type mismatch. Defaults to the config.
    """

    def __init__(self, strict_number_kinds: bool | None = None):
        if strict_number_kinds is None:
            strict_number_kinds = Config.STRICT_NUMBER_KINDS
        self.strict_number_kinds = strict_number_kinds

    def kind_of(self, value: Any) -> ValueKind:
        """Comparison kind of a runtime argument."""
        if isinstance(value, bool):
            return ValueKind.OBJECT
        if isinstance(value, int):
            return ValueKind.INTEGER if self.strict_number_kinds else ValueKind.NUMBER
        if isinstance(value, float):
            return ValueKind.FLOAT if self.strict_number_kinds else ValueKind.NUMBER
        if isinstance(value, str):
            return ValueKind.TEXT
        return ValueKind.OBJECT

    def _literal_kind(self, literal: NumberLiteral | StringLiteral) -> ValueKind:
        if literal.kind.is_numeric and not self.strict_number_kinds:
            return ValueKind.NUMBER
        return literal.kind

    def apply(self, condition: Condition, args: Sequence[Any]) -> str:
        """Return condition prefix + result of the first matching branch."""
        condition.validate()

        for branch in condition.branches:
            if self.test(branch, args):
                return condition.prefix + branch.result

        return condition.prefix + condition.else_branch.result

    def test(self, branch: Branch, args: Sequence[Any]) -> bool:
        """Does this branch match the given args? (negation applied)"""
        target = resolve_pointer(branch.target_pointer, args)
        target_kind = self.kind_of(target)

        if branch.operator == Operator.RANGE:
            match = self._in_range(target, target_kind, branch.operand)
        else:
            operand = branch.operand
            if isinstance(operand, PointerRef):
                against = resolve_pointer(operand.index, args)
                against_kind = self.kind_of(against)
            else:
                against = operand.value
                against_kind = self._literal_kind(operand)

            self._check_kinds(target, target_kind, against, against_kind)
            match = self._compare(branch.operator, target, target_kind, against)

        return branch.negate != match

    def _check_kinds(self, target: Any, target_kind: ValueKind,
                     against: Any, against_kind: ValueKind) -> None:
        mismatch = target_kind != against_kind
        if not mismatch and target_kind == ValueKind.OBJECT:
            mismatch = type(target) is not type(against)

        if mismatch:
            target_name = self._kind_name(target, target_kind)
            against_name = self._kind_name(against, against_kind)
            logger.debug(f"Type mismatch: {target_name} vs {against_name}")
            raise TypeMismatchError(target_name, against_name)

    def _kind_name(self, value: Any, kind: ValueKind) -> str:
        if kind == ValueKind.OBJECT:
            return type(value).__name__
        return kind.value

    def _in_range(self, target: Any, target_kind: ValueKind, bounds: RangeLiteral) -> bool:
        if not target_kind.is_numeric:
            raise TypeMismatchError(
                self._kind_name(target, target_kind), "range",
                "target object must be a number for range checks",
            )

        if bounds.low >= bounds.high:
            logger.debug(f"Invalid range {bounds}")
            raise InvalidRangeError(bounds.low, bounds.high)

        # int vs float comparisons are exact, so huge ints never overflow
        return bounds.low <= target <= bounds.high

    def _compare(self, operator: Operator, target: Any, kind: ValueKind, against: Any) -> bool:
        if kind.is_numeric:
            if operator == Operator.EQUAL:
                return target == against
            if operator == Operator.LESS:
                return target < against
            if operator == Operator.LESS_OR_EQUAL:
                return target <= against
            if operator == Operator.GREATER:
                return target > against
            if operator == Operator.GREATER_OR_EQUAL:
                return target >= against
            raise UnsupportedOperatorError(operator.symbol, kind.value)

        # Text and other objects: strict equality only
        if operator == Operator.EQUAL:
            return target == against
        raise UnsupportedOperatorError(operator.symbol, self._kind_name(target, kind))
