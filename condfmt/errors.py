"""
Error types for condfmt.

Two families:
- TemplateSyntaxError: raised while compiling a template (no partial result)
- EvaluationError: raised while rendering against a list of arguments

Every error carries a short machine-readable code and a details dict so
callers can log or report it without parsing the message.
"""

from typing import Any, Dict, Optional


class TemplateError(Exception):
    """Base exception for condfmt."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class TemplateSyntaxError(TemplateError, ValueError):
    """Malformed template source.

    `offset` is the 0-based character index into the source, or None when
    the problem is structural (e.g. a condition missing its else branch).
    """

    def __init__(self, message: str, offset: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} at char {offset + 1}"
        details = dict(details or {})
        details.setdefault('offset', offset)
        super().__init__("SYNTAX_ERROR", message, details)


class EvaluationError(TemplateError):
    """Rendering failed for the given arguments."""


class PointerOutOfRangeError(EvaluationError, IndexError):
    """A pointer references an argument index that was not supplied."""

    def __init__(self, index: int, arg_count: int):
        self.index = index
        self.arg_count = arg_count
        super().__init__(
            "POINTER_OUT_OF_RANGE",
            f"too few args: expected value at index {index} (got {arg_count} args)",
            {'index': index, 'arg_count': arg_count},
        )


class NullArgumentError(EvaluationError, ValueError):
    """A referenced argument is None."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(
            "NULL_ARGUMENT",
            f"object at index {index} must not be None",
            {'index': index},
        )


class TypeMismatchError(EvaluationError, TypeError):
    """Target and operand are of incompatible kinds."""

    def __init__(self, target_kind: str, operand_kind: str, message: Optional[str] = None):
        self.target_kind = target_kind
        self.operand_kind = operand_kind
        super().__init__(
            "TYPE_MISMATCH",
            message or f"types mismatch: cannot compare {target_kind} to {operand_kind}",
            {'target_kind': target_kind, 'operand_kind': operand_kind},
        )


class UnsupportedOperatorError(EvaluationError, TypeError):
    """Operator is not applicable to the resolved kind."""

    def __init__(self, operator: str, kind: str):
        self.operator = operator
        self.kind = kind
        super().__init__(
            "UNSUPPORTED_OPERATOR",
            f"operator {operator} is not applicable for objects of kind {kind}",
            {'operator': operator, 'kind': kind},
        )


class InvalidRangeError(EvaluationError, ValueError):
    """Range low bound is not strictly less than its high bound."""

    def __init__(self, low: float, high: float):
        self.low = low
        self.high = high
        super().__init__(
            "INVALID_RANGE",
            f"low range limit must be less than high range limit; low: {low}, high: {high}",
            {'low': low, 'high': high},
        )
