"""Conditional string formatting.

Templates mix plain text, {i} placeholders and quoted conditions:

    "'{0}>5:big|*:small' - {1} items"   with (10, "x") -> "big - x items"

Usage:
    from condfmt import compile_template, render

    template = compile_template("'{0}~1..10:in range|*:out' value")
    render(template, 5.0)  # "in range value"
"""

from condfmt.core import (
    Branch,
    CompiledTemplate,
    Condition,
    NumberLiteral,
    Operator,
    PointerRef,
    RangeLiteral,
    StringLiteral,
    ValueKind,
)
from condfmt.errors import (
    EvaluationError,
    InvalidRangeError,
    NullArgumentError,
    PointerOutOfRangeError,
    TemplateError,
    TemplateSyntaxError,
    TypeMismatchError,
    UnsupportedOperatorError,
)
from condfmt.evaluator import ConditionEvaluator
from condfmt.parser import TemplateParser, compile_template
from condfmt.renderer import (
    TemplateRenderer,
    clear_cache,
    format_string,
    render,
    substitute_placeholders,
)

__version__ = "1.0.0"

__all__ = [
    # Main API
    "compile_template",
    "render",
    "format_string",
    "clear_cache",
    "substitute_placeholders",
    # Components
    "TemplateParser",
    "ConditionEvaluator",
    "TemplateRenderer",
    # Model
    "Branch",
    "CompiledTemplate",
    "Condition",
    "NumberLiteral",
    "Operator",
    "PointerRef",
    "RangeLiteral",
    "StringLiteral",
    "ValueKind",
    # Errors
    "TemplateError",
    "TemplateSyntaxError",
    "EvaluationError",
    "PointerOutOfRangeError",
    "NullArgumentError",
    "TypeMismatchError",
    "UnsupportedOperatorError",
    "InvalidRangeError",
]
