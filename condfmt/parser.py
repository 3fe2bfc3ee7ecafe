"""
Template parser for condfmt

Scans a template char by char. A single quote toggles between plain text
and a conditional expression:

    "'{0}>5:big|{0}~1..5:medium|*:small' - {1} items"

Inside a condition each branch goes through three states:
    EXPECT_TARGET    -> {i} pointer, or '*' for the else branch
    EXPECT_CONDITION -> optional '!', operator, operand
    EXPECT_RESULT    -> result text up to '|' or the closing quote

The operand may be closed with ':' or '|' ("{0}>5:big" and "{0}>5|big" are
the same branch). Range operands ("~1..10") run through their own small
state machine.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, auto

from condfmt.core.condition import ELSE_POINTER, Branch, CompiledTemplate, Condition
from condfmt.core.types import (
    NumberLiteral,
    Operand,
    Operator,
    PointerRef,
    RangeLiteral,
    StringLiteral,
    ValueKind,
)
from condfmt.errors import TemplateSyntaxError
from condfmt.utils.logger import get_logger

logger = get_logger(__name__)

QUOTE = "'"
BRANCH_SEPARATOR = '|'
RESULT_SEPARATOR = ':'
ELSE_MARK = '*'
NEGATION = '!'
OPERATOR_CHARS = '~<=>'

INT_PATTERN = re.compile(r'^[+-]?[0-9]+$')
FLOAT_PATTERN = re.compile(r'^[+-]?([0-9]+\.[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$')


class ParseState(Enum):
    EXPECT_TARGET = auto()
    EXPECT_CONDITION = auto()
    EXPECT_RESULT = auto()


class RangeState(Enum):
    RANGE_START = auto()
    ONE_DOT = auto()
    RANGE_END = auto()


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


@dataclass
class ParseContext:
    """In-flight state for one conditional expression."""

    condition: Condition
    state: ParseState = ParseState.EXPECT_TARGET
    branch: Branch = field(default_factory=Branch)

    # EXPECT_TARGET
    in_pointer: bool = False
    pointer_digits: str = ""

    # EXPECT_CONDITION
    op_text: str = ""
    operand_text: str = ""
    operand_start: int | None = None
    range_state: RangeState = RangeState.RANGE_START
    range_low: str = ""
    range_high: str = ""

    # EXPECT_RESULT
    expect_else_separator: bool = False
    result_text: str = ""

    def next_branch(self) -> None:
        """Reset per-branch accumulators after a branch is appended."""
        self.state = ParseState.EXPECT_TARGET
        self.branch = Branch()
        self.in_pointer = False
        self.pointer_digits = ""
        self.op_text = ""
        self.operand_text = ""
        self.operand_start = None
        self.range_state = RangeState.RANGE_START
        self.range_low = ""
        self.range_high = ""
        self.expect_else_separator = False
        self.result_text = ""


class TemplateParser:
    """Compiles template strings into CompiledTemplate objects."""

    def parse(self, source: str) -> CompiledTemplate:
        """
        Parse a template string.

        Args:
            source: Template text with optional '...' conditions and {i} placeholders

        Returns:
            CompiledTemplate with validated conditions and the plain-text tail

        Raises:
            TemplateSyntaxError: If the template is malformed
        """
        if source is None or not source.strip():
            raise TemplateSyntaxError("input string cannot be empty")

        conditions = []
        plain = []
        pos = 0

        while pos < len(source):
            ch = source[pos]
            if ch == QUOTE:
                condition, pos = self._parse_condition(source, pos, ''.join(plain))
                conditions.append(condition)
                plain = []
            else:
                plain.append(ch)
                pos += 1

        for condition in conditions:
            condition.validate()

        logger.debug(f"Compiled template with {len(conditions)} condition(s): {source!r}")
        return CompiledTemplate(source=source, conditions=tuple(conditions), tail=''.join(plain))

    # =========================================================================
    # CONDITION
    # =========================================================================

    def _parse_condition(self, source: str, start: int, prefix: str) -> tuple[Condition, int]:
        """
        Parse exactly one conditional expression starting at the opening quote.

        Returns:
            (condition, offset just past the closing quote)
        """
        end = source.find(QUOTE, start + 1)
        if end == -1:
            raise TemplateSyntaxError("unclosed quote", start)
        if end == start + 1:
            raise TemplateSyntaxError("empty condition", start)

        ctx = ParseContext(condition=Condition(prefix=prefix))

        for pos in range(start + 1, end + 1):
            ch = source[pos]

            if ch.isspace() and ctx.state != ParseState.EXPECT_RESULT:
                continue

            if ctx.state == ParseState.EXPECT_TARGET:
                self._expect_target(ctx, ch, pos)
            elif ctx.state == ParseState.EXPECT_CONDITION:
                self._expect_condition(ctx, ch, pos)
            else:
                self._expect_result(ctx, ch, pos)

        return ctx.condition, end + 1

    def _expect_target(self, ctx: ParseContext, ch: str, pos: int) -> None:
        if not ctx.in_pointer:
            if ch == ELSE_MARK:
                ctx.branch.target_pointer = ELSE_POINTER
                ctx.expect_else_separator = True
                ctx.state = ParseState.EXPECT_RESULT
            elif ch == '{':
                ctx.in_pointer = True
            elif ch == QUOTE:
                raise TemplateSyntaxError("illegal condition end: missing else branch", pos)
            else:
                raise TemplateSyntaxError(
                    f"expected target pointer or else mark, got {ch!r}", pos)
            return

        if ch == '}':
            if not ctx.pointer_digits:
                raise TemplateSyntaxError("empty pointer", pos)
            ctx.branch.target_pointer = int(ctx.pointer_digits)
            ctx.pointer_digits = ""
            ctx.in_pointer = False
            ctx.state = ParseState.EXPECT_CONDITION
        elif _is_digit(ch):
            ctx.pointer_digits += ch
        else:
            raise TemplateSyntaxError("invalid non-int pointer", pos)

    def _expect_condition(self, ctx: ParseContext, ch: str, pos: int) -> None:
        # "!" is accepted anywhere before the operand: "{0}!=a" or "{0}=!a"
        if ch == NEGATION and not ctx.operand_text and not ctx.range_low:
            if ctx.branch.negate:
                raise TemplateSyntaxError("unexpected negation", pos)
            ctx.branch.negate = True
            return

        if ctx.branch.operator is None:
            if ch in OPERATOR_CHARS:
                ctx.op_text += ch
                return

            # First non-operator char closes the operator token
            if not ctx.op_text:
                raise TemplateSyntaxError("empty comparison operator", pos)
            operator = Operator.from_token(ctx.op_text)
            if operator is None:
                raise TemplateSyntaxError(f"invalid comparison operator {ctx.op_text!r}", pos)
            ctx.branch.operator = operator

        if ctx.branch.operator == Operator.RANGE:
            self._expect_range(ctx, ch, pos)
            return

        if ch in (RESULT_SEPARATOR, BRANCH_SEPARATOR):
            if not ctx.operand_text:
                raise TemplateSyntaxError("nothing to compare to", pos)
            ctx.branch.operand = self._interpret_operand(ctx.operand_text, ctx.operand_start)
            ctx.state = ParseState.EXPECT_RESULT
        elif ch == QUOTE:
            raise TemplateSyntaxError("expected result separator", pos)
        else:
            if ctx.operand_start is None:
                ctx.operand_start = pos
            ctx.operand_text += ch

    def _expect_range(self, ctx: ParseContext, ch: str, pos: int) -> None:
        """Range spec: <digits> '..' <digits> followed by ':' (or '|')."""
        if ctx.range_state == RangeState.RANGE_START:
            if _is_digit(ch):
                ctx.range_low += ch
            elif ch == '.':
                if not ctx.range_low:
                    raise TemplateSyntaxError("expected range start number", pos)
                ctx.range_state = RangeState.ONE_DOT
            elif ch in (RESULT_SEPARATOR, BRANCH_SEPARATOR):
                raise TemplateSyntaxError('expected range start/end separator ".."', pos)
            else:
                raise TemplateSyntaxError(f"illegal symbol {ch!r} in range spec", pos)

        elif ctx.range_state == RangeState.ONE_DOT:
            if ch != '.':
                raise TemplateSyntaxError('expected range start/end separator ".."', pos)
            ctx.range_state = RangeState.RANGE_END

        else:
            if _is_digit(ch):
                ctx.range_high += ch
            elif ch in (RESULT_SEPARATOR, BRANCH_SEPARATOR):
                if not ctx.range_high:
                    raise TemplateSyntaxError("expected range end number", pos)
                ctx.branch.operand = RangeLiteral(float(ctx.range_low), float(ctx.range_high))
                ctx.state = ParseState.EXPECT_RESULT
            elif ch == '.':
                raise TemplateSyntaxError('expected colon ":" at the end of range spec', pos)
            else:
                raise TemplateSyntaxError(f"illegal symbol {ch!r} in range spec", pos)

    def _expect_result(self, ctx: ParseContext, ch: str, pos: int) -> None:
        if ctx.expect_else_separator:
            if ch.isspace():
                return
            if ch not in (RESULT_SEPARATOR, BRANCH_SEPARATOR):
                raise TemplateSyntaxError('expected ":" after else mark', pos)
            ctx.expect_else_separator = False
            return

        if ch == BRANCH_SEPARATOR:
            if ctx.branch.is_else:
                raise TemplateSyntaxError(
                    "else branch must be the last branch of a condition: "
                    "unexpected OR operator", pos)
            ctx.branch.result = self._finish_result(ctx, pos)
            ctx.condition.branches.append(ctx.branch)
            ctx.next_branch()

        elif ch == QUOTE:
            if not ctx.branch.is_else:
                raise TemplateSyntaxError("illegal condition end: missing else branch", pos)
            ctx.branch.result = self._finish_result(ctx, pos)
            ctx.condition.else_branch = ctx.branch

        else:
            ctx.result_text += ch

    def _finish_result(self, ctx: ParseContext, pos: int) -> str:
        result = ctx.result_text.strip()
        if not result:
            raise TemplateSyntaxError("expected result", pos)
        return result

    def _interpret_operand(self, text: str, offset: int | None) -> Operand:
        """Pointer, then int, then float, then raw string."""
        if text.startswith('{') and text.endswith('}'):
            inner = text[1:-1]
            if not inner or not all(_is_digit(c) for c in inner):
                raise TemplateSyntaxError(f"invalid pointer {text}", offset)
            return PointerRef(int(inner))

        if INT_PATTERN.match(text):
            return NumberLiteral(int(text), ValueKind.INTEGER)

        if FLOAT_PATTERN.match(text):
            return NumberLiteral(float(text), ValueKind.FLOAT)

        return StringLiteral(text)


_parser = TemplateParser()


def compile_template(source: str) -> CompiledTemplate:
    """Compile a template string. Raises TemplateSyntaxError on bad input."""
    return _parser.parse(source)
