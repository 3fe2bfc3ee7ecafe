"""Tests for branch testing and condition application."""

import pytest

from condfmt import (
    Branch,
    ConditionEvaluator,
    InvalidRangeError,
    NullArgumentError,
    NumberLiteral,
    Operator,
    PointerOutOfRangeError,
    PointerRef,
    RangeLiteral,
    StringLiteral,
    TypeMismatchError,
    UnsupportedOperatorError,
    ValueKind,
    compile_template,
)


def condition_of(source: str):
    return compile_template(source).conditions[0]


def number_branch(operator: Operator, value, negate: bool = False) -> Branch:
    return Branch(
        target_pointer=0,
        operator=operator,
        negate=negate,
        operand=NumberLiteral(value, ValueKind.INTEGER if isinstance(value, int) else ValueKind.FLOAT),
        result="r",
    )


# =============================================================================
# BRANCH SELECTION
# =============================================================================


class TestApply:
    """First matching branch wins; else branch is the fallback."""

    def test_first_match_wins(self, evaluator):
        """Earlier branches take priority."""
        condition = condition_of("'{0}>10:huge|{0}>5:big|*:small'")
        assert evaluator.apply(condition, [20]) == "huge"
        assert evaluator.apply(condition, [7]) == "big"
        assert evaluator.apply(condition, [1]) == "small"

    def test_prefix_prepended(self, evaluator):
        """Prefix text comes before the selected result."""
        condition = condition_of("Size: '{0}>5:big|*:small'")
        assert evaluator.apply(condition, [9]) == "Size: big"

    def test_later_branches_not_tested_after_match(self, evaluator):
        """A matching branch short-circuits branches that would fail."""
        condition = condition_of("'{0}=1:one|{5}=2:never|*:other'")
        assert evaluator.apply(condition, [1]) == "one"
        with pytest.raises(PointerOutOfRangeError):
            evaluator.apply(condition, [2])

    def test_else_branch_when_nothing_matches(self, evaluator):
        """Else result when no branch matches."""
        condition = condition_of("'{0}=a:A|{0}=b:B|*:other'")
        assert evaluator.apply(condition, ["c"]) == "other"


# =============================================================================
# NUMERIC COMPARISON
# =============================================================================


class TestNumericComparison:
    """Numbers compare by value with the branch operator."""

    @pytest.mark.parametrize("operator,target,expected", [
        (Operator.EQUAL, 5, True),
        (Operator.EQUAL, 4, False),
        (Operator.LESS, 4, True),
        (Operator.LESS, 5, False),
        (Operator.LESS_OR_EQUAL, 5, True),
        (Operator.LESS_OR_EQUAL, 6, False),
        (Operator.GREATER, 6, True),
        (Operator.GREATER, 5, False),
        (Operator.GREATER_OR_EQUAL, 5, True),
        (Operator.GREATER_OR_EQUAL, 4, False),
    ])
    def test_operators(self, evaluator, operator, target, expected):
        """Each operator against the literal 5."""
        assert evaluator.test(number_branch(operator, 5), [target]) is expected

    @pytest.mark.parametrize("operator,target", [
        (Operator.EQUAL, 5),
        (Operator.LESS, 3),
        (Operator.GREATER, 9),
    ])
    def test_negation_flips_result(self, evaluator, operator, target):
        """'!' inverts the branch outcome."""
        plain = evaluator.test(number_branch(operator, 5), [target])
        negated = evaluator.test(number_branch(operator, 5, negate=True), [target])
        assert negated is (not plain)

    def test_negated_complementary_branches(self, evaluator):
        """'!=' selects the opposite branch from '='."""
        equal = condition_of("'{0}=5:first|*:second'")
        not_equal = condition_of("'{0}!=5:first|*:second'")
        assert evaluator.apply(equal, [5]) == "first"
        assert evaluator.apply(not_equal, [5]) == "second"
        assert evaluator.apply(equal, [6]) == "second"
        assert evaluator.apply(not_equal, [6]) == "first"

    def test_float_literal_against_float(self, evaluator):
        """Float literals compare with float args."""
        condition = condition_of("'{0}>=2.5:a|*:b'")
        assert evaluator.apply(condition, [2.5]) == "a"
        assert evaluator.apply(condition, [2.4]) == "b"

    def test_int_vs_float_is_mismatch_when_strict(self, evaluator):
        """Strict mode keeps int and float apart."""
        condition = condition_of("'{0}>5:big|*:small'")
        with pytest.raises(TypeMismatchError) as exc_info:
            evaluator.apply(condition, [7.0])
        assert exc_info.value.target_kind == "float"
        assert exc_info.value.operand_kind == "int"

    def test_int_vs_float_allowed_when_lenient(self, lenient_evaluator):
        """Lenient mode compares int and float freely."""
        condition = condition_of("'{0}>5:big|*:small'")
        assert lenient_evaluator.apply(condition, [7.0]) == "big"
        assert lenient_evaluator.apply(condition, [4.5]) == "small"

    def test_huge_int_target(self, evaluator):
        """Ints beyond float range still compare against small literals."""
        condition = condition_of("'{0}>5:big|*:small'")
        assert evaluator.apply(condition, [10**400]) == "big"
        assert evaluator.apply(condition, [-10**400]) == "small"

    def test_huge_int_against_float_when_lenient(self, lenient_evaluator):
        """Mixed int and float comparison does not overflow."""
        condition = condition_of("'{0}>=2.5:big|*:small'")
        assert lenient_evaluator.apply(condition, [10**400]) == "big"

    def test_large_ints_compare_exactly(self, evaluator):
        """Ints past 2**53 are not rounded before comparing."""
        condition = condition_of("'{0}>9007199254740992:more|*:not more'")
        assert evaluator.apply(condition, [2**53 + 1]) == "more"
        assert evaluator.apply(condition, [2**53]) == "not more"


# =============================================================================
# RANGE
# =============================================================================


class TestRange:
    """Inclusive range checks."""

    @pytest.mark.parametrize("target,expected", [
        (1, True),
        (10, True),
        (5.5, True),
        (0.999, False),
        (10.001, False),
        (-3, False),
    ])
    def test_inclusive_bounds(self, evaluator, target, expected):
        """Both range ends are inside the range."""
        condition = condition_of("'{0}~1..10:in|*:out'")
        assert evaluator.apply(condition, [target]) == ("in" if expected else "out")

    def test_negated_range(self, evaluator):
        """'!~' matches outside the range."""
        condition = condition_of("'{0}!~1..3:outside|*:inside'")
        assert evaluator.apply(condition, [2]) == "inside"
        assert evaluator.apply(condition, [4]) == "outside"

    @pytest.mark.parametrize("source", ["'{0}~10..1:in|*:out'", "'{0}~5..5:in|*:out'"])
    def test_inverted_or_equal_bounds_fail(self, evaluator, source):
        """Range needs low < high at render time."""
        with pytest.raises(InvalidRangeError) as exc_info:
            evaluator.apply(condition_of(source), [5])
        assert exc_info.value.low >= exc_info.value.high

    def test_text_target_fails(self, evaluator):
        """Ranges only apply to numbers."""
        with pytest.raises(TypeMismatchError, match="must be a number"):
            evaluator.apply(condition_of("'{0}~1..10:in|*:out'"), ["5"])

    def test_range_accepts_any_numeric_kind(self, evaluator):
        """Ranges take ints and floats even in strict mode."""
        branch = Branch(target_pointer=0, operator=Operator.RANGE,
                        operand=RangeLiteral(1.0, 2.0), result="r")
        assert evaluator.test(branch, [1]) is True
        assert evaluator.test(branch, [1.5]) is True

    def test_huge_int_outside_range(self, evaluator):
        """Range check on an int beyond float range."""
        condition = condition_of("'{0}~1..10:in|*:out'")
        assert evaluator.apply(condition, [10**400]) == "out"


# =============================================================================
# TEXT AND OBJECTS
# =============================================================================


class TestTextComparison:
    """Strings only support '='."""

    def test_text_equality(self, evaluator):
        """Text matches by equality."""
        condition = condition_of("'{0}=admin:Welcome back|*:Hello'")
        assert evaluator.apply(condition, ["admin"]) == "Welcome back"
        assert evaluator.apply(condition, ["bob"]) == "Hello"

    def test_text_inequality(self, evaluator):
        """Negated text equality."""
        condition = condition_of("'{0}!=admin:guest|*:admin'")
        assert evaluator.apply(condition, ["bob"]) == "guest"

    def test_text_ordering_unsupported(self, evaluator):
        """Ordering operators fail on text."""
        with pytest.raises(UnsupportedOperatorError) as exc_info:
            evaluator.apply(condition_of("'{0}<abc:x|*:y'"), ["abd"])
        assert exc_info.value.operator == "<"
        assert exc_info.value.kind == "str"

    def test_number_against_text_mismatch(self, evaluator):
        """Numeric literal against a text argument."""
        with pytest.raises(TypeMismatchError):
            evaluator.apply(condition_of("'{0}>5:a|*:b'"), ["7"])

    def test_text_against_number_literal_string(self, evaluator):
        """A numeric-looking operand is a number, so text targets don't match it."""
        with pytest.raises(TypeMismatchError):
            evaluator.apply(condition_of("'{0}=5:a|*:b'"), ["5"])

    def test_bool_is_not_a_number(self, evaluator):
        """bool arguments are objects, not ints."""
        with pytest.raises(TypeMismatchError):
            evaluator.apply(condition_of("'{0}=1:a|*:b'"), [True])

    def test_same_type_objects_compare_equal(self, evaluator):
        """Objects of one type compare with '='."""
        condition = condition_of("'{0}={1}:same|*:diff'")
        assert evaluator.apply(condition, [(1, 2), (1, 2)]) == "same"
        assert evaluator.apply(condition, [(1, 2), (3, 4)]) == "diff"

    def test_different_object_types_mismatch(self, evaluator):
        """Objects of different types don't compare."""
        with pytest.raises(TypeMismatchError) as exc_info:
            evaluator.apply(condition_of("'{0}={1}:same|*:diff'"), [(1, 2), [1, 2]])
        assert exc_info.value.target_kind == "tuple"
        assert exc_info.value.operand_kind == "list"

    def test_object_ordering_unsupported(self, evaluator):
        """Ordering operators fail on objects."""
        with pytest.raises(UnsupportedOperatorError):
            evaluator.apply(condition_of("'{0}<{1}:x|*:y'"), [(1,), (2,)])


# =============================================================================
# POINTERS
# =============================================================================


class TestPointers:
    """Argument resolution for targets and pointer operands."""

    def test_pointer_operand(self, evaluator):
        """Operand read from another argument."""
        condition = condition_of("'{0}>{1}:more|*:less'")
        assert evaluator.apply(condition, [3, 2]) == "more"
        assert evaluator.apply(condition, [1, 2]) == "less"

    def test_pointer_operand_kind_mismatch(self, evaluator):
        """Pointer operand must match the target kind."""
        with pytest.raises(TypeMismatchError):
            evaluator.apply(condition_of("'{0}>{1}:more|*:less'"), [1, "2"])

    def test_target_out_of_range(self, evaluator):
        """Target index past the argument list."""
        with pytest.raises(PointerOutOfRangeError) as exc_info:
            evaluator.apply(condition_of("'{3}=1:a|*:b'"), [1])
        assert exc_info.value.index == 3
        assert exc_info.value.arg_count == 1
        assert isinstance(exc_info.value, IndexError)

    def test_no_args(self, evaluator):
        """Any pointer fails with no arguments."""
        with pytest.raises(PointerOutOfRangeError):
            evaluator.apply(condition_of("'{0}=1:a|*:b'"), [])

    def test_operand_out_of_range(self, evaluator):
        """Operand index past the argument list."""
        with pytest.raises(PointerOutOfRangeError) as exc_info:
            evaluator.apply(condition_of("'{0}>{1}:more|*:less'"), [1])
        assert exc_info.value.index == 1

    def test_none_target(self, evaluator):
        """None target argument."""
        with pytest.raises(NullArgumentError) as exc_info:
            evaluator.apply(condition_of("'{0}=1:a|*:b'"), [None])
        assert exc_info.value.index == 0

    def test_none_operand(self, evaluator):
        """None operand argument."""
        with pytest.raises(NullArgumentError) as exc_info:
            evaluator.apply(condition_of("'{0}>{1}:more|*:less'"), [1, None])
        assert exc_info.value.index == 1


# =============================================================================
# KINDS AND CONFIG
# =============================================================================


class TestKinds:
    """Runtime kind detection."""

    @pytest.mark.parametrize("value,kind", [
        (1, ValueKind.INTEGER),
        (1.5, ValueKind.FLOAT),
        ("x", ValueKind.TEXT),
        (True, ValueKind.OBJECT),
        (None, ValueKind.OBJECT),
        ([1], ValueKind.OBJECT),
    ])
    def test_strict_kinds(self, evaluator, value, kind):
        """Kind detection in strict mode."""
        assert evaluator.kind_of(value) == kind

    def test_lenient_numbers(self, lenient_evaluator):
        """Lenient mode folds ints and floats into NUMBER."""
        assert lenient_evaluator.kind_of(1) == ValueKind.NUMBER
        assert lenient_evaluator.kind_of(1.5) == ValueKind.NUMBER
        assert lenient_evaluator.kind_of("1") == ValueKind.TEXT

    def test_default_follows_config(self, saved_config):
        """Evaluator default comes from Config."""
        saved_config.STRICT_NUMBER_KINDS = False
        assert ConditionEvaluator().strict_number_kinds is False
        saved_config.STRICT_NUMBER_KINDS = True
        assert ConditionEvaluator().strict_number_kinds is True

    def test_literal_operand_direct(self, evaluator):
        """Hand-built branch with a string literal."""
        branch = Branch(target_pointer=0, operator=Operator.EQUAL,
                        operand=StringLiteral("on"), result="r")
        assert evaluator.test(branch, ["on"]) is True

    def test_pointer_operand_direct(self, evaluator):
        """Hand-built branch with a pointer operand."""
        branch = Branch(target_pointer=1, operator=Operator.LESS,
                        operand=PointerRef(0), result="r")
        assert evaluator.test(branch, [10, 3]) is True
