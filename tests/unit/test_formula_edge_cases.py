"""
Edge case tests for quantity formulas.

Tests cover:
- Large and very small measurements
- Deep nesting and operator precedence
- Unary minus handling
- Zero operands and division by zero
- Rejection of anything that is not plain arithmetic
- Whitespace and case handling
"""

import math

import pytest

from roofcost.config.errors import (
    DivisionByZeroError,
    FormulaError,
    FormulaSyntaxError,
    UnknownVariableError,
)
from roofcost.models.variables import RoofVariables
from roofcost.services.formula_parser import evaluate_formula, validate_formula


EXTREME_VARIABLES = RoofVariables(
    SQ=1_000_000,
    SF=100_000_000,
    P=50_000,
    EAVE=25_000,
    R=10_000,
    VAL=5_000,
    HIP=5_000,
    RAKE=20_000,
    SKYLIGHT_COUNT=100,
    CHIMNEY_COUNT=50,
    PIPE_COUNT=200,
    VENT_COUNT=150,
    GUTTER_LF=25_000,
    DS_COUNT=100,
)

TINY_VARIABLES = RoofVariables(
    SQ=0.001,
    SF=0.1,
    P=0.5,
    EAVE=0.25,
    R=0.125,
    VAL=0.0625,
    HIP=0,
    RAKE=0.25,
    PIPE_COUNT=1,
    VENT_COUNT=1,
    GUTTER_LF=0.5,
    DS_COUNT=1,
)


# =============================================================================
# MAGNITUDE
# =============================================================================


class TestLargeNumbers:

    def test_large_roof_size(self):
        assert evaluate_formula("SF", EXTREME_VARIABLES) == 100_000_000

    def test_large_multiplication(self):
        assert evaluate_formula("SQ*1000", EXTREME_VARIABLES) == 1_000_000_000

    def test_large_nested_calculation(self):
        result = evaluate_formula("(SQ*100)+(SF*10)", EXTREME_VARIABLES)
        assert result == 1_100_000_000

    def test_product_of_large_numbers(self):
        result = evaluate_formula("SF*SF/1000000", EXTREME_VARIABLES)
        assert result == pytest.approx(10_000_000_000)

    def test_worst_case_estimate_is_finite(self):
        result = evaluate_formula(
            "((SQ*250)+(EAVE*15)+(RAKE*15)+(R*20))*1.15*1.25*1.5",
            EXTREME_VARIABLES,
        )
        assert math.isfinite(result)


class TestSmallNumbers:

    def test_very_small_measurement(self):
        assert evaluate_formula("SQ", TINY_VARIABLES) == 0.001

    def test_small_multiplication(self):
        assert evaluate_formula("SQ*1.10", TINY_VARIABLES) == pytest.approx(0.0011)

    def test_small_division(self):
        assert evaluate_formula("SF/100", TINY_VARIABLES) == pytest.approx(0.001)

    def test_small_addition(self):
        assert evaluate_formula("SQ+SF+P", TINY_VARIABLES) == pytest.approx(0.601)

    def test_no_underflow(self):
        result = evaluate_formula("SQ*0.001", TINY_VARIABLES)
        assert result > 0
        assert result == pytest.approx(0.000001)


# =============================================================================
# STRUCTURE
# =============================================================================


class TestNestingAndPrecedence:

    def test_five_levels_of_nesting(self, sample_variables):
        assert evaluate_formula("((((SQ+5)*2)-10)/2)+5", sample_variables) == 30

    def test_redundant_parentheses(self, sample_variables):
        assert evaluate_formula("(((((((SQ))))+1)*2)/2)-1", sample_variables) == 25

    def test_sibling_groups(self, sample_variables):
        assert evaluate_formula("(SQ+5)*(EAVE-50)/(R+10)", sample_variables) == 25

    def test_all_operators_nested(self, sample_variables):
        assert evaluate_formula("((SQ+10)*(R-10))/(EAVE/10)", sample_variables) == 140

    def test_additive_left_to_right(self, sample_variables):
        assert evaluate_formula("100-50+25-10", sample_variables) == 65

    def test_multiplicative_left_to_right(self, sample_variables):
        assert evaluate_formula("100/10*5/2", sample_variables) == 25

    def test_multiplication_before_addition(self, sample_variables):
        assert evaluate_formula("10+5*3", sample_variables) == 25

    def test_division_before_subtraction(self, sample_variables):
        assert evaluate_formula("20-10/2", sample_variables) == 15

    def test_mixed_operators(self, sample_variables):
        assert evaluate_formula("10+20*3-40/2+5", sample_variables) == 55

    def test_parentheses_override_precedence(self, sample_variables):
        assert evaluate_formula("(10+20)*3", sample_variables) == 90


class TestLongFormulas:

    def test_long_sum_validates(self):
        result = validate_formula("+".join(["SQ"] * 3000))

        assert result.valid is True
        assert result.required_variables == ["SQ"]

    def test_long_sum_evaluates(self, sample_variables):
        assert evaluate_formula("+".join(["SQ"] * 3000), sample_variables) == pytest.approx(75000)

    def test_long_product_evaluates(self, sample_variables):
        assert evaluate_formula("*".join(["1"] * 3000) + "*SQ", sample_variables) == 25

    def test_deep_parentheses_fail_in_both_paths(self, sample_variables):
        formula = "(" * 3000 + "SQ" + ")" * 3000

        result = validate_formula(formula)
        assert result.valid is False
        assert "nested too deeply" in result.error

        with pytest.raises(FormulaSyntaxError, match="nested too deeply"):
            evaluate_formula(formula, sample_variables)


class TestUnaryMinus:

    def test_leading_minus(self, sample_variables):
        assert evaluate_formula("-10", sample_variables) == -10
        assert evaluate_formula("-SQ", sample_variables) == -25

    def test_minus_after_operator(self, sample_variables):
        assert evaluate_formula("10+-5", sample_variables) == 5
        assert evaluate_formula("10--5", sample_variables) == 15
        assert evaluate_formula("10*-5", sample_variables) == -50
        assert evaluate_formula("10/-5", sample_variables) == -2

    def test_double_minus(self, sample_variables):
        assert evaluate_formula("--10", sample_variables) == 10

    def test_minus_inside_parentheses(self, sample_variables):
        assert evaluate_formula("(-SQ)", sample_variables) == -25
        assert evaluate_formula("10+(-5)", sample_variables) == 5
        assert evaluate_formula("(-10)*(-5)", sample_variables) == 50

    def test_unary_plus_not_supported(self):
        assert validate_formula("+SQ").valid is False


class TestZeroOperands:

    def test_literal_division_by_zero(self, sample_variables):
        with pytest.raises(DivisionByZeroError):
            evaluate_formula("SQ/0", sample_variables)

    def test_division_by_zero_variable(self, sample_variables):
        with pytest.raises(DivisionByZeroError):
            evaluate_formula("SQ/HIP", sample_variables)

    def test_division_by_zero_expression(self, sample_variables):
        with pytest.raises(DivisionByZeroError):
            evaluate_formula("SQ/(EAVE-100)", sample_variables)

    def test_zero_numerator(self, sample_variables):
        assert evaluate_formula("0/SQ", sample_variables) == 0
        assert evaluate_formula("HIP/SQ", sample_variables) == 0

    def test_zero_in_multiplication(self, sample_variables):
        assert evaluate_formula("SQ*0", sample_variables) == 0
        assert evaluate_formula("SQ*HIP", sample_variables) == 0

    def test_zero_in_addition(self, sample_variables):
        assert evaluate_formula("SQ+0", sample_variables) == 25
        assert evaluate_formula("0-SQ", sample_variables) == -25


# =============================================================================
# MALFORMED AND HOSTILE INPUT
# =============================================================================


class TestMalformedFormulas:

    @pytest.mark.parametrize("formula", ["(SQ+5", "SQ+5)", "((SQ+5)"])
    def test_unbalanced_parentheses(self, formula):
        assert validate_formula(formula).valid is False

    @pytest.mark.parametrize("formula", ["SQ++5", "SQ**5", "SQ//5"])
    def test_consecutive_operators(self, formula):
        assert validate_formula(formula).valid is False

    @pytest.mark.parametrize("formula", ["SQ+", "SQ*", "SQ/"])
    def test_trailing_operator(self, formula):
        assert validate_formula(formula).valid is False

    @pytest.mark.parametrize("formula", ["*SQ", "/SQ"])
    def test_leading_operator(self, formula):
        assert validate_formula(formula).valid is False

    @pytest.mark.parametrize("formula", ["()", "SQ+()"])
    def test_empty_parentheses(self, formula):
        assert validate_formula(formula).valid is False


class TestArithmeticOnly:
    """Anything beyond arithmetic over known variables must fail."""

    @pytest.mark.parametrize(
        "formula",
        [
            'eval("1+1")',
            "__import__(os)",
            "open(SQ)",
            "Math.pow(2,3)",
            "SQ.real",
            "SQ;5",
            "SQ=10",
            "SQ+=5",
            "SQ>10",
            "SQ<10",
            "SQ==10",
            '"test"',
            "'test'",
            "`test`",
            "SQ[0]",
            "[1,2,3]",
            "{a:1}",
            "SQ**2",
            "SQ%2",
            "lambda: 1",
        ],
    )
    def test_rejected_as_syntax_error(self, formula, sample_variables):
        with pytest.raises(FormulaSyntaxError):
            evaluate_formula(formula, sample_variables)

    def test_bare_identifier_is_unknown_variable(self, sample_variables):
        with pytest.raises(UnknownVariableError):
            evaluate_formula("__class__", sample_variables)

    def test_all_failures_share_base_class(self, sample_variables):
        for formula in ["SQ+", "NOPE", "SQ/0"]:
            with pytest.raises(FormulaError):
                evaluate_formula(formula, sample_variables)


# =============================================================================
# WHITESPACE, PRECISION AND NAMES
# =============================================================================


class TestWhitespace:

    @pytest.mark.parametrize("formula", ["  SQ", "\tSQ", "\nSQ", "SQ  ", "SQ\t", "SQ\n"])
    def test_surrounding_whitespace(self, formula, sample_variables):
        assert evaluate_formula(formula, sample_variables) == 25

    def test_whitespace_between_tokens(self, sample_variables):
        assert evaluate_formula("SQ + 10", sample_variables) == 35
        assert evaluate_formula("SQ\t+\t10", sample_variables) == 35
        assert evaluate_formula("(  SQ  +  5  )  *  2", sample_variables) == 60

    def test_whitespace_only_is_empty(self, sample_variables):
        assert evaluate_formula("   ", sample_variables) == 0
        assert evaluate_formula("\t\n", sample_variables) == 0


class TestPrecisionAndNames:

    def test_decimal_multiplication(self, sample_variables):
        assert evaluate_formula("SQ*1.05", sample_variables) == pytest.approx(26.25)

    def test_leading_and_trailing_decimal_point(self, sample_variables):
        assert evaluate_formula(".5*SQ", sample_variables) == pytest.approx(12.5)
        assert evaluate_formula("5.*2", sample_variables) == pytest.approx(10.0)

    def test_repeating_decimal(self, sample_variables):
        assert evaluate_formula("10/3", sample_variables) == pytest.approx(3.3333333333)

    def test_precision_through_operations(self, sample_variables):
        assert evaluate_formula("((1.5*2.5)+0.25)/0.5", sample_variables) == 8

    @pytest.mark.parametrize("formula", ["sq", "Sq", "sQ"])
    def test_case_insensitive(self, formula, sample_variables):
        assert evaluate_formula(formula, sample_variables) == 25

    def test_underscore_names(self, sample_variables):
        assert evaluate_formula("skylight_count", sample_variables) == 1
        assert evaluate_formula("GUTTER_LF", sample_variables) == 100

    def test_slope_names_with_digits(self, sample_variables):
        assert evaluate_formula("F1SQ", sample_variables) == 12.5
        assert evaluate_formula("F2SF", sample_variables) == 1250
        assert evaluate_formula("f1pitch", sample_variables) == 5

    def test_missing_slope_is_unknown(self, sample_variables):
        with pytest.raises(UnknownVariableError):
            evaluate_formula("F99SQ", sample_variables)
