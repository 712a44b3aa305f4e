"""Tests for arithmetic operators and numeric promotion."""

import re
import sys

import pytest

from exprcalc import ExprCalcEvaluationError


class TestArithmetic:
    """Test arithmetic operators on integers and reals."""

    @pytest.mark.parametrize("expression,expected", [
        # Precedence and associativity
        ("2 + 3 * 4", "14"),
        ("(2 + 3) * 4", "20"),
        ("2 ** 3 ** 2", "512"),
        ("(2 ** 3) ** 2", "64"),
        ("10 - 3 - 2", "5"),
        ("100 / 10 / 5", "2"),

        # Prefix operators
        ("-3 + 4", "1"),
        ("3 - +4", "-1"),
        ("+5", "5"),
        ("- -5", "5"),
        ("-2 ** 2", "-4"),
        ("(-2) ** 2", "4"),
        ("2 * -3", "-6"),

        # Binary literals
        ("0b101 + 1", "6"),
        ("0B11 * 0b10", "6"),
    ])
    def test_integer_arithmetic(self, calc, expression, expected):
        """Test integer expressions stay in the integer domain."""
        assert calc.evaluate_and_format(expression) == expected

    @pytest.mark.parametrize("expression,expected", [
        ("1 / 2", "0"),
        ("7 / 2", "3"),
        ("-7 / 2", "-3"),
        ("7 / -2", "-3"),
        ("-7 / -2", "3"),
        ("6 / 3", "2"),
    ])
    def test_integer_division_truncates(self, calc, expression, expected):
        """Test integer division rounds toward zero."""
        assert calc.evaluate_and_format(expression) == expected

    @pytest.mark.parametrize("expression,expected", [
        ("7 % 3", "1"),
        ("-7 % 3", "-1"),
        ("7 % -3", "1"),
        ("-7 % -3", "-1"),
        ("6 % 3", "0"),
        ("7 mod 3", "1"),
        ("7 MOD 3", "1"),
    ])
    def test_modulus_sign_follows_dividend(self, calc, expression, expected):
        """Test integer modulus takes the sign of the dividend."""
        assert calc.evaluate_and_format(expression) == expected

    @pytest.mark.parametrize("expression,expected", [
        ("1.0 / 2", "0.5"),
        ("1 / 2.0", "0.5"),
        ("1 + 2.5", "3.5"),
        ("2.5 * 2", "5.0"),
        ("5 - 7.5", "-2.5"),
        ("-(2.5)", "-2.5"),
        ("0.1 + 0.2", "0.30000000000000004"),
        ("2.0 ** 3", "8.0"),
        ("4 ** 0.5", "2.0"),
    ])
    def test_real_arithmetic(self, calc, expression, expected):
        """Test that any real operand promotes the operation to the real domain."""
        assert calc.evaluate_and_format(expression) == expected

    @pytest.mark.parametrize("expression,expected", [
        ("2 ** -1", "0.5"),
        ("2 ** -2", "0.25"),
        ("10 ** 0", "1"),
        ("0 ** 0", "1"),
    ])
    def test_power_exponents(self, calc, expression, expected):
        """Test negative integer exponents produce reals and zero exponents produce 1."""
        assert calc.evaluate_and_format(expression) == expected

    @pytest.mark.parametrize("expression,expected", [
        ("0!", "1"),
        ("1!", "1"),
        ("3!", "6"),
        ("-3!", "-6"),
        ("3!!", "720"),
        ("(1 + 2)!", "6"),
        ("2 ** 3!", "64"),
        ("20!", "2432902008176640000"),
    ])
    def test_factorial(self, calc, expression, expected):
        """Test postfix factorial binds tighter than everything else."""
        assert calc.evaluate_and_format(expression) == expected

    def test_integers_are_arbitrary_precision(self, calc):
        """Test integer results are exact however large they grow."""
        assert calc.evaluate("2 ** 100") == 2 ** 100
        assert calc.evaluate("123456789012345678901234567890 * 10") == 1234567890123456789012345678900
        assert calc.evaluate("30! / 29!") == 30

    def test_python_result_types(self, calc, helpers):
        """Test evaluate() returns Python int or float matching the value kind."""
        helpers.assert_python_result(calc, "1 / 2", 0)
        helpers.assert_python_result(calc, "1.0 / 2", 0.5)
        helpers.assert_python_result(calc, "2 ** -1", 0.5)
        helpers.assert_python_result(calc, "3!", 6)

    @pytest.mark.parametrize("expression", [
        "1 / 0",
        "1.0 / 0",
        "1 / 0.0",
        "0 ** -1",
        "0.0 ** -2",
    ])
    def test_division_by_zero(self, calc, expression):
        """Test division by zero in both domains."""
        with pytest.raises(ExprCalcEvaluationError, match="Division by zero"):
            calc.evaluate(expression)

    def test_modulus_by_zero(self, calc):
        """Test modulus by zero."""
        with pytest.raises(ExprCalcEvaluationError, match="Modulus by zero"):
            calc.evaluate("5 % 0")

    @pytest.mark.parametrize("expression", [
        "5.0 % 2",
        "5 % 2.0",
        "true % 2",
    ])
    def test_modulus_requires_integers(self, calc, expression):
        """Test modulus rejects reals and booleans."""
        with pytest.raises(ExprCalcEvaluationError, match=re.escape("Unsupported operand for '%'")):
            calc.evaluate(expression)

    @pytest.mark.parametrize("expression,operation", [
        ("true + 1", "+"),
        ("1 - false", "-"),
        ("true * true", "*"),
        ("1 / true", "/"),
        ("true ** 2", "**"),
        ("-true", "-"),
    ])
    def test_arithmetic_rejects_booleans(self, calc, expression, operation):
        """Test booleans never take part in arithmetic."""
        with pytest.raises(ExprCalcEvaluationError, match=re.escape(f"Unsupported operand for '{operation}'")):
            calc.evaluate(expression)

    @pytest.mark.parametrize("expression", [
        "(-3)!",
        "2.5!",
        "true!",
    ])
    def test_factorial_requires_non_negative_integer(self, calc, expression):
        """Test factorial rejects negatives, reals and booleans."""
        with pytest.raises(ExprCalcEvaluationError, match=re.escape("Unsupported operand for '!'")):
            calc.evaluate(expression)

    def test_real_overflow(self, calc):
        """Test real results that overflow are reported."""
        with pytest.raises(ExprCalcEvaluationError, match="Real overflow"):
            calc.evaluate("10.0 ** 300 * 10.0 ** 300")

        with pytest.raises(ExprCalcEvaluationError, match="Math error"):
            calc.evaluate("10.0 ** 400")

    def test_integer_too_large_for_real(self, calc):
        """Test promotion of an integer beyond the float range."""
        with pytest.raises(ExprCalcEvaluationError, match="Integer too large to convert to a real") as exc_info:
            calc.evaluate("10 ** 400 + 0.5")

        assert isinstance(exc_info.value.__cause__, OverflowError)

    def test_negative_base_fractional_exponent(self, calc):
        """Test real powers outside the real domain."""
        with pytest.raises(ExprCalcEvaluationError, match="Math error"):
            calc.evaluate("(-8.0) ** 0.5")

    @pytest.mark.skipif(sys.version_info < (3, 11), reason="Integer string conversion limit added in Python 3.11")
    def test_result_too_large_to_format(self, calc):
        """Test formatting an integer beyond the interpreter's string conversion limit."""
        assert calc.evaluate("10 ** 5000") == 10 ** 5000
        with pytest.raises(ExprCalcEvaluationError, match="Result is too large to format"):
            calc.evaluate_and_format("10 ** 5000")

    @pytest.mark.parametrize("expression,message", [
        ("10 ** 5000 / 0", "Division by zero"),
        ("10 ** 5000 % 0", "Modulus by zero"),
        ("10 ** 5000 and true", "Unsupported operand for 'and'"),
        ("10 ** 5000 == true", "Unsupported operand for '=='"),
        ("(-(10 ** 5000))!", "Unsupported operand for '!': negative integer"),
        ("10 ** 5000 10 ** 5000", "Too many operands"),
    ])
    def test_errors_involving_huge_integers(self, calc, expression, message):
        """Test errors that mention an integer too long to write in decimal are still evaluation errors."""
        with pytest.raises(ExprCalcEvaluationError, match=re.escape(message)):
            calc.evaluate(expression)

    @pytest.mark.skipif(sys.version_info < (3, 11), reason="Integer string conversion limit added in Python 3.11")
    def test_huge_integers_described_by_size(self, calc):
        """Test error details describe integers past the conversion limit by their bit length."""
        with pytest.raises(ExprCalcEvaluationError) as exc_info:
            calc.evaluate("10 ** 5000 / 0")

        assert "<integer of 16610 bits> / 0" in str(exc_info.value)
