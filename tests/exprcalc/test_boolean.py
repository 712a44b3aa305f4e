"""Tests for boolean operators, equality and relational comparisons."""

import re

import pytest

from exprcalc import ExprCalcEvaluationError


class TestBooleanOperators:
    """Test the boolean operator truth tables."""

    @pytest.mark.parametrize("lhs,rhs", [
        (False, False),
        (False, True),
        (True, False),
        (True, True),
    ])
    def test_truth_tables(self, calc, lhs, rhs):
        """Test every binary boolean operator against Python's own logic."""
        left = "true" if lhs else "false"
        right = "true" if rhs else "false"

        assert calc.evaluate(f"{left} and {right}") is (lhs and rhs)
        assert calc.evaluate(f"{left} or {right}") is (lhs or rhs)
        assert calc.evaluate(f"{left} xor {right}") is (lhs != rhs)
        assert calc.evaluate(f"{left} nand {right}") is (not (lhs and rhs))
        assert calc.evaluate(f"{left} nor {right}") is (not (lhs or rhs))
        assert calc.evaluate(f"{left} xnor {right}") is (lhs == rhs)

    @pytest.mark.parametrize("expression,expected", [
        ("not true", "False"),
        ("not false", "True"),
        ("not not true", "True"),
        ("not(false)", "True"),
        ("NOT true", "False"),
        ("not true and false", "False"),
        ("not (true and false)", "True"),
        ("true or false and false", "True"),
        ("(true or false) and false", "False"),
        ("True AND False", "False"),
    ])
    def test_boolean_expressions(self, calc, expression, expected):
        """Test not, grouping and boolean operator precedence."""
        assert calc.evaluate_and_format(expression) == expected

    @pytest.mark.parametrize("expression,operation", [
        ("1 and 2", "and"),
        ("true and 1", "and"),
        ("1.5 or false", "or"),
        ("0 xor 1", "xor"),
        ("true nand 0", "nand"),
        ("1 nor true", "nor"),
        ("false xnor 2", "xnor"),
        ("not 1", "not"),
    ])
    def test_boolean_operators_reject_numbers(self, calc, expression, operation):
        """Test numbers never take part in boolean logic."""
        with pytest.raises(ExprCalcEvaluationError, match=re.escape(f"Unsupported operand for '{operation}'")):
            calc.evaluate(expression)


class TestComparisons:
    """Test equality and relational operators."""

    @pytest.mark.parametrize("expression,expected", [
        ("1 < 2", True),
        ("2 < 1", False),
        ("2 <= 2", True),
        ("3 <= 2", False),
        ("3 > 4", False),
        ("4 > 3", True),
        ("1 >= 1.0", True),
        ("0.5 >= 1", False),
        ("2.5 > 2", True),
        ("-1 < 0", True),
    ])
    def test_relational(self, calc, expression, expected):
        """Test relational operators, including mixed integer and real operands."""
        assert calc.evaluate(expression) is expected

    @pytest.mark.parametrize("expression,expected", [
        ("1 == 1", True),
        ("1 == 1.0", True),
        ("1 == 2", False),
        ("1 != 2", True),
        ("2.5 != 2.5", False),
        ("true == true", True),
        ("true == false", False),
        ("true != false", True),
        ("1 + 1 == 2", True),
        ("1 < 2 == 2 < 3", True),
        ("1 < 2 == false", False),
    ])
    def test_equality(self, calc, expression, expected):
        """Test equality within booleans and within promoted numbers."""
        assert calc.evaluate(expression) is expected

    @pytest.mark.parametrize("expression,operation", [
        ("true == 1", "=="),
        ("1.0 != false", "!="),
    ])
    def test_equality_rejects_mixed_kinds(self, calc, expression, operation):
        """Test booleans and numbers cannot be compared for equality."""
        with pytest.raises(ExprCalcEvaluationError, match=re.escape(f"Unsupported operand for '{operation}'")):
            calc.evaluate(expression)

    @pytest.mark.parametrize("expression,operation", [
        ("true < false", "<"),
        ("1 <= true", "<="),
        ("false > 0", ">"),
        ("true >= true", ">="),
    ])
    def test_relational_rejects_booleans(self, calc, expression, operation):
        """Test relational operators only accept numbers."""
        with pytest.raises(ExprCalcEvaluationError, match=re.escape(f"Unsupported operand for '{operation}'")):
            calc.evaluate(expression)

    def test_comparison_results_format_as_booleans(self, calc):
        """Test boolean results are formatted as True and False."""
        assert calc.evaluate_and_format("1 < 2") == "True"
        assert calc.evaluate_and_format("1 > 2") == "False"
