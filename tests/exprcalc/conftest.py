"""Shared fixtures and utilities for ExprCalc tests."""

from typing import Any, List

import pytest

from exprcalc import ExprCalc, ExprCalcEvaluator, ExprCalcParser, ExprCalcToken, ExprCalcTokenizer


@pytest.fixture
def calc():
    """Create a fresh ExprCalc instance for each test."""
    return ExprCalc()


@pytest.fixture
def tokenizer():
    """Create a fresh tokenizer (with its own symbol table) for each test."""
    return ExprCalcTokenizer()


@pytest.fixture
def parser():
    """Create a parser."""
    return ExprCalcParser()


@pytest.fixture
def evaluator(tokenizer):
    """Create an evaluator sharing the tokenizer fixture's symbol table."""
    return ExprCalcEvaluator(tokenizer.symbol_table)


class ExprCalcTestHelpers:
    """Helper utilities for ExprCalc testing."""

    @staticmethod
    def spellings(tokens: List[ExprCalcToken]) -> List[str]:
        """Get the display spelling of each token."""
        return [token.spelling() for token in tokens]

    @staticmethod
    def assert_evaluates_to(calc: ExprCalc, expression: str, expected: str) -> None:
        """Assert that expression evaluates to the expected formatted result."""
        result = calc.evaluate_and_format(expression)
        assert result == expected, f"Expected '{expected}' for {expression!r}, got '{result}'"

    @staticmethod
    def assert_python_result(calc: ExprCalc, expression: str, expected: Any) -> None:
        """Assert that expression evaluates to the expected Python value and type."""
        result = calc.evaluate(expression)
        assert result == expected, f"Expected Python result {expected!r}, got {result!r}"
        assert type(result) is type(expected), f"Expected {type(expected).__name__}, got {type(result).__name__}"


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return ExprCalcTestHelpers
