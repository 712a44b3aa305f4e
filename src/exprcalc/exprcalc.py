"""Main ExprCalc class: infix expression calculator with variables and detailed error messages."""

import logging
from typing import Dict, List, Union

from exprcalc.exprcalc_error import ExprCalcEvaluationError, ExprCalcSyntaxError
from exprcalc.exprcalc_evaluator import ExprCalcEvaluator, ExprCalcTraceWatcher
from exprcalc.exprcalc_parser import ExprCalcParser
from exprcalc.exprcalc_token import ExprCalcToken
from exprcalc.exprcalc_tokenizer import ExprCalcTokenizer
from exprcalc.exprcalc_value import ExprCalcInteger, ExprCalcValue


class ExprCalc:
    """
    ExprCalc infix calculator.

    Expressions pass through three stages:
    - The tokenizer turns text into tokens, binding identifiers to variables
    - The parser reorders tokens into postfix form
    - The evaluator runs the postfix form on an operand stack

    Variables persist across calls on the same instance.  Separate instances
    never share variables.
    """

    def __init__(self, trace_watcher: ExprCalcTraceWatcher | None = None):
        """
        Initialize the calculator.

        Args:
            trace_watcher: Optional watcher notified after every evaluation step
        """
        self._logger = logging.getLogger("ExprCalc")
        self.tokenizer = ExprCalcTokenizer()
        self.parser = ExprCalcParser()
        self.evaluator = ExprCalcEvaluator(self.tokenizer.symbol_table, trace_watcher)

    def set_trace_watcher(self, watcher: ExprCalcTraceWatcher | None) -> None:
        """Set or clear the trace watcher used during evaluation."""
        self.evaluator.set_trace_watcher(watcher)

    def _compile(self, expression: str) -> List[ExprCalcToken]:
        """Tokenize and parse an expression into postfix order."""
        tokens = self.tokenizer.tokenize(expression)
        if not tokens:
            raise ExprCalcSyntaxError(
                message="Empty expression",
                received=f"Input: {expression!r}",
                expected="An expression to evaluate",
                example="1 + 2"
            )

        rpn = self.parser.parse(tokens)
        self._logger.debug("Parsed %r into %d postfix tokens", expression, len(rpn))
        return rpn

    def evaluate_value(self, expression: str) -> ExprCalcValue:
        """
        Evaluate an expression, returning the ExprCalc value.

        Args:
            expression: Infix expression text

        Returns:
            The final value.  If the expression ends in a variable, its current value.

        Raises:
            ExprCalcLexicalError: If tokenization fails
            ExprCalcSyntaxError: If parsing fails
            ExprCalcEvaluationError: If evaluation fails
        """
        rpn = self._compile(expression)
        result = self.evaluator.resolve(self.evaluator.evaluate(rpn))
        self._logger.debug("Evaluated %r to a %s value", expression, result.type_name())
        return result

    def evaluate(self, expression: str) -> Union[int, float, bool]:
        """
        Evaluate an expression, returning the equivalent Python value.

        Args:
            expression: Infix expression text

        Returns:
            The result as a Python int, float or bool

        Raises:
            ExprCalcLexicalError: If tokenization fails
            ExprCalcSyntaxError: If parsing fails
            ExprCalcEvaluationError: If evaluation fails
        """
        return self.evaluate_value(expression).to_python()

    def evaluate_and_format(self, expression: str) -> str:
        """
        Evaluate an expression and format the result as text.

        Integers are written in decimal, reals in their shortest round-trip
        form and booleans as True or False.

        Raises:
            ExprCalcLexicalError: If tokenization fails
            ExprCalcSyntaxError: If parsing fails
            ExprCalcEvaluationError: If evaluation fails
        """
        value = self.evaluate_value(expression)
        if not isinstance(value, ExprCalcInteger):
            return value.describe()

        try:
            return value.to_decimal()

        except ValueError as e:
            raise ExprCalcEvaluationError(
                message="Result is too large to format",
                received=f"{value.type_name()} result",
                suggestion="Use evaluate() to get the result as a Python value"
            ) from e

    def to_rpn(self, expression: str) -> str:
        """
        Convert an expression to postfix form without evaluating it.

        Returns:
            Space separated token spellings in postfix order
        """
        return " ".join(token.spelling() for token in self._compile(expression))

    def variables(self) -> Dict[str, Union[int, float, bool, None]]:
        """
        Get the current variable bindings.

        Returns:
            Mapping of variable name to its Python value, or None if never assigned
        """
        symbol_table = self.tokenizer.symbol_table
        bindings: Dict[str, Union[int, float, bool, None]] = {}
        for name in symbol_table.names():
            variable = symbol_table.lookup(name)
            assert variable is not None
            value = symbol_table.get(variable)
            bindings[name] = None if value is None else value.to_python()

        return bindings
