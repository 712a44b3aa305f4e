"""Stack-machine evaluator for ExprCalc postfix (RPN) token sequences."""

from typing import List, Protocol

from exprcalc.exprcalc_error import ExprCalcEvaluationError
from exprcalc.exprcalc_math import ExprCalcMathFunctions
from exprcalc.exprcalc_symbol_table import ExprCalcSymbolTable
from exprcalc.exprcalc_token import ExprCalcToken, ExprCalcOperation
from exprcalc.exprcalc_value import ExprCalcValue


class ExprCalcTraceWatcher(Protocol):
    """Anything that wants to observe evaluation steps."""

    def on_trace(self, message: str) -> None:
        """Receive one trace message."""


class ExprCalcEvaluator:
    """
    Evaluates postfix token sequences with a single operand stack.

    Operands are pushed as tokens, so a Variable stays a Variable until an
    operation needs its value.  This lets assignment bind into the variable
    and lets the final result report which variable it came from.
    """

    def __init__(self, symbol_table: ExprCalcSymbolTable, trace_watcher: ExprCalcTraceWatcher | None = None):
        """
        Initialize evaluator.

        Args:
            symbol_table: Symbol table owning the variables that appear in evaluated sequences
            trace_watcher: Optional watcher notified after every evaluation step
        """
        self.symbol_table = symbol_table
        self.trace_watcher = trace_watcher

        math_functions = ExprCalcMathFunctions()
        self._unary_functions = math_functions.get_unary_functions()
        self._binary_functions = math_functions.get_binary_functions()

    def set_trace_watcher(self, watcher: ExprCalcTraceWatcher | None) -> None:
        """Set or clear the trace watcher."""
        self.trace_watcher = watcher

    def resolve(self, operand: ExprCalcToken) -> ExprCalcValue:
        """
        Get the value an operand token denotes, dereferencing variables.

        Raises:
            ExprCalcEvaluationError: If the operand is an unset variable
        """
        if operand.is_variable():
            value = self.symbol_table.get(operand)
            if value is None:
                raise ExprCalcEvaluationError(
                    message=f"Variable not initialized: '{operand.name}'",
                    expected=f"A value assigned to {operand.name} before it is read",
                    example=f"{operand.name} = 5",
                    suggestion=f"Assign a value to {operand.name} first"
                )

            return value

        assert operand.value is not None, f"Operand token without a value: {operand!r}"
        return operand.value

    def evaluate(self, rpn: List[ExprCalcToken]) -> ExprCalcToken:
        """
        Evaluate a postfix token sequence.

        Args:
            rpn: Tokens in postfix order, as produced by the parser

        Returns:
            The single operand left on the stack.  This is a Variable token
            if the expression's final value is a variable (e.g. an assignment).

        Raises:
            ExprCalcEvaluationError: If evaluation fails
        """
        stack: List[ExprCalcToken] = []

        for token in rpn:
            if token.is_operand():
                stack.append(token)

            elif token.is_operator() or token.is_function():
                self._apply(token, stack)

            else:
                raise ExprCalcEvaluationError(
                    message=f"Unexpected token in postfix sequence: {token.spelling()}",
                    context="Parentheses and argument separators are removed by the parser"
                )

            if self.trace_watcher is not None:
                contents = " ".join(operand.spelling() for operand in stack)
                self.trace_watcher.on_trace(f"{token.spelling()} | {contents}")

        if not stack:
            raise ExprCalcEvaluationError(
                message="Insufficient operands",
                context="The expression produced no value"
            )

        if len(stack) != 1:
            raise ExprCalcEvaluationError(
                message="Too many operands",
                received=f"{len(stack)} values left: {', '.join(operand.spelling() for operand in stack)}",
                expected="Exactly one value",
                suggestion="Check for missing operators or extra function arguments"
            )

        return stack[0]

    def _pop(self, stack: List[ExprCalcToken], token: ExprCalcToken) -> List[ExprCalcToken]:
        """Pop the operands an operation consumes, returned left to right."""
        count = token.arity()
        if len(stack) < count:
            raise ExprCalcEvaluationError(
                message=f"Insufficient operands for '{token.spelling()}'",
                received=f"{len(stack)} operand(s)",
                expected=f"{count} operand(s)"
            )

        operands = stack[len(stack) - count:]
        del stack[len(stack) - count:]
        return operands

    def _apply(self, token: ExprCalcToken, stack: List[ExprCalcToken]) -> None:
        """Apply an operator or function to the top of the stack."""
        operation = token.operation
        assert operation is not None, f"Operation token without an operation: {token!r}"
        operands = self._pop(stack, token)

        if len(operands) == 1:
            operand = operands[0]
            value = self.resolve(operand)

            if operation == ExprCalcOperation.IDENTITY:
                stack.append(operand)
                return

            stack.append(ExprCalcToken.from_value(self._unary_functions[operation](value)))
            return

        lhs, rhs = operands

        # The right-hand side is always resolved first
        rhs_value = self.resolve(rhs)

        if operation == ExprCalcOperation.ASSIGNMENT:
            if not lhs.is_variable():
                raise ExprCalcEvaluationError(
                    message="Assignment to a non-variable",
                    received=f"{lhs.kind.value}: {lhs.spelling()}",
                    expected="A variable name on the left of '='",
                    example="Correct: x = 5\nIncorrect: 5 = 3"
                )

            self.symbol_table.set(lhs, rhs_value)
            stack.append(lhs)
            return

        lhs_value = self.resolve(lhs)
        stack.append(ExprCalcToken.from_value(self._binary_functions[operation](lhs_value, rhs_value)))
