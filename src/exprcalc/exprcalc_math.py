"""Operator and built-in function implementations for ExprCalc."""

import math
import operator
from typing import Any, Callable, Dict, cast

from exprcalc.exprcalc_error import ExprCalcEvaluationError
from exprcalc.exprcalc_token import ExprCalcOperation
from exprcalc.exprcalc_value import (
    ExprCalcValue, ExprCalcInteger, ExprCalcReal, ExprCalcBoolean, promote, to_real
)


UnaryImpl = Callable[[ExprCalcValue], ExprCalcValue]
BinaryImpl = Callable[[ExprCalcValue, ExprCalcValue], ExprCalcValue]


def _truncating_divide(lhs: int, rhs: int) -> int:
    """Integer quotient rounded toward zero."""
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs >= 0) == (rhs > 0) else -quotient


class ExprCalcMathFunctions:
    """
    Implementations of every operator and function that works on resolved values.

    Identity and Assignment need the operand tokens themselves rather than
    their values, so the evaluator handles those two directly.
    """

    def get_unary_functions(self) -> Dict[ExprCalcOperation, UnaryImpl]:
        """Return implementations of operations that consume one value."""
        return {
            # Operators
            ExprCalcOperation.NEGATION: self._negation,
            ExprCalcOperation.NOT: self._not,
            ExprCalcOperation.FACTORIAL: self._factorial,

            # One-argument functions
            ExprCalcOperation.ABS: self._abs,
            ExprCalcOperation.SIN: self._real_function("sin", math.sin),
            ExprCalcOperation.COS: self._real_function("cos", math.cos),
            ExprCalcOperation.TAN: self._real_function("tan", math.tan),
            ExprCalcOperation.SQRT: self._real_function("sqrt", math.sqrt),
            ExprCalcOperation.LN: self._real_function("ln", math.log),
            ExprCalcOperation.LB: self._real_function("lb", math.log2),
            ExprCalcOperation.LOG: self._real_function("log", math.log10),
            ExprCalcOperation.EXP: self._real_function("exp", math.exp),
            ExprCalcOperation.FLOOR: self._real_function("floor", lambda x: float(math.floor(x))),
            ExprCalcOperation.CEIL: self._real_function("ceil", lambda x: float(math.ceil(x))),
            ExprCalcOperation.ARCSIN: self._real_function("arcsin", math.asin),
            ExprCalcOperation.ARCCOS: self._real_function("arccos", math.acos),
            ExprCalcOperation.ARCTAN: self._real_function("arctan", math.atan),
            ExprCalcOperation.RESULT: self._result,
        }

    def get_binary_functions(self) -> Dict[ExprCalcOperation, BinaryImpl]:
        """Return implementations of operations that consume two values (lhs, rhs)."""
        return {
            # Arithmetic
            ExprCalcOperation.ADDITION: self._arithmetic("+", operator.add),
            ExprCalcOperation.SUBTRACTION: self._arithmetic("-", operator.sub),
            ExprCalcOperation.MULTIPLICATION: self._arithmetic("*", operator.mul),
            ExprCalcOperation.DIVISION: self._division,
            ExprCalcOperation.MODULUS: self._modulus,
            ExprCalcOperation.POWER: self._power,

            # Equality and relational
            ExprCalcOperation.EQUALITY: self._equality,
            ExprCalcOperation.INEQUALITY: self._inequality,
            ExprCalcOperation.LESS: self._relational("<", operator.lt),
            ExprCalcOperation.LESS_EQUAL: self._relational("<=", operator.le),
            ExprCalcOperation.GREATER: self._relational(">", operator.gt),
            ExprCalcOperation.GREATER_EQUAL: self._relational(">=", operator.ge),

            # Boolean
            ExprCalcOperation.AND: self._logical("and", lambda a, b: a and b),
            ExprCalcOperation.OR: self._logical("or", lambda a, b: a or b),
            ExprCalcOperation.XOR: self._logical("xor", lambda a, b: a != b),
            ExprCalcOperation.NAND: self._logical("nand", lambda a, b: not (a and b)),
            ExprCalcOperation.NOR: self._logical("nor", lambda a, b: not (a or b)),
            ExprCalcOperation.XNOR: self._logical("xnor", lambda a, b: a == b),

            # Two-argument functions
            ExprCalcOperation.ARCTAN2: self._real_function2("arctan2", math.atan2),
            ExprCalcOperation.MAX: self._real_function2("max", max),
            ExprCalcOperation.MIN: self._real_function2("min", min),
            ExprCalcOperation.POW: self._pow,
        }

    def _unsupported(self, value: ExprCalcValue, operation: str, expected: str) -> ExprCalcEvaluationError:
        """Build the error raised when an operation receives the wrong kind of value."""
        return ExprCalcEvaluationError(
            message=f"Unsupported operand for '{operation}': {value.type_name()}",
            received=f"{value.type_name()}: {value.describe()}",
            expected=expected
        )

    def _ensure_boolean(self, value: ExprCalcValue, operation: str) -> bool:
        """Extract a Python bool, rejecting numbers."""
        if not isinstance(value, ExprCalcBoolean):
            raise self._unsupported(value, operation, "boolean")

        return value.value

    def _ensure_real(self, value: ExprCalcValue, operation: str) -> float:
        """Extract a Python float from an integer or real, rejecting booleans."""
        if not value.is_numeric():
            raise self._unsupported(value, operation, "integer or real")

        return to_real(value).value

    def _promote(
        self,
        lhs: ExprCalcValue,
        rhs: ExprCalcValue,
        operation: str
    ) -> tuple[ExprCalcValue, ExprCalcValue]:
        """Promote two numeric operands to a common domain, naming the operation on failure."""
        for value in (lhs, rhs):
            if not value.is_numeric():
                raise self._unsupported(value, operation, "integer or real")

        return promote(lhs, rhs)

    # Unary operators
    def _negation(self, value: ExprCalcValue) -> ExprCalcValue:
        """Negate a number, preserving its kind."""
        if isinstance(value, ExprCalcInteger):
            return ExprCalcInteger(-value.value)

        if isinstance(value, ExprCalcReal):
            return ExprCalcReal(-value.value)

        raise self._unsupported(value, "-", "integer or real")

    def _not(self, value: ExprCalcValue) -> ExprCalcValue:
        """Logical complement."""
        return ExprCalcBoolean(not self._ensure_boolean(value, "not"))

    def _factorial(self, value: ExprCalcValue) -> ExprCalcValue:
        """
        Compute n! for a non-negative integer n.

        The result is unbounded; large n costs time and memory proportional to the result size.
        """
        if not isinstance(value, ExprCalcInteger):
            raise self._unsupported(value, "!", "non-negative integer")

        if value.value < 0:
            raise ExprCalcEvaluationError(
                message=f"Unsupported operand for '!': negative integer {value.describe()}",
                received=f"integer: {value.describe()}",
                expected="non-negative integer",
                example="5! → 120"
            )

        return ExprCalcInteger(math.factorial(value.value))

    # One-argument functions
    def _abs(self, value: ExprCalcValue) -> ExprCalcValue:
        """Absolute value, integer in and integer out."""
        if isinstance(value, ExprCalcInteger):
            return ExprCalcInteger(abs(value.value))

        return ExprCalcReal(abs(self._ensure_real(value, "abs")))

    def _real_function(self, name: str, func: Callable[[float], float]) -> UnaryImpl:
        """Wrap a float function so it promotes its argument and reports domain errors."""
        def impl(value: ExprCalcValue) -> ExprCalcValue:
            argument = self._ensure_real(value, name)
            try:
                return ExprCalcReal(func(argument))

            except (ValueError, OverflowError) as e:
                raise ExprCalcEvaluationError(
                    message=f"Math error in {name}({value.describe()}): {e}",
                    received=f"{value.type_name()}: {value.describe()}",
                    context=f"The argument is outside the domain of {name} or the result is out of range"
                ) from e

        return impl

    def _result(self, value: ExprCalcValue) -> ExprCalcValue:
        """Result is recognised as a keyword but cannot produce a value."""
        raise ExprCalcEvaluationError(
            message="Result is not supported",
            received=f"result({value.describe()})",
            context="Result has no evaluation semantics in this evaluator"
        )

    # Arithmetic
    def _arithmetic(self, operation: str, func: Callable[[Any, Any], Any]) -> BinaryImpl:
        """Build an arithmetic operator computed in the promoted domain."""
        def impl(lhs: ExprCalcValue, rhs: ExprCalcValue) -> ExprCalcValue:
            left, right = self._promote(lhs, rhs, operation)
            if isinstance(left, ExprCalcReal):
                return self._checked_real(func(left.value, cast(ExprCalcReal, right).value), operation)

            return ExprCalcInteger(func(cast(ExprCalcInteger, left).value, cast(ExprCalcInteger, right).value))

        return impl

    def _division(self, lhs: ExprCalcValue, rhs: ExprCalcValue) -> ExprCalcValue:
        """Real division for reals, truncating division for integers."""
        left, right = self._promote(lhs, rhs, "/")
        if right.to_python() == 0:
            raise ExprCalcEvaluationError(
                message="Division by zero",
                received=f"{lhs.describe()} / {rhs.describe()}"
            )

        if isinstance(left, ExprCalcReal):
            return self._checked_real(left.value / cast(ExprCalcReal, right).value, "/")

        return ExprCalcInteger(_truncating_divide(cast(ExprCalcInteger, left).value, cast(ExprCalcInteger, right).value))

    def _modulus(self, lhs: ExprCalcValue, rhs: ExprCalcValue) -> ExprCalcValue:
        """Integer remainder with the sign of the dividend."""
        for value in (lhs, rhs):
            if not isinstance(value, ExprCalcInteger):
                raise self._unsupported(value, "%", "integer")

        assert isinstance(lhs, ExprCalcInteger) and isinstance(rhs, ExprCalcInteger)
        if rhs.value == 0:
            raise ExprCalcEvaluationError(
                message="Modulus by zero",
                received=f"{lhs.describe()} % {rhs.describe()}"
            )

        return ExprCalcInteger(lhs.value - rhs.value * _truncating_divide(lhs.value, rhs.value))

    def _power(self, lhs: ExprCalcValue, rhs: ExprCalcValue) -> ExprCalcValue:
        """
        Exponentiation.

        Integer base and non-negative integer exponent stay exact (and unbounded).
        A negative integer exponent is computed in the real domain.
        """
        left, right = self._promote(lhs, rhs, "**")
        if isinstance(left, ExprCalcInteger) and isinstance(right, ExprCalcInteger) and right.value >= 0:
            return ExprCalcInteger(left.value ** right.value)

        return self._real_power(to_real(left).value, to_real(right).value, "**")

    def _real_power(self, base: float, exponent: float, operation: str) -> ExprCalcValue:
        """Floating point power with errors reported as evaluation errors."""
        if base == 0 and exponent < 0:
            raise ExprCalcEvaluationError(
                message="Division by zero",
                received=f"0 {operation} {exponent!r}",
                context="Zero cannot be raised to a negative power"
            )

        try:
            return ExprCalcReal(math.pow(base, exponent))

        except (ValueError, OverflowError) as e:
            raise ExprCalcEvaluationError(
                message=f"Math error in {base!r} {operation} {exponent!r}: {e}",
                context="A negative base needs an integer exponent, and the result must fit in a real"
            ) from e

    def _checked_real(self, result: float, operation: str) -> ExprCalcValue:
        """Reject real results that overflowed to infinity or became NaN."""
        if math.isinf(result) or math.isnan(result):
            raise ExprCalcEvaluationError(
                message=f"Real overflow in '{operation}'",
                received=repr(result),
                context="The result is too large or undefined"
            )

        return ExprCalcReal(result)

    # Equality and relational
    def _equal(self, lhs: ExprCalcValue, rhs: ExprCalcValue, operation: str) -> bool:
        """Structural equality within the booleans or the promoted numeric domain."""
        if isinstance(lhs, ExprCalcBoolean) and isinstance(rhs, ExprCalcBoolean):
            return lhs.value == rhs.value

        if isinstance(lhs, ExprCalcBoolean) or isinstance(rhs, ExprCalcBoolean):
            other = rhs if isinstance(lhs, ExprCalcBoolean) else lhs
            raise ExprCalcEvaluationError(
                message=f"Unsupported operand for '{operation}': cannot compare boolean with {other.type_name()}",
                received=f"{lhs.describe()} {operation} {rhs.describe()}",
                expected="Two booleans or two numbers"
            )

        left, right = promote(lhs, rhs)
        return left == right

    def _equality(self, lhs: ExprCalcValue, rhs: ExprCalcValue) -> ExprCalcValue:
        return ExprCalcBoolean(self._equal(lhs, rhs, "=="))

    def _inequality(self, lhs: ExprCalcValue, rhs: ExprCalcValue) -> ExprCalcValue:
        return ExprCalcBoolean(not self._equal(lhs, rhs, "!="))

    def _relational(self, operation: str, compare: Callable[[Any, Any], bool]) -> BinaryImpl:
        """Build a numeric comparison operator."""
        def impl(lhs: ExprCalcValue, rhs: ExprCalcValue) -> ExprCalcValue:
            left, right = self._promote(lhs, rhs, operation)
            return ExprCalcBoolean(compare(left.to_python(), right.to_python()))

        return impl

    # Boolean
    def _logical(self, operation: str, combine: Callable[[bool, bool], bool]) -> BinaryImpl:
        """Build a boolean operator.  Both sides are always evaluated."""
        def impl(lhs: ExprCalcValue, rhs: ExprCalcValue) -> ExprCalcValue:
            left = self._ensure_boolean(lhs, operation)
            right = self._ensure_boolean(rhs, operation)
            return ExprCalcBoolean(combine(left, right))

        return impl

    # Two-argument functions
    def _real_function2(self, name: str, func: Callable[[float, float], float]) -> BinaryImpl:
        """Wrap a two-argument float function; both arguments are promoted to real."""
        def impl(lhs: ExprCalcValue, rhs: ExprCalcValue) -> ExprCalcValue:
            return ExprCalcReal(func(self._ensure_real(lhs, name), self._ensure_real(rhs, name)))

        return impl

    def _pow(self, lhs: ExprCalcValue, rhs: ExprCalcValue) -> ExprCalcValue:
        """pow(base, exponent), always in the real domain."""
        return self._real_power(self._ensure_real(lhs, "pow"), self._ensure_real(rhs, "pow"), "pow")
