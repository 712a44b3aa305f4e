"""ExprCalc value model - immutable Integer, Real and Boolean values with numeric promotion."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple, Union

from exprcalc.exprcalc_error import ExprCalcEvaluationError


@dataclass(frozen=True)
class ExprCalcValue(ABC):
    """
    Abstract base class for all ExprCalc values.

    All values are immutable.  Exactly one concrete kind is carried at a time.
    """

    @abstractmethod
    def to_python(self) -> Union[int, float, bool]:
        """Convert to the equivalent Python value."""

    @abstractmethod
    def type_name(self) -> str:
        """Return the value kind name for error messages."""

    @abstractmethod
    def describe(self) -> str:
        """Describe the value as it would be written in an expression."""

    def is_numeric(self) -> bool:
        """Check if this value takes part in arithmetic."""
        return False


@dataclass(frozen=True)
class ExprCalcInteger(ExprCalcValue):
    """Arbitrary-precision integer values."""
    value: int

    def to_python(self) -> int:
        return self.value

    def type_name(self) -> str:
        return "integer"

    def describe(self) -> str:
        """
        Describe the integer for messages and traces.

        Integers past the interpreter's string conversion limit are described by size.
        """
        try:
            return self.to_decimal()

        except ValueError:
            return f"<integer of {self.value.bit_length()} bits>"

    def to_decimal(self) -> str:
        """
        Write the integer in decimal.

        Raises:
            ValueError: If the integer exceeds the interpreter's string conversion limit
        """
        return str(self.value)

    def is_numeric(self) -> bool:
        return True

    @classmethod
    def from_digits(cls, digits: str) -> 'ExprCalcInteger':
        """Build an integer from a decimal digit sequence without loss of precision."""
        return cls(int(digits, 10))


@dataclass(frozen=True)
class ExprCalcReal(ExprCalcValue):
    """Floating-point values."""
    value: float

    def to_python(self) -> float:
        return self.value

    def type_name(self) -> str:
        return "real"

    def describe(self) -> str:
        return repr(self.value)

    def is_numeric(self) -> bool:
        return True

    @classmethod
    def from_digits(cls, digits: str) -> 'ExprCalcReal':
        """Build a real from a decimal literal such as '3.25'."""
        return cls(float(digits))


@dataclass(frozen=True)
class ExprCalcBoolean(ExprCalcValue):
    """Boolean values."""
    value: bool

    def to_python(self) -> bool:
        return self.value

    def type_name(self) -> str:
        return "boolean"

    def describe(self) -> str:
        return "True" if self.value else "False"


def to_real(value: ExprCalcValue) -> ExprCalcReal:
    """
    Widen a numeric value to a real.

    Args:
        value: Integer or real value

    Returns:
        The value in the real domain

    Raises:
        ExprCalcEvaluationError: If the value is not numeric or is too large for a float
    """
    if isinstance(value, ExprCalcReal):
        return value

    if isinstance(value, ExprCalcInteger):
        try:
            return ExprCalcReal(float(value.value))

        except OverflowError as e:
            raise ExprCalcEvaluationError(
                message="Integer too large to convert to a real",
                received=f"Integer of {value.value.bit_length()} bits",
                context="Mixed integer/real arithmetic promotes integers to floating point"
            ) from e

    raise ExprCalcEvaluationError(
        message=f"Unsupported operand: expected a number, got {value.type_name()}",
        received=f"{value.type_name()}: {value.describe()}",
        expected="integer or real"
    )


def promote(
    lhs: ExprCalcValue,
    rhs: ExprCalcValue
) -> Tuple[ExprCalcValue, ExprCalcValue]:
    """
    Promote a pair of numeric values to a common domain.

    If either side is real, both become real; otherwise both stay integer.

    Raises:
        ExprCalcEvaluationError: If either side is not numeric
    """
    for value in (lhs, rhs):
        if not value.is_numeric():
            raise ExprCalcEvaluationError(
                message=f"Unsupported operand: expected a number, got {value.type_name()}",
                received=f"{value.type_name()}: {value.describe()}",
                expected="integer or real",
                suggestion="Arithmetic and relational operators only accept numbers"
            )

    if isinstance(lhs, ExprCalcReal) or isinstance(rhs, ExprCalcReal):
        return to_real(lhs), to_real(rhs)

    return lhs, rhs
