"""Token kinds, named operations and token representation for ExprCalc expressions."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from exprcalc.exprcalc_value import ExprCalcValue, ExprCalcInteger, ExprCalcReal, ExprCalcBoolean


class ExprCalcTokenKind(Enum):
    """Closed set of token kinds."""
    INTEGER = "integer"
    REAL = "real"
    BOOLEAN = "boolean"
    VARIABLE = "variable"
    BINARY_LEFT = "binary-left"
    BINARY_RIGHT = "binary-right"
    UNARY = "unary"
    POSTFIX = "postfix"
    FUNCTION_ONE_ARG = "function-one-arg"
    FUNCTION_TWO_ARG = "function-two-arg"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    ARGUMENT_SEPARATOR = ","


class ExprCalcOperation(Enum):
    """Named operator and function instances."""
    ADDITION = "Addition"
    SUBTRACTION = "Subtraction"
    MULTIPLICATION = "Multiplication"
    DIVISION = "Division"
    MODULUS = "Modulus"
    POWER = "Power"
    ASSIGNMENT = "Assignment"
    EQUALITY = "Equality"
    INEQUALITY = "Inequality"
    LESS = "Less"
    LESS_EQUAL = "LessEqual"
    GREATER = "Greater"
    GREATER_EQUAL = "GreaterEqual"
    AND = "And"
    OR = "Or"
    XOR = "Xor"
    NAND = "Nand"
    NOR = "Nor"
    XNOR = "Xnor"
    IDENTITY = "Identity"
    NEGATION = "Negation"
    NOT = "Not"
    FACTORIAL = "Factorial"

    ABS = "Abs"
    SIN = "Sin"
    COS = "Cos"
    TAN = "Tan"
    SQRT = "Sqrt"
    LN = "Ln"
    LB = "Lb"
    LOG = "Log"
    EXP = "Exp"
    FLOOR = "Floor"
    CEIL = "Ceil"
    ARCSIN = "Arcsin"
    ARCCOS = "Arccos"
    ARCTAN = "Arctan"
    RESULT = "Result"

    ARCTAN2 = "Arctan2"
    MAX = "Max"
    MIN = "Min"
    POW = "Pow"


_K = ExprCalcTokenKind
_O = ExprCalcOperation

# Every named operation belongs to exactly one token kind.
OPERATION_KINDS: Dict[ExprCalcOperation, ExprCalcTokenKind] = {
    _O.ADDITION: _K.BINARY_LEFT,
    _O.SUBTRACTION: _K.BINARY_LEFT,
    _O.MULTIPLICATION: _K.BINARY_LEFT,
    _O.DIVISION: _K.BINARY_LEFT,
    _O.MODULUS: _K.BINARY_LEFT,
    _O.EQUALITY: _K.BINARY_LEFT,
    _O.INEQUALITY: _K.BINARY_LEFT,
    _O.LESS: _K.BINARY_LEFT,
    _O.LESS_EQUAL: _K.BINARY_LEFT,
    _O.GREATER: _K.BINARY_LEFT,
    _O.GREATER_EQUAL: _K.BINARY_LEFT,
    _O.AND: _K.BINARY_LEFT,
    _O.OR: _K.BINARY_LEFT,
    _O.XOR: _K.BINARY_LEFT,
    _O.NAND: _K.BINARY_LEFT,
    _O.NOR: _K.BINARY_LEFT,
    _O.XNOR: _K.BINARY_LEFT,
    _O.POWER: _K.BINARY_RIGHT,
    _O.ASSIGNMENT: _K.BINARY_RIGHT,
    _O.IDENTITY: _K.UNARY,
    _O.NEGATION: _K.UNARY,
    _O.NOT: _K.UNARY,
    _O.FACTORIAL: _K.POSTFIX,
    _O.ABS: _K.FUNCTION_ONE_ARG,
    _O.SIN: _K.FUNCTION_ONE_ARG,
    _O.COS: _K.FUNCTION_ONE_ARG,
    _O.TAN: _K.FUNCTION_ONE_ARG,
    _O.SQRT: _K.FUNCTION_ONE_ARG,
    _O.LN: _K.FUNCTION_ONE_ARG,
    _O.LB: _K.FUNCTION_ONE_ARG,
    _O.LOG: _K.FUNCTION_ONE_ARG,
    _O.EXP: _K.FUNCTION_ONE_ARG,
    _O.FLOOR: _K.FUNCTION_ONE_ARG,
    _O.CEIL: _K.FUNCTION_ONE_ARG,
    _O.ARCSIN: _K.FUNCTION_ONE_ARG,
    _O.ARCCOS: _K.FUNCTION_ONE_ARG,
    _O.ARCTAN: _K.FUNCTION_ONE_ARG,
    _O.RESULT: _K.FUNCTION_ONE_ARG,
    _O.ARCTAN2: _K.FUNCTION_TWO_ARG,
    _O.MAX: _K.FUNCTION_TWO_ARG,
    _O.MIN: _K.FUNCTION_TWO_ARG,
    _O.POW: _K.FUNCTION_TWO_ARG,
}

# How an operation is written when displaying an RPN sequence.
OPERATION_SPELLINGS: Dict[ExprCalcOperation, str] = {
    _O.ADDITION: "+",
    _O.SUBTRACTION: "-",
    _O.MULTIPLICATION: "*",
    _O.DIVISION: "/",
    _O.MODULUS: "%",
    _O.POWER: "**",
    _O.ASSIGNMENT: "=",
    _O.EQUALITY: "==",
    _O.INEQUALITY: "!=",
    _O.LESS: "<",
    _O.LESS_EQUAL: "<=",
    _O.GREATER: ">",
    _O.GREATER_EQUAL: ">=",
    _O.IDENTITY: "#+",
    _O.NEGATION: "#-",
    _O.FACTORIAL: "!",
}

_ARITIES: Dict[ExprCalcTokenKind, int] = {
    _K.BINARY_LEFT: 2,
    _K.BINARY_RIGHT: 2,
    _K.UNARY: 1,
    _K.POSTFIX: 1,
    _K.FUNCTION_ONE_ARG: 1,
    _K.FUNCTION_TWO_ARG: 2,
}

_OPERAND_KINDS = frozenset({_K.INTEGER, _K.REAL, _K.BOOLEAN, _K.VARIABLE})
_OPERATOR_KINDS = frozenset({_K.BINARY_LEFT, _K.BINARY_RIGHT, _K.UNARY, _K.POSTFIX})
_FUNCTION_KINDS = frozenset({_K.FUNCTION_ONE_ARG, _K.FUNCTION_TWO_ARG})


@dataclass(frozen=True)
class ExprCalcToken:
    """
    A single token in an ExprCalc expression.

    Literal operands carry a value, variables carry their name and the slot
    that holds their value in the owning symbol table, operators and
    functions carry their named operation.  Structural tokens carry nothing
    but their kind.
    """
    kind: ExprCalcTokenKind
    operation: ExprCalcOperation | None = None
    value: ExprCalcValue | None = None
    name: str | None = None
    slot: int | None = None

    @classmethod
    def integer(cls, value: int) -> 'ExprCalcToken':
        """Create an Integer operand token."""
        return cls(ExprCalcTokenKind.INTEGER, value=ExprCalcInteger(value))

    @classmethod
    def real(cls, value: float) -> 'ExprCalcToken':
        """Create a Real operand token."""
        return cls(ExprCalcTokenKind.REAL, value=ExprCalcReal(value))

    @classmethod
    def boolean(cls, value: bool) -> 'ExprCalcToken':
        """Create a Boolean operand token."""
        return cls(ExprCalcTokenKind.BOOLEAN, value=ExprCalcBoolean(value))

    @classmethod
    def from_value(cls, value: ExprCalcValue) -> 'ExprCalcToken':
        """Wrap a computed value in an operand token of the matching kind."""
        if isinstance(value, ExprCalcInteger):
            return cls(ExprCalcTokenKind.INTEGER, value=value)

        if isinstance(value, ExprCalcReal):
            return cls(ExprCalcTokenKind.REAL, value=value)

        assert isinstance(value, ExprCalcBoolean), f"Unexpected value type: {type(value)}"
        return cls(ExprCalcTokenKind.BOOLEAN, value=value)

    @classmethod
    def variable(cls, name: str, slot: int) -> 'ExprCalcToken':
        """Create a Variable operand token referring to a symbol table slot."""
        return cls(ExprCalcTokenKind.VARIABLE, name=name, slot=slot)

    @classmethod
    def for_operation(cls, operation: ExprCalcOperation) -> 'ExprCalcToken':
        """Create the operator or function token for a named operation."""
        return cls(OPERATION_KINDS[operation], operation=operation)

    def is_operand(self) -> bool:
        """Check if this token is an Integer, Real, Boolean or Variable operand."""
        return self.kind in _OPERAND_KINDS

    def is_variable(self) -> bool:
        """Check if this token is a Variable operand."""
        return self.kind == ExprCalcTokenKind.VARIABLE

    def is_operator(self) -> bool:
        """Check if this token is a binary, unary or postfix operator."""
        return self.kind in _OPERATOR_KINDS

    def is_binary_operator(self) -> bool:
        """Check if this token is a binary operator of either associativity."""
        return self.kind in (ExprCalcTokenKind.BINARY_LEFT, ExprCalcTokenKind.BINARY_RIGHT)

    def is_right_associative(self) -> bool:
        """Check if this token is a right-associative binary operator."""
        return self.kind == ExprCalcTokenKind.BINARY_RIGHT

    def is_unary_operator(self) -> bool:
        """Check if this token is a prefix unary operator."""
        return self.kind == ExprCalcTokenKind.UNARY

    def is_postfix_operator(self) -> bool:
        """Check if this token is a postfix operator."""
        return self.kind == ExprCalcTokenKind.POSTFIX

    def is_function(self) -> bool:
        """Check if this token is a one- or two-argument function."""
        return self.kind in _FUNCTION_KINDS

    def is_left_paren(self) -> bool:
        """Check if this token is a left parenthesis."""
        return self.kind == ExprCalcTokenKind.LEFT_PAREN

    def is_right_paren(self) -> bool:
        """Check if this token is a right parenthesis."""
        return self.kind == ExprCalcTokenKind.RIGHT_PAREN

    def is_argument_separator(self) -> bool:
        """Check if this token is an argument separator."""
        return self.kind == ExprCalcTokenKind.ARGUMENT_SEPARATOR

    def arity(self) -> int:
        """
        Return the number of operands this operator or function consumes.

        Operands and structural tokens consume nothing.
        """
        return _ARITIES.get(self.kind, 0)

    def spelling(self) -> str:
        """Return the text used for this token when displaying a token sequence."""
        if self.value is not None:
            return self.value.describe()

        if self.name is not None:
            return self.name

        if self.operation is not None:
            return OPERATION_SPELLINGS.get(self.operation, self.operation.value)

        return self.kind.value

    def __str__(self) -> str:
        return self.spelling()

    def __repr__(self) -> str:
        return f"ExprCalcToken({self.kind.name}, {self.spelling()!r})"


LEFT_PAREN = ExprCalcToken(ExprCalcTokenKind.LEFT_PAREN)
RIGHT_PAREN = ExprCalcToken(ExprCalcTokenKind.RIGHT_PAREN)
ARGUMENT_SEPARATOR = ExprCalcToken(ExprCalcTokenKind.ARGUMENT_SEPARATOR)
