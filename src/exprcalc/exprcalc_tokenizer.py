"""Tokenizer for ExprCalc expressions with detailed error messages."""

import math
import sys
from enum import Enum
from typing import Dict, List, Tuple

from exprcalc.exprcalc_error import ExprCalcLexicalError
from exprcalc.exprcalc_symbol_table import ExprCalcSymbolTable
from exprcalc.exprcalc_token import (
    ExprCalcToken, ExprCalcOperation, LEFT_PAREN, RIGHT_PAREN, ARGUMENT_SEPARATOR
)
from exprcalc.exprcalc_value import ExprCalcInteger, ExprCalcReal


class _PreviousCategory(Enum):
    """Category of the most recently emitted token, used to disambiguate operators."""
    START = "start"
    OPERAND = "operand"
    RIGHT_PAREN = "right-paren"
    POSTFIX = "postfix"
    FUNCTION = "function"
    OTHER = "other"


# Categories after which an expression is complete, so '+'/'-' are binary and '!' is legal.
_ENDS_EXPRESSION = frozenset({
    _PreviousCategory.OPERAND, _PreviousCategory.RIGHT_PAREN, _PreviousCategory.POSTFIX
})

_TWO_CHAR_OPERATORS: Dict[str, ExprCalcOperation] = {
    '<=': ExprCalcOperation.LESS_EQUAL,
    '>=': ExprCalcOperation.GREATER_EQUAL,
    '==': ExprCalcOperation.EQUALITY,
    '!=': ExprCalcOperation.INEQUALITY,
    '**': ExprCalcOperation.POWER,
}

_ONE_CHAR_TOKENS: Dict[str, ExprCalcToken] = {
    '*': ExprCalcToken.for_operation(ExprCalcOperation.MULTIPLICATION),
    '/': ExprCalcToken.for_operation(ExprCalcOperation.DIVISION),
    '%': ExprCalcToken.for_operation(ExprCalcOperation.MODULUS),
    '(': LEFT_PAREN,
    ')': RIGHT_PAREN,
    ',': ARGUMENT_SEPARATOR,
    '<': ExprCalcToken.for_operation(ExprCalcOperation.LESS),
    '>': ExprCalcToken.for_operation(ExprCalcOperation.GREATER),
}

# Identifiers that name functions or operators.
_KEYWORD_OPERATIONS: Dict[str, ExprCalcOperation] = {
    'abs': ExprCalcOperation.ABS,
    'and': ExprCalcOperation.AND,
    'arccos': ExprCalcOperation.ARCCOS,
    'arcsin': ExprCalcOperation.ARCSIN,
    'arctan': ExprCalcOperation.ARCTAN,
    'arctan2': ExprCalcOperation.ARCTAN2,
    'ceil': ExprCalcOperation.CEIL,
    'cos': ExprCalcOperation.COS,
    'exp': ExprCalcOperation.EXP,
    'floor': ExprCalcOperation.FLOOR,
    'lb': ExprCalcOperation.LB,
    'ln': ExprCalcOperation.LN,
    'log': ExprCalcOperation.LOG,
    'max': ExprCalcOperation.MAX,
    'min': ExprCalcOperation.MIN,
    'mod': ExprCalcOperation.MODULUS,
    'nand': ExprCalcOperation.NAND,
    'nor': ExprCalcOperation.NOR,
    'not': ExprCalcOperation.NOT,
    'or': ExprCalcOperation.OR,
    'pow': ExprCalcOperation.POW,
    'result': ExprCalcOperation.RESULT,
    'sin': ExprCalcOperation.SIN,
    'sqrt': ExprCalcOperation.SQRT,
    'tan': ExprCalcOperation.TAN,
    'xnor': ExprCalcOperation.XNOR,
    'xor': ExprCalcOperation.XOR,
}


def _is_digit(char: str) -> bool:
    return '0' <= char <= '9'


def _is_letter(char: str) -> bool:
    return ('a' <= char <= 'z') or ('A' <= char <= 'Z')


class ExprCalcTokenizer:
    """
    Tokenizes infix expressions into ExprCalc tokens.

    Each tokenizer owns a keyword dictionary and a variable symbol table.
    Identifiers that are not keywords become variables, and the same
    identifier always yields the same Variable token for the lifetime of
    the tokenizer.
    """

    def __init__(self) -> None:
        """Initialize the tokenizer with its keyword dictionary and an empty symbol table."""
        self._symbol_table = ExprCalcSymbolTable()
        self._keywords: Dict[str, ExprCalcToken] = {}

        for name, operation in _KEYWORD_OPERATIONS.items():
            self._register_keyword(name, ExprCalcToken.for_operation(operation))

        self._register_keyword('pi', ExprCalcToken.real(math.pi))
        self._register_keyword('e', ExprCalcToken.real(math.e))
        self._register_keyword('true', ExprCalcToken.boolean(True))
        self._register_keyword('false', ExprCalcToken.boolean(False))

    def _register_keyword(self, name: str, token: ExprCalcToken) -> None:
        """Register the lower, Capitalized and UPPER spellings of a keyword."""
        for spelling in (name.lower(), name.capitalize(), name.upper()):
            self._keywords[spelling] = token

    @property
    def symbol_table(self) -> ExprCalcSymbolTable:
        """The symbol table holding this tokenizer's variables."""
        return self._symbol_table

    def is_keyword(self, identifier: str) -> bool:
        """Check if an identifier spelling is a registered keyword."""
        return identifier in self._keywords

    def tokenize(self, expression: str) -> List[ExprCalcToken]:
        """
        Tokenize an infix expression with detailed error reporting.

        Args:
            expression: The expression string to tokenize

        Returns:
            List of tokens in source order

        Raises:
            ExprCalcLexicalError: If tokenization fails, with the offset of the offending character
        """
        tokens: List[ExprCalcToken] = []
        previous = _PreviousCategory.START
        i = 0

        while i < len(expression):
            char = expression[i]

            if char.isspace():
                i += 1
                continue

            # Numbers
            if _is_digit(char):
                token, length = self._read_number(expression, i)
                tokens.append(token)
                previous = _PreviousCategory.OPERAND
                i += length
                continue

            # Two-character operators take priority over their one-character prefixes
            operation = _TWO_CHAR_OPERATORS.get(expression[i:i + 2])
            if operation is not None:
                tokens.append(ExprCalcToken.for_operation(operation))
                previous = _PreviousCategory.OTHER
                i += 2
                continue

            single = _ONE_CHAR_TOKENS.get(char)
            if single is not None:
                tokens.append(single)
                previous = _PreviousCategory.RIGHT_PAREN if single.is_right_paren() else _PreviousCategory.OTHER
                i += 1
                continue

            if char == '!':
                if previous not in _ENDS_EXPRESSION:
                    raise ExprCalcLexicalError(
                        message="Factorial must follow an expression",
                        position=i,
                        received="'!' with nothing to apply it to",
                        expected="A number, variable, ')' or another '!' before '!'",
                        example="Correct: 5!, (2+1)!\nIncorrect: !5, 3 + !",
                        suggestion="Place '!' directly after the value it applies to",
                        context="'!' is a postfix operator"
                    )

                tokens.append(ExprCalcToken.for_operation(ExprCalcOperation.FACTORIAL))
                previous = _PreviousCategory.POSTFIX
                i += 1
                continue

            if char == '=':
                tokens.append(ExprCalcToken.for_operation(ExprCalcOperation.ASSIGNMENT))
                previous = _PreviousCategory.OTHER
                i += 1
                continue

            # '+' and '-' are binary after a complete expression and unary otherwise
            if char in '+-':
                if previous in _ENDS_EXPRESSION:
                    operation = ExprCalcOperation.ADDITION if char == '+' else ExprCalcOperation.SUBTRACTION

                else:
                    operation = ExprCalcOperation.IDENTITY if char == '+' else ExprCalcOperation.NEGATION

                tokens.append(ExprCalcToken.for_operation(operation))
                previous = _PreviousCategory.OTHER
                i += 1
                continue

            # Identifiers: keywords, constants or variables
            if _is_letter(char):
                token, length = self._read_identifier(expression, i)
                if token.is_function():
                    self._expect_function_paren(expression, i + length, token)

                tokens.append(token)
                previous = self._classify(token)
                i += length
                continue

            char_code = ord(char)
            suggestions = {
                '^': "Use ** for exponentiation",
                '&': "Use 'and' for boolean conjunction",
                '|': "Use 'or' for boolean disjunction",
                '[': "Use parentheses ( ) for grouping",
                ']': "Use parentheses ( ) for grouping",
                '{': "Use parentheses ( ) for grouping",
                '}': "Use parentheses ( ) for grouping",
                '.': "Real numbers need a digit before the decimal point, e.g. 0.5",
            }

            raise ExprCalcLexicalError(
                message=f"Invalid character: {char}",
                position=i,
                received=f"Character: {char} (code {char_code})",
                expected="Digits, letters, operators + - * / % ** = == != < <= > >= !, parentheses or ','",
                example="Valid: 2 * (x + 1), sin(pi / 2), 5!",
                suggestion=suggestions.get(char, f"Remove '{char}' from the expression"),
                context="Only ASCII letters, digits and the listed operator characters are allowed"
            )

        return tokens

    def _classify(self, token: ExprCalcToken) -> _PreviousCategory:
        """Classify an identifier token for operator disambiguation."""
        if token.is_operand():
            return _PreviousCategory.OPERAND

        if token.is_function():
            return _PreviousCategory.FUNCTION

        return _PreviousCategory.OTHER

    def _read_number(self, expression: str, start: int) -> Tuple[ExprCalcToken, int]:
        """
        Read an integer, real or binary literal.

        Returns:
            Tuple of (token, length_consumed)

        Raises:
            ExprCalcLexicalError: If the literal is malformed
        """
        i = start

        # Binary literal: 0b or 0B followed by at least one binary digit
        if expression[i] == '0' and expression[i + 1:i + 2] in ('b', 'B'):
            i += 2
            if i >= len(expression) or expression[i] not in '01':
                raise ExprCalcLexicalError(
                    message="Invalid number literal: binary prefix without binary digits",
                    position=i,
                    received=f"Literal: {expression[start:i + 1]}",
                    expected="At least one 0 or 1 after '0b'",
                    example="Correct: 0b1011\nIncorrect: 0b, 0b2"
                )

            value = 0
            while i < len(expression) and expression[i] in '01':
                value = (value << 1) | (1 if expression[i] == '1' else 0)
                i += 1

            return ExprCalcToken.integer(value), i - start

        while i < len(expression) and _is_digit(expression[i]):
            i += 1

        if i >= len(expression) or expression[i] != '.':
            try:
                return ExprCalcToken.from_value(ExprCalcInteger.from_digits(expression[start:i])), i - start

            except ValueError as e:
                raise ExprCalcLexicalError(
                    message="Invalid number literal: integer literal has too many digits",
                    position=start,
                    received=f"Literal of {i - start} digits",
                    expected="An integer literal within the interpreter's digit limit",
                    suggestion="Build large integers with ** or !, e.g. 10 ** 5000"
                ) from e

        # Real literal: the decimal point must be followed by at least one digit
        i += 1
        if i >= len(expression) or not _is_digit(expression[i]):
            raise ExprCalcLexicalError(
                message="Invalid number literal: decimal point not followed by a digit",
                position=i,
                received=f"Literal: {expression[start:i]}",
                expected="At least one digit after '.'",
                example="Correct: 2.0, 2.5\nIncorrect: 2.",
                suggestion=f"Write {expression[start:i]}0"
            )

        while i < len(expression) and _is_digit(expression[i]):
            i += 1

        real = ExprCalcReal.from_digits(expression[start:i])
        if math.isinf(real.value):
            raise ExprCalcLexicalError(
                message="Invalid number literal: real literal out of range",
                position=start,
                received=f"Literal of {i - start} characters",
                expected=f"A real literal no larger than {sys.float_info.max!r}"
            )

        return ExprCalcToken.from_value(real), i - start

    def _read_identifier(self, expression: str, start: int) -> Tuple[ExprCalcToken, int]:
        """
        Read an identifier and resolve it to a keyword or variable token.

        Returns:
            Tuple of (token, length_consumed)
        """
        i = start
        while i < len(expression) and (_is_letter(expression[i]) or _is_digit(expression[i])):
            i += 1

        identifier = expression[start:i]
        token = self._keywords.get(identifier)
        if token is None:
            token = self._symbol_table.bind(identifier)

        return token, i - start

    def _expect_function_paren(self, expression: str, start: int, function: ExprCalcToken) -> None:
        """
        Check that the next non-space character after a function name is '('.

        Raises:
            ExprCalcLexicalError: If the function is not followed by '('
        """
        i = start
        while i < len(expression) and expression[i].isspace():
            i += 1

        if i < len(expression) and expression[i] == '(':
            return

        name = function.spelling()
        found = expression[i] if i < len(expression) else "end of expression"
        raise ExprCalcLexicalError(
            message="Function not followed by parenthesis",
            position=i,
            received=f"Found: {found}",
            expected=f"'(' after {name}",
            example=f"Correct: {name.lower()}(1)\nIncorrect: {name.lower()} 1",
            suggestion="Enclose function arguments in parentheses",
            context="Functions are always called with a parenthesised argument list"
        )
