"""Shunting-yard parser converting ExprCalc infix token sequences to postfix (RPN) order."""

from typing import Dict, List

from exprcalc.exprcalc_error import ExprCalcSyntaxError
from exprcalc.exprcalc_token import ExprCalcToken, ExprCalcOperation


_O = ExprCalcOperation

# Higher binds tighter.  Anything not listed has precedence 0.
PRECEDENCE: Dict[ExprCalcOperation, int] = {
    _O.FACTORIAL: 15,
    _O.POWER: 14,
    _O.IDENTITY: 13,
    _O.NEGATION: 13,
    _O.NOT: 13,
    _O.MULTIPLICATION: 12,
    _O.DIVISION: 12,
    _O.MODULUS: 12,
    _O.ADDITION: 11,
    _O.SUBTRACTION: 11,
    _O.LESS: 9,
    _O.LESS_EQUAL: 9,
    _O.GREATER: 9,
    _O.GREATER_EQUAL: 9,
    _O.EQUALITY: 8,
    _O.INEQUALITY: 8,
    _O.AND: 6,
    _O.NAND: 6,
    _O.XOR: 5,
    _O.XNOR: 5,
    _O.OR: 4,
    _O.NOR: 4,
    _O.ASSIGNMENT: 1,
}


def precedence(token: ExprCalcToken) -> int:
    """Return the binding precedence of a token (0 for unrecognised tokens)."""
    if token.operation is None:
        return 0

    return PRECEDENCE.get(token.operation, 0)


class ExprCalcParser:
    """
    Converts infix token sequences into equivalent postfix sequences.

    The parser holds no state between calls; the precedence table is pure data.
    """

    def parse(self, infix_tokens: List[ExprCalcToken]) -> List[ExprCalcToken]:
        """
        Convert an infix token sequence to postfix order.

        Args:
            infix_tokens: Tokens in source order, as produced by the tokenizer

        Returns:
            Tokens in postfix order, evaluable left to right with a single stack

        Raises:
            ExprCalcSyntaxError: If parentheses are unbalanced
        """
        output: List[ExprCalcToken] = []
        op_stack: List[ExprCalcToken] = []

        for token in infix_tokens:
            if token.is_operand():
                output.append(token)
                continue

            if token.is_function():
                op_stack.append(token)
                continue

            if token.is_argument_separator():
                while op_stack and not op_stack[-1].is_left_paren():
                    output.append(op_stack.pop())

                continue

            if token.is_left_paren():
                op_stack.append(token)
                continue

            if token.is_right_paren():
                while op_stack and not op_stack[-1].is_left_paren():
                    output.append(op_stack.pop())

                if not op_stack:
                    raise ExprCalcSyntaxError(
                        message="No matching left parenthesis",
                        received="')' without a preceding '('",
                        expected="Every ')' to close an earlier '('",
                        example="Correct: (1 + 2) * 3\nIncorrect: 1 + 2) * 3",
                        suggestion="Remove the extra ')' or add the missing '('"
                    )

                op_stack.pop()

                # A function call closes with its argument list
                if op_stack and op_stack[-1].is_function():
                    output.append(op_stack.pop())

                continue

            assert token.is_operator(), f"Unexpected token kind: {token.kind}"

            # Prefix operators have no left operand, so nothing on the stack can reduce first
            if not token.is_unary_operator():
                token_precedence = precedence(token)
                while op_stack and op_stack[-1].is_operator():
                    top_precedence = precedence(op_stack[-1])
                    if top_precedence > token_precedence or (
                        top_precedence == token_precedence and not token.is_right_associative()
                    ):
                        output.append(op_stack.pop())
                        continue

                    break

            op_stack.append(token)

        while op_stack:
            token = op_stack.pop()
            if token.is_left_paren():
                raise ExprCalcSyntaxError(
                    message="Missing right parenthesis",
                    received="'(' that is never closed",
                    expected="A ')' for every '('",
                    example="Correct: (1 + 2) * 3\nIncorrect: (1 + 2 * 3",
                    suggestion="Add the missing ')'"
                )

            output.append(token)

        return output
