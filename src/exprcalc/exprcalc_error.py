"""Exception classes for ExprCalc with detailed context.

Each pipeline stage raises its own subclass: the tokenizer raises
ExprCalcLexicalError, the parser ExprCalcSyntaxError and the evaluator
ExprCalcEvaluationError.  Lexical errors always carry the zero-based
character offset of the offending input, exposed as both `position` and
`offset`; later stages work on tokens and leave `position` unset.
"""

from typing import Optional


class ExprCalcError(Exception):
    """Base exception for ExprCalc errors with detailed context information."""

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        expected: Optional[str] = None,
        received: Optional[str] = None,
        suggestion: Optional[str] = None,
        example: Optional[str] = None,
        position: Optional[int] = None
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            context: Additional context information
            expected: What was expected
            received: What was actually received
            suggestion: Suggestion for fixing the error
            example: Example of correct usage
            position: Character offset where the error occurred
        """
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion
        self.example = example
        self.position = position

        super().__init__(self._format_detailed_message())

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.position is not None:
            parts.append(f"Position: {self.position}")

        if self.received:
            parts.append(f"Received: {self.received}")

        if self.expected:
            parts.append(f"Expected: {self.expected}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        if self.example:
            parts.append(f"Example: {self.example}")

        return "\n".join(parts)


class ExprCalcLexicalError(ExprCalcError):
    """Tokenization errors.  Always carries the offset of the offending character."""

    @property
    def offset(self) -> int:
        """Zero-based character offset of the error."""
        assert self.position is not None, "Lexical errors must carry a position"
        return self.position


class ExprCalcSyntaxError(ExprCalcError):
    """Infix to postfix conversion errors (unbalanced parentheses)."""


class ExprCalcEvaluationError(ExprCalcError):
    """RPN evaluation errors."""
