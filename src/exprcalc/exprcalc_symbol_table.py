"""Variable symbol table for ExprCalc.

Variables are stored in an arena: each name owns one slot holding its
current value (or None while unset).  Variable tokens refer to their slot
by index, so the same token can appear any number of times in a token
sequence while the value it denotes changes through assignment.
"""

import logging
from typing import Dict, List, Optional

from exprcalc.exprcalc_error import ExprCalcEvaluationError
from exprcalc.exprcalc_token import ExprCalcToken
from exprcalc.exprcalc_value import ExprCalcValue


class ExprCalcSymbolTable:
    """Maps identifier text to Variable tokens and holds their values."""

    def __init__(self) -> None:
        """Initialize an empty symbol table."""
        self._logger = logging.getLogger("ExprCalcSymbolTable")
        self._variables: Dict[str, ExprCalcToken] = {}
        self._slots: List[Optional[ExprCalcValue]] = []

    def lookup(self, name: str) -> Optional[ExprCalcToken]:
        """
        Look up the Variable token bound to a name.

        Args:
            name: Identifier text (case-sensitive)

        Returns:
            The Variable token, or None if the name has never been seen
        """
        return self._variables.get(name)

    def bind(self, name: str) -> ExprCalcToken:
        """
        Return the Variable token for a name, creating it if absent.

        Args:
            name: Identifier text (case-sensitive)

        Returns:
            The unique Variable token for this name
        """
        token = self._variables.get(name)
        if token is not None:
            return token

        token = ExprCalcToken.variable(name, len(self._slots))
        self._slots.append(None)
        self._variables[name] = token
        self._logger.debug("Created variable '%s' in slot %d", name, token.slot)
        return token

    def _slot_of(self, variable: ExprCalcToken) -> int:
        """Validate that a token is a Variable owned by this table and return its slot."""
        if not variable.is_variable():
            raise ExprCalcEvaluationError(
                message=f"Not a variable: {variable.spelling()}",
                received=f"{variable.kind.value}: {variable.spelling()}",
                expected="A variable token"
            )

        slot = variable.slot
        assert slot is not None, "Variable tokens always carry a slot"
        if slot >= len(self._slots) or self._variables.get(variable.name or "") is not variable:
            raise ExprCalcEvaluationError(
                message=f"Unknown variable: '{variable.name}'",
                context="Variables belong to the tokenizer that created them"
            )

        return slot

    def get(self, variable: ExprCalcToken) -> Optional[ExprCalcValue]:
        """
        Get the current value of a variable.

        Returns:
            The bound value, or None if the variable has never been assigned
        """
        return self._slots[self._slot_of(variable)]

    def set(self, variable: ExprCalcToken, value: ExprCalcValue) -> None:
        """Bind a value to a variable, replacing any previous value."""
        self._slots[self._slot_of(variable)] = value

    def names(self) -> List[str]:
        """Get all known variable names, in creation order."""
        return list(self._variables.keys())

    def __len__(self) -> int:
        return len(self._variables)

    def __contains__(self, name: object) -> bool:
        return name in self._variables
