"""ExprCalc infix expression calculator package."""

# Main API
from exprcalc.exprcalc import ExprCalc

# Exceptions
from exprcalc.exprcalc_error import (
    ExprCalcError, ExprCalcLexicalError, ExprCalcSyntaxError, ExprCalcEvaluationError
)

# Value types
from exprcalc.exprcalc_value import ExprCalcValue, ExprCalcInteger, ExprCalcReal, ExprCalcBoolean

# Lower-level components
from exprcalc.exprcalc_token import ExprCalcToken, ExprCalcTokenKind, ExprCalcOperation
from exprcalc.exprcalc_symbol_table import ExprCalcSymbolTable
from exprcalc.exprcalc_tokenizer import ExprCalcTokenizer
from exprcalc.exprcalc_parser import ExprCalcParser
from exprcalc.exprcalc_evaluator import ExprCalcEvaluator, ExprCalcTraceWatcher

# Trace watchers
from exprcalc.exprcalc_trace import (
    ExprCalcStdoutTraceWatcher, ExprCalcLoggingTraceWatcher, ExprCalcBufferingTraceWatcher
)


__all__ = [
    # Main API
    "ExprCalc",

    # Exceptions
    "ExprCalcError", "ExprCalcLexicalError", "ExprCalcSyntaxError", "ExprCalcEvaluationError",

    # Value types
    "ExprCalcValue", "ExprCalcInteger", "ExprCalcReal", "ExprCalcBoolean",

    # Lower-level components
    "ExprCalcToken", "ExprCalcTokenKind", "ExprCalcOperation", "ExprCalcSymbolTable",
    "ExprCalcTokenizer", "ExprCalcParser", "ExprCalcEvaluator", "ExprCalcTraceWatcher",

    # Trace watchers
    "ExprCalcStdoutTraceWatcher", "ExprCalcLoggingTraceWatcher", "ExprCalcBufferingTraceWatcher",
]
