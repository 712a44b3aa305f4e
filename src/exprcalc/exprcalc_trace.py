"""ExprCalc trace watcher implementations.

A trace watcher receives one message per evaluation step, formatted as
"<token> | <operand stack after the step>".
"""

import logging
from typing import List


class ExprCalcStdoutTraceWatcher:
    """Watcher that prints trace messages to stdout."""

    def on_trace(self, message: str) -> None:
        """
        Print trace message to stdout.

        Args:
            message: The trace message
        """
        print(message)


class ExprCalcLoggingTraceWatcher:
    """Watcher that forwards trace messages to a logger at debug level."""

    def __init__(self, logger_name: str = "ExprCalcTrace") -> None:
        """
        Initialize logging trace watcher.

        Args:
            logger_name: Name of the logger that receives the trace messages
        """
        self._logger = logging.getLogger(logger_name)

    def on_trace(self, message: str) -> None:
        self._logger.debug("%s", message)


class ExprCalcBufferingTraceWatcher:
    """Watcher that buffers trace messages for programmatic access."""

    def __init__(self) -> None:
        """Initialize buffering trace watcher."""
        self.traces: List[str] = []

    def on_trace(self, message: str) -> None:
        """
        Buffer trace message.

        Args:
            message: The trace message
        """
        self.traces.append(message)

    def get_traces(self) -> List[str]:
        """
        Get all buffered traces.

        Returns:
            List of trace messages
        """
        return self.traces.copy()

    def clear(self) -> None:
        """Clear all buffered traces."""
        self.traces.clear()
