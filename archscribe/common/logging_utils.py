"""
Safe logging for the MCP server context.

MCP stdio transport:
- STDOUT is reserved for JSON-RPC messages
- STDERR may be used for logging

In MCP server mode (MCP_SERVER=true) non-error records go to stderr so stdout
stays clean. Set MCP_LOG_STREAM=stdout to opt in to stdout logging when the
host allows it. DEBUG records are dropped unless DEBUG=true. Flags must be the
exact lowercase string "true".

Environment flags are read when a record is emitted, not when the handler is
installed, so a process can switch into MCP mode after logging is set up.
"""

import os
import sys
import logging
from typing import Optional

ROOT_LOGGER_NAME = "archscribe"

_LEVEL_TAGS = {
    "WARNING": "WARN",
    "CRITICAL": "ERROR",
}


def is_mcp_server() -> bool:
    return os.getenv("MCP_SERVER") == "true"


class LevelTagFormatter(logging.Formatter):
    """Formats records as ``[LEVEL] message``."""

    def __init__(self):
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        tag = _LEVEL_TAGS.get(record.levelname, record.levelname)
        return f"[{tag}] {message}"


class StreamSelectingHandler(logging.Handler):
    """
    Handler that picks stdout or stderr per record.

    Args:
        stream_preference: Fallback for MCP_LOG_STREAM ("stdout" to opt in)
        debug: Fallback for the DEBUG environment flag
    """

    def __init__(self, stream_preference: str = "", debug: bool = False):
        super().__init__(level=logging.DEBUG)
        self._stream_preference = stream_preference
        self._debug = debug
        self.setFormatter(LevelTagFormatter())

    def _debug_enabled(self) -> bool:
        return os.getenv("DEBUG") == "true" or self._debug

    def use_stdout(self, record: logging.LogRecord) -> bool:
        if record.levelno >= logging.ERROR:
            return False
        if is_mcp_server():
            # In MCP mode keep stdout pristine unless explicitly opting in
            preference = os.getenv("MCP_LOG_STREAM") or self._stream_preference
            return preference == "stdout"
        return True

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and not self._debug_enabled():
            return
        try:
            message = self.format(record)
            # Resolve the stream at emit time so redirected streams are honoured
            stream = sys.stdout if self.use_stdout(record) else sys.stderr
            stream.write(message + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


def configure_logging(
    level: str = "INFO",
    stream_preference: str = "",
    debug: bool = False,
) -> logging.Logger:
    """
    Install the stream-selecting handler on the archscribe logger.

    Safe to call more than once: a previously installed handler is replaced.

    Returns:
        The configured ``archscribe`` logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if isinstance(handler, StreamSelectingHandler):
            root.removeHandler(handler)

    root.addHandler(StreamSelectingHandler(stream_preference=stream_preference, debug=debug))
    debug_requested = debug or os.getenv("DEBUG") == "true"
    root.setLevel(logging.DEBUG if debug_requested else _resolve_level(level))
    root.propagate = False
    return root


def _resolve_level(level: Optional[str]) -> int:
    resolved = logging.getLevelName((level or "INFO").upper())
    if isinstance(resolved, int):
        return resolved
    return logging.INFO
