"""Error taxonomy for the SDLT service.

Each exception carries a ``kind`` that is surfaced verbatim to MCP clients
as the prefix of the tool-level error text.
"""

from __future__ import annotations


class SDLTError(Exception):
    """Base class for errors confined to a single tool call."""

    kind = "SDLTError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class InvalidInputError(SDLTError, ValueError):
    """Property value is not a finite, non-negative number."""

    kind = "InvalidInput"


class ToolNotFoundError(SDLTError, LookupError):
    """A tools/call request named a tool this server does not offer."""

    kind = "ToolNotFound"
