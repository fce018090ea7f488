"""Tool table for the SDLT MCP server.

Tools are registered explicitly: ``TOOLS`` maps each tool name to its
advertised descriptor and a synchronous handler. Handlers take the raw
``arguments`` object of a ``tools/call`` request and return MCP content.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import mcp.types as types
from pydantic import ValidationError

from sdlt_service.core.calculator import breakdown, format_result
from sdlt_service.core.exceptions import InvalidInputError, ToolNotFoundError
from sdlt_service.models.schemas import SDLTRequest
from sdlt_service.utils.logger import get_logger

logger = get_logger(__name__)


MISSING_PROPERTY_VALUE = "Property value is missing."

# Longest repr of a rejected value quoted back in an error message.
MAX_ECHO_CHARS = 40

ToolHandler = Callable[[dict[str, Any]], list[types.TextContent]]


@dataclass(frozen=True)
class RegisteredTool:
    descriptor: types.Tool
    handler: ToolHandler


def _text(text: str) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=text)]


def _preview(value: Any) -> str:
    text = repr(value)
    if len(text) > MAX_ECHO_CHARS:
        text = text[: MAX_ECHO_CHARS - 3] + "..."
    return f"{text} ({type(value).__name__})"


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    return str(err.get("msg") or "invalid value")


def calculate_sdlt(arguments: dict[str, Any]) -> list[types.TextContent]:
    # Absence is a soft failure: a success result carrying a fixed message.
    if "property_value" not in arguments:
        logger.warning("calculate_sdlt called without property_value")
        return _text(MISSING_PROPERTY_VALUE)

    try:
        request = SDLTRequest.model_validate(arguments)
    except ValidationError as exc:
        raise InvalidInputError(
            f"property_value {_preview(arguments['property_value'])} rejected: {_first_error(exc)}"
        ) from exc

    value = request.property_value
    parts = breakdown(value)
    if logger.isEnabledFor(logging.DEBUG):
        for band, band_tax in parts:
            logger.debug("  %s: %.2f", band.describe(), band_tax)
    tax = sum((band_tax for _, band_tax in parts), 0.0)
    return _text(format_result(value, tax))


CALCULATE_SDLT = types.Tool(
    name="calculate_sdlt",
    description="Calculate UK SDLT - property tax",
    inputSchema={
        "type": "object",
        "properties": {
            "property_value": {"type": "number"},
        },
        "required": ["property_value"],
    },
)


TOOLS: dict[str, RegisteredTool] = {
    CALCULATE_SDLT.name: RegisteredTool(descriptor=CALCULATE_SDLT, handler=calculate_sdlt),
}


def list_descriptors() -> list[types.Tool]:
    return [tool.descriptor for tool in TOOLS.values()]


def dispatch(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
    """Run the handler registered under ``name``."""
    tool = TOOLS.get(name)
    if tool is None:
        raise ToolNotFoundError(f"Unknown tool: {name}")
    return tool.handler(arguments or {})
