"""Core package for the SDLT service

Pure calculation code: band table, tax computation and error types.
"""

from .bands import NORMAL_RATE_BANDS, THRESHOLDS, SDLTBand
from .calculator import (
    breakdown,
    compute,
    format_money,
    format_result,
    round_money,
    validate_property_value,
)
from .exceptions import InvalidInputError, SDLTError, ToolNotFoundError

__all__ = [
    # Bands
    "SDLTBand",
    "NORMAL_RATE_BANDS",
    "THRESHOLDS",
    # Calculator
    "breakdown",
    "compute",
    "format_money",
    "format_result",
    "round_money",
    "validate_property_value",
    # Errors
    "SDLTError",
    "InvalidInputError",
    "ToolNotFoundError",
]
