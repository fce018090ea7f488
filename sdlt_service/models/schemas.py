"""Request models for tool arguments."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SDLTRequest(BaseModel):
    """Arguments of the ``calculate_sdlt`` tool."""

    model_config = ConfigDict(extra="ignore")

    property_value: float = Field(
        ...,
        ge=0,
        strict=True,
        allow_inf_nan=False,
        description="Purchase price in pounds sterling",
    )
