"""SDLT band table for the residential normal-rate ladder."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class SDLTBand(BaseModel):
    """A slice of the purchase price taxed at one marginal rate.

    The band covers ``(lower, upper]``; ``upper`` is ``None`` for the
    open-ended top band.
    """

    model_config = ConfigDict(frozen=True)

    lower: float
    upper: Optional[float] = None
    rate: float

    def portion(self, value: float) -> float:
        """Part of ``value`` that falls inside this band."""
        top = value if self.upper is None else min(value, self.upper)
        return max(0.0, top - self.lower)

    def describe(self) -> str:
        if self.upper is None:
            return f"above £{self.lower:,.0f} @ {self.rate * 100:.0f}%"
        return f"£{self.lower:,.0f}-£{self.upper:,.0f} @ {self.rate * 100:.0f}%"


NORMAL_RATE_BANDS: tuple[SDLTBand, ...] = (
    SDLTBand(lower=0, upper=125_000, rate=0.0),
    SDLTBand(lower=125_000, upper=250_000, rate=0.02),
    SDLTBand(lower=250_000, upper=925_000, rate=0.05),
    SDLTBand(lower=925_000, upper=1_500_000, rate=0.10),
    SDLTBand(lower=1_500_000, upper=None, rate=0.12),
)

THRESHOLDS: tuple[float, ...] = tuple(band.lower for band in NORMAL_RATE_BANDS[1:])
