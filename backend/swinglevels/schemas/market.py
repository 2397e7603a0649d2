"""
CONTRACT 1: Candle Source Layer

Input: instrument + timeframe + count / time range
Output: list[OHLCV], PriceQuote

Candles come from an external broker API (or the mock source) and are
normalized into these models before the levels pipeline reads them.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class Timeframe(str, Enum):
    S5 = "5s"
    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"
    W1 = "1w"


# =============================================================================
# CANDLES
# =============================================================================


class OHLCV(BaseModel):
    """Single candlestick data point."""

    timestamp: datetime
    open: float = Field(..., gt=0)
    high: float = Field(..., gt=0)
    low: float = Field(..., gt=0)
    close: float = Field(..., gt=0)
    volume: int = Field(default=0, ge=0)
    complete: bool = True

    class Config:
        frozen = True


class PriceQuote(BaseModel):
    """Latest bid/ask snapshot for an instrument."""

    instrument: str
    timestamp: datetime
    bid: Optional[float] = Field(default=None, gt=0)
    ask: Optional[float] = Field(default=None, gt=0)
    last: Optional[float] = Field(default=None, gt=0)

    @property
    def spread(self) -> Optional[float]:
        if self.bid is None or self.ask is None:
            return None
        return self.ask - self.bid


class CandleRequest(BaseModel):
    """
    Request for a batch of candles.
    Sent by: Levels Service
    Received by: Candle Source
    """

    instrument: str = Field(..., min_length=1, description="e.g. EUR_USD")
    timeframe: Timeframe = Field(default=Timeframe.M15)
    count: int = Field(default=200, ge=1, le=5000)
    before: Optional[datetime] = Field(
        default=None, description="Only candles opening strictly before this time"
    )
    after: Optional[datetime] = Field(
        default=None, description="Only candles opening strictly after this time"
    )
