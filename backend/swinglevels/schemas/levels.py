"""
CONTRACT 2: Levels Pipeline

Input: candles (anything exposing high/low/open/close)
Output: RenkoBrick -> Pivot -> SwingStatus -> SupportAndResistance

Value types flowing between the pipeline stages, plus the request/response
models of the levels service. All values are immutable once produced.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, computed_field

from swinglevels.schemas.market import OHLCV, Timeframe


# =============================================================================
# ENUMS
# =============================================================================


class RenkoDirection(str, Enum):
    UP = "UP"
    DOWN = "DOWN"


class PivotType(str, Enum):
    HIGH = "HIGH"
    LOW = "LOW"
    HIGH_LOW = "HIGH_LOW"  # Tall candle: new high and new low on the same bar
    NO_CHANGE = "NO_CHANGE"


class SwingType(str, Enum):
    HIGHER_HIGH = "HIGHER_HIGH"
    LOWER_LOW = "LOWER_LOW"
    LOWER_HIGH = "LOWER_HIGH"
    HIGHER_LOW = "HIGHER_LOW"
    HIGHER_HIGH_AND_HIGHER_LOW = "HIGHER_HIGH_AND_HIGHER_LOW"
    HIGHER_HIGH_AND_LOWER_LOW = "HIGHER_HIGH_AND_LOWER_LOW"
    LOWER_HIGH_AND_HIGHER_LOW = "LOWER_HIGH_AND_HIGHER_LOW"
    LOWER_HIGH_AND_LOWER_LOW = "LOWER_HIGH_AND_LOWER_LOW"
    HOLD = "HOLD"


class SignalType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"


# =============================================================================
# PIPELINE VALUES
# =============================================================================


class RenkoBrick(BaseModel):
    """
    Fixed-size brick. `level` is floor(open / size).

    Up bricks close one level above their open, down bricks one level below.
    """

    level: int
    size: float = Field(..., gt=0)
    direction: RenkoDirection

    class Config:
        frozen = True

    @computed_field
    @property
    def open(self) -> float:
        return self.level * self.size

    @computed_field
    @property
    def close(self) -> float:
        step = 1 if self.direction == RenkoDirection.UP else -1
        return (self.level + step) * self.size

    @computed_field
    @property
    def high(self) -> float:
        return self.close if self.direction == RenkoDirection.UP else self.open

    @computed_field
    @property
    def low(self) -> float:
        return self.open if self.direction == RenkoDirection.UP else self.close


class Pivot(BaseModel):
    """Local extremum found at one bar. `high`/`low` are set only when they qualify."""

    kind: PivotType
    high: Optional[float] = None
    low: Optional[float] = None

    class Config:
        frozen = True

    @classmethod
    def pivot_high(cls, high: float) -> "Pivot":
        return cls(kind=PivotType.HIGH, high=high)

    @classmethod
    def pivot_low(cls, low: float) -> "Pivot":
        return cls(kind=PivotType.LOW, low=low)

    @classmethod
    def pivot_high_low(cls, high: float, low: float) -> "Pivot":
        return cls(kind=PivotType.HIGH_LOW, high=high, low=low)

    @classmethod
    def no_change(cls) -> "Pivot":
        return cls(kind=PivotType.NO_CHANGE)


class SwingStatus(BaseModel):
    """Classifier state after consuming one pivot."""

    swing_type: SwingType
    support: Optional[float] = None
    resistance: Optional[float] = None

    class Config:
        frozen = True


class SupportAndResistance(BaseModel):
    """Final support/resistance of a swing-status sequence."""

    support: Optional[float] = None
    resistance: Optional[float] = None

    class Config:
        frozen = True

    def as_pair(self) -> Optional[tuple[float, float]]:
        """(support, resistance) when both lines exist, else None."""
        if self.support is None or self.resistance is None:
            return None
        return self.support, self.resistance


class LevelsAnalysis(BaseModel):
    """Everything one pass of the pipeline produced."""

    atr: Optional[float] = None
    brick_size: float = Field(..., gt=0)
    bricks: list[RenkoBrick]
    pivots: list[Pivot]
    swings: list[SwingStatus]
    support: Optional[float] = None
    resistance: Optional[float] = None
    swing_type: SwingType = SwingType.HOLD


# =============================================================================
# SERVICE REQUEST / RESPONSE
# =============================================================================


class AnalyzeRequest(BaseModel):
    """Run the pipeline over caller-supplied candles (no fetching)."""

    candles: list[OHLCV] = Field(..., min_length=2)
    window_size: int = Field(default=5, ge=1)
    atr_period: int = Field(default=14, ge=2)
    brick_size: Optional[float] = Field(default=None, gt=0)
    strict: bool = True


class LevelsRequest(BaseModel):
    """
    Request for support/resistance of an instrument.
    Sent by: API / trading loop
    Received by: Levels Service

    Unset fields fall back to application settings.
    """

    instrument: str = Field(..., min_length=1, description="e.g. EUR_USD")
    timeframe: Optional[Timeframe] = None
    candle_count: Optional[int] = Field(default=None, ge=2, le=5000)
    window_size: Optional[int] = Field(default=None, ge=1)
    atr_period: Optional[int] = Field(default=None, ge=2)


class LevelsOutput(BaseModel):
    """
    Support/resistance for an instrument plus the breakout decision.
    Returned by: Levels Service
    """

    instrument: str
    timeframe: Timeframe
    timestamp: datetime
    atr: float
    support: Optional[float] = None
    resistance: Optional[float] = None
    swing_type: SwingType = SwingType.HOLD
    last_price: Optional[float] = None
    spread: Optional[float] = None
    spread_atr_percent: Optional[float] = None
    signal: SignalType = SignalType.NEUTRAL
    candles_used: int = Field(..., ge=0)
    backfill_rounds: int = Field(default=0, ge=0)
    analysis: LevelsAnalysis
