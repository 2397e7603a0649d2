"""
SwingLevels Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from swinglevels.schemas.market import (
    Timeframe,
    OHLCV,
    PriceQuote,
    CandleRequest,
)
from swinglevels.schemas.levels import (
    RenkoDirection,
    RenkoBrick,
    PivotType,
    Pivot,
    SwingType,
    SwingStatus,
    SupportAndResistance,
    SignalType,
    LevelsAnalysis,
    AnalyzeRequest,
    LevelsRequest,
    LevelsOutput,
)

__all__ = [
    # Market
    "Timeframe",
    "OHLCV",
    "PriceQuote",
    "CandleRequest",
    # Levels
    "RenkoDirection",
    "RenkoBrick",
    "PivotType",
    "Pivot",
    "SwingType",
    "SwingStatus",
    "SupportAndResistance",
    "SignalType",
    "LevelsAnalysis",
    "AnalyzeRequest",
    "LevelsRequest",
    "LevelsOutput",
]
