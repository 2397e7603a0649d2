"""
Levels Engine Service

CONTRACT:
    Input:  LevelsRequest (or candles, for the pure pipeline)
    Output: LevelsOutput

RESPONSIBILITIES:
    - True range and ATR (Renko brick sizing)
    - Renko bricks with whipsaw filtering
    - Pivot high/low detection
    - Higher-high / lower-low swing classification
    - Running support and resistance lines
    - Breakout decision against the latest quote

All math is deterministic and reproducible.
"""

from swinglevels.services.indicators.candle import Candle
from swinglevels.services.indicators.calculations import true_range, true_ranges, average, atr
from swinglevels.services.indicators.renko import renko
from swinglevels.services.indicators.pivots import pivots
from swinglevels.services.indicators.swing import (
    SwingClassifier,
    swing_statuses,
    support_and_resistance,
)
from swinglevels.services.indicators.pipeline import analyze_candles
from swinglevels.services.indicators.interface import LevelsServiceInterface
from swinglevels.services.indicators.service import LevelsService, get_levels_service

__all__ = [
    "Candle",
    "true_range",
    "true_ranges",
    "average",
    "atr",
    "renko",
    "pivots",
    "SwingClassifier",
    "swing_statuses",
    "support_and_resistance",
    "analyze_candles",
    "LevelsServiceInterface",
    "LevelsService",
    "get_levels_service",
]
