"""
Levels Pipeline

candles -> ATR (brick size) -> Renko bricks -> pivots -> swings -> support/resistance
"""

import logging
from itertools import islice
from typing import Optional, Sequence

from swinglevels.schemas.levels import LevelsAnalysis, SwingStatus, SwingType
from swinglevels.services.base import InsufficientDataError
from swinglevels.services.indicators.calculations import atr as average_true_range
from swinglevels.services.indicators.candle import Candle
from swinglevels.services.indicators.pivots import pivots as find_pivots
from swinglevels.services.indicators.renko import closes, renko
from swinglevels.services.indicators.swing import (
    support_and_resistance,
    swing_statuses,
)

logger = logging.getLogger(__name__)

PIPELINE_NAME = "LevelsPipeline"


def recent_atr(candles: Sequence[Candle], period: int = 14) -> Optional[float]:
    """ATR over the last `period` candles (period - 1 true ranges)."""
    return average_true_range(candles[-period:])


def latest_swing_type(swings: Sequence[SwingStatus]) -> SwingType:
    """Most recent structural change, HOLD if there never was one."""
    for status in reversed(swings):
        if status.swing_type != SwingType.HOLD:
            return status.swing_type
    return SwingType.HOLD


def analyze_candles(
    candles: Sequence[Candle],
    window_size: int = 5,
    atr_period: int = 14,
    brick_size: Optional[float] = None,
    strict: bool = True,
    max_bricks: Optional[int] = None,
) -> LevelsAnalysis:
    """
    Run the whole pipeline over a candle history.

    Args:
        candles: Oldest first
        window_size: Pivot window, counted in Renko bricks
        atr_period: Candles used for the ATR
        brick_size: Fixed brick size; defaults to the ATR
        strict: Pivot tie handling, see pivots()
        max_bricks: Upper bound on the bricks built; None for no bound

    Returns:
        LevelsAnalysis. Too few bricks for one pivot window is reported as
        no pivots and no levels rather than an error.

    Raises:
        InsufficientDataError: If no brick size was given and the ATR is
            missing or zero
        ValueError: If the brick size is too small for the prices, or the
            bricks would exceed max_bricks
    """
    atr_value = recent_atr(candles, atr_period)
    if brick_size is None:
        if atr_value is None or atr_value <= 0:
            raise InsufficientDataError(
                PIPELINE_NAME,
                f"Cannot size Renko bricks: ATR is {atr_value}",
                {"candles": len(candles), "atr_period": atr_period},
            )
        brick_size = atr_value

    brick_stream = renko(closes(candles), brick_size)
    if max_bricks is not None:
        # One past the budget is enough to tell it was exceeded
        brick_stream = islice(brick_stream, max_bricks + 1)
    bricks = list(brick_stream)
    if max_bricks is not None and len(bricks) > max_bricks:
        raise ValueError(
            f"Brick size {brick_size} gives more than {max_bricks} Renko bricks"
        )
    logger.debug(
        f"{len(candles)} candles -> {len(bricks)} bricks of {brick_size:.6f}"
    )

    if len(bricks) < window_size:
        logger.debug(f"Only {len(bricks)} bricks for a window of {window_size}")
        return LevelsAnalysis(
            atr=atr_value,
            brick_size=brick_size,
            bricks=bricks,
            pivots=[],
            swings=[],
        )

    pivot_list = list(find_pivots(bricks, window_size, strict=strict))
    swings = list(swing_statuses(pivot_list))
    levels = support_and_resistance(swings)
    logger.debug(f"support: {levels.support} resistance: {levels.resistance}")

    return LevelsAnalysis(
        atr=atr_value,
        brick_size=brick_size,
        bricks=bricks,
        pivots=pivot_list,
        swings=swings,
        support=levels.support,
        resistance=levels.resistance,
        swing_type=latest_swing_type(swings),
    )
