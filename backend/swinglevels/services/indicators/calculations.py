"""
Volatility Calculations

True range and average true range over any sequence of candles.
All math is deterministic.
"""

from typing import Iterable, Iterator, Optional

import numpy as np

from swinglevels.services.indicators.candle import Candle


def true_range(candle: Candle, previous_close: float) -> float:
    """Greatest of high-low, |high - previous close| and |low - previous close|."""
    return max(
        candle.high - candle.low,
        abs(candle.high - previous_close),
        abs(candle.low - previous_close),
    )


def true_ranges(candles: Iterable[Candle]) -> Iterator[float]:
    """
    True range of every candle after the first.

    The first candle only seeds the previous close, so N candles give
    N - 1 values and a single candle gives none.
    """
    previous_close: Optional[float] = None
    for candle in candles:
        if previous_close is not None:
            yield true_range(candle, previous_close)
        previous_close = candle.close


def average(values: Iterable[float]) -> Optional[float]:
    """Arithmetic mean, or None when there are no values."""
    arr = np.fromiter(values, dtype=float)
    if arr.size == 0:
        return None
    return float(np.mean(arr))


def atr(candles: Iterable[Candle]) -> Optional[float]:
    """Average True Range. None means not enough candles yet."""
    return average(true_ranges(candles))
