"""
Pivot Detection

Finds local highs and lows over a sliding window of candles (or bricks).

A bar is a pivot high when its high is above the high of every other bar in
the window, and a pivot low when its low is below every other low. A bar can
be both (a tall candle). Bars too close to either end of the sequence to have
a full window never pivot.
"""

from typing import Iterator, Sequence

import numpy as np

from swinglevels.schemas.levels import Pivot
from swinglevels.services.indicators.candle import Candle


def pivots(
    candles: Sequence[Candle], window_size: int, strict: bool = True
) -> Iterator[Pivot]:
    """
    One Pivot per candle, same order and length as the input.

    Args:
        candles: Random-access sequence of candles
        window_size: Bars in each window, centre bar included. The centre sits
            at window_size // 2, so odd sizes give a symmetric window.
        strict: Require the centre to beat every other bar outright. With
            strict=False, ties with the extreme still count as a pivot.

    Raises:
        ValueError: If window_size is below 1 or larger than the input
            (raised immediately, before any pivot is produced)
    """
    if window_size < 1 or window_size > len(candles):
        raise ValueError(
            f"window_size must be between 1 and {len(candles)}, got {window_size}"
        )

    highs = np.array([c.high for c in candles], dtype=float)
    lows = np.array([c.low for c in candles], dtype=float)
    return _scan(highs, lows, window_size, strict)


def _scan(
    highs: np.ndarray, lows: np.ndarray, window_size: int, strict: bool
) -> Iterator[Pivot]:
    before = window_size // 2
    after = window_size - before - 1
    n = len(highs)

    for i in range(n):
        if i < before or i + after >= n:
            yield Pivot.no_change()
            continue

        start, end = i - before, i + after + 1
        other_highs = np.delete(highs[start:end], before)
        other_lows = np.delete(lows[start:end], before)

        if strict:
            is_high = bool(np.all(highs[i] > other_highs))
            is_low = bool(np.all(lows[i] < other_lows))
        else:
            is_high = bool(np.all(highs[i] >= other_highs))
            is_low = bool(np.all(lows[i] <= other_lows))

        if is_high and is_low:
            yield Pivot.pivot_high_low(float(highs[i]), float(lows[i]))
        elif is_high:
            yield Pivot.pivot_high(float(highs[i]))
        elif is_low:
            yield Pivot.pivot_low(float(lows[i]))
        else:
            yield Pivot.no_change()
