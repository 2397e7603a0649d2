"""
Renko Bricks

Turns a stream of prices into fixed-size bricks, one brick per level crossed.

A level is floor(price / size). For a size of 2:

    price 0 -> 0, 1 -> 0, 2 -> 1, 3 -> 1, 4 -> 2

Isolated reversals are filtered out: a brick whose direction differs from
the previous brick is swallowed, and the move only shows up once a second
brick in the new direction confirms it.
"""

import math
from typing import Iterable, Iterator, Optional

from swinglevels.schemas.levels import RenkoBrick, RenkoDirection
from swinglevels.services.indicators.candle import Candle


def price_level(price: float, size: float) -> int:
    level = price / size
    if not math.isfinite(level):
        raise ValueError(f"Price {price} has no finite Renko level at brick size {size}")
    return math.floor(level)


def renko(prices: Iterable[float], size: float) -> Iterator[RenkoBrick]:
    """
    Lazily build Renko bricks of `size` from `prices`.

    Raises:
        ValueError: If size is not positive (raised immediately, not on first pull)
    """
    if not size > 0:
        raise ValueError(f"Renko brick size must be positive, got {size}")
    return _bricks(iter(prices), size)


def _bricks(prices: Iterator[float], size: float) -> Iterator[RenkoBrick]:
    # Level the next brick opens at: the first price, then the close of each brick
    next_open: Optional[int] = None
    # Direction of the last brick produced, emitted or not
    last_direction: Optional[RenkoDirection] = None

    for price in prices:
        level = price_level(price, size)
        if next_open is None:
            next_open = level
            continue

        # Walk one level at a time toward the level of the latest price
        target = level
        while next_open != target:
            step = 1 if target > next_open else -1
            direction = RenkoDirection.UP if step > 0 else RenkoDirection.DOWN
            brick = RenkoBrick(level=next_open, size=size, direction=direction)
            next_open += step

            previous_direction, last_direction = last_direction, direction
            if previous_direction is None or previous_direction == direction:
                yield brick


def closes(candles: Iterable[Candle]) -> Iterator[float]:
    """Close prices of candles, the usual Renko input."""
    for candle in candles:
        yield candle.close
