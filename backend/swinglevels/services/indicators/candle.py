"""
Candle capability.

Every pipeline stage reads bars only through these four readouts, so broker
candles (OHLCV), Renko bricks and plain test objects all work unchanged.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Candle(Protocol):
    """Anything with high/low/open/close prices."""

    @property
    def high(self) -> float: ...

    @property
    def low(self) -> float: ...

    @property
    def open(self) -> float: ...

    @property
    def close(self) -> float: ...
