from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from swinglevels.schemas.market import CandleRequest, OHLCV, PriceQuote
from swinglevels.services.data_ingestion.interface import CandleSourceInterface


@dataclass(frozen=True)
class Bar:
    high: float
    low: float
    open: float = 0.0
    close: float = 0.0


def bars_1() -> list[Bar]:
    # tr is the greatest of high-low, |high-prev close|, |low-prev close|
    return [
        Bar(10.0, 5.0, 8.0, 7.0),  # tr=None
        Bar(12.0, 6.0, 9.0, 8.0),  # tr=6
        Bar(8.0, 4.0, 7.0, 6.0),  # tr=4
        Bar(9.0, 5.0, 8.0, 7.0),  # tr=4
        Bar(11.0, 6.0, 9.0, 8.0),  # tr=5
        Bar(7.0, 3.0, 6.0, 5.0),  # tr=5
        Bar(8.0, 4.0, 7.0, 6.0),  # tr=4
        Bar(10.0, 5.0, 8.0, 7.0),  # tr=5
        Bar(12.0, 6.0, 9.0, 8.0),  # tr=6
    ]


def bars_2() -> list[Bar]:
    return [
        Bar(20.0, 10.0, 15.0, 12.0),
        Bar(15.0, 8.0, 12.0, 10.0),
        Bar(12.0, 6.0, 9.0, 8.0),
        Bar(18.0, 11.0, 14.0, 13.0),
        Bar(10.0, 5.0, 8.0, 7.0),
        Bar(14.0, 7.0, 11.0, 9.0),
        Bar(16.0, 9.0, 13.0, 11.0),
        Bar(13.0, 6.0, 10.0, 8.0),
        Bar(11.0, 4.0, 8.0, 7.0),
        Bar(19.0, 12.0, 16.0, 14.0),
    ]


# With 1.0 bricks these closes swing 10 -> 15 -> 11 -> 16 -> 10 -> 17,
# which gives pivots High(15), Low(11), High(16), Low(10).
ZIGZAG_CLOSES = [10.5, 15.5, 11.5, 16.5, 10.5, 17.5, 17.5]

START = datetime(2024, 2, 14, tzinfo=timezone.utc)
INTERVAL = timedelta(minutes=15)


def make_candles(closes, start: datetime = START) -> list[OHLCV]:
    """Candles closing at their high, one unit tall."""
    return [
        OHLCV(
            timestamp=start + INTERVAL * i,
            open=close,
            high=close,
            low=close - 1.0,
            close=close,
            volume=100,
        )
        for i, close in enumerate(closes)
    ]


class StubCandleSource(CandleSourceInterface):
    """Serves a fixed candle list, honouring count and `before`."""

    def __init__(
        self,
        candles: list[OHLCV],
        quote: Optional[PriceQuote] = None,
        error: Optional[Exception] = None,
    ):
        self.candles = candles
        self.quote = quote
        self.error = error
        self.requests: list[CandleRequest] = []

    async def execute(self, input_data: CandleRequest) -> list[OHLCV]:
        self.requests.append(input_data)
        if self.error is not None:
            raise self.error
        candles = [
            c
            for c in self.candles
            if input_data.before is None or c.timestamp < input_data.before
        ]
        return candles[-input_data.count:]

    async def get_quote(self, instrument: str) -> Optional[PriceQuote]:
        return self.quote

    async def health_check(self) -> bool:
        return True


def make_quote(bid: Optional[float], ask: Optional[float]) -> PriceQuote:
    return PriceQuote(instrument="EUR_USD", timestamp=START, bid=bid, ask=ask)


@pytest.fixture
def zigzag_candles() -> list[OHLCV]:
    return make_candles(ZIGZAG_CLOSES)
