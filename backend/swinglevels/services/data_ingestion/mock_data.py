"""
Mock Candle Source

Generates realistic mock candles for development and testing.
Output is reproducible: the same seed, instrument and time range always
give the same candles.
"""

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from swinglevels.schemas.market import CandleRequest, OHLCV, PriceQuote, Timeframe
from swinglevels.services.base import ValidationError
from swinglevels.services.data_ingestion.interface import CandleSourceInterface

logger = logging.getLogger(__name__)


# Base prices for common instruments
INSTRUMENT_BASE_PRICES = {
    "EUR_USD": 1.0850,
    "GBP_USD": 1.2650,
    "USD_JPY": 149.50,
    "AUD_USD": 0.6550,
    "USD_CHF": 0.8800,
    "XAU_USD": 2030.0,
}

# Timeframe to milliseconds
TIMEFRAME_MS = {
    Timeframe.S5: 5_000,
    Timeframe.M1: 60_000,
    Timeframe.M5: 300_000,
    Timeframe.M15: 900_000,
    Timeframe.M30: 1_800_000,
    Timeframe.H1: 3_600_000,
    Timeframe.H4: 14_400_000,
    Timeframe.D1: 86_400_000,
    Timeframe.W1: 604_800_000,
}

# Half the quoted spread, as a fraction of price
HALF_SPREAD = 0.00005


def get_base_price(instrument: str) -> float:
    """Get base price for an instrument."""
    return INSTRUMENT_BASE_PRICES.get(instrument, 100.0)


def align_time(moment: datetime, timeframe: Timeframe) -> datetime:
    """Floor a time to the start of its candle."""
    interval_ms = TIMEFRAME_MS[timeframe]
    epoch_ms = int(moment.timestamp() * 1000)
    return datetime.fromtimestamp(
        (epoch_ms - epoch_ms % interval_ms) / 1000, tz=timezone.utc
    )


def last_open_before(moment: datetime, timeframe: Timeframe) -> datetime:
    """Open time of the last candle starting strictly before `moment`."""
    return align_time(moment - timedelta(milliseconds=1), timeframe)


def generate_mock_ohlcv(
    instrument: str,
    timeframe: Timeframe,
    start_time: datetime,
    count: int,
    seed: int = 42,
) -> list[OHLCV]:
    """Generate `count` mock candles opening at start_time, one interval apart."""
    rng = random.Random(f"{seed}:{instrument}:{timeframe.value}:{start_time.isoformat()}")
    interval = timedelta(milliseconds=TIMEFRAME_MS[timeframe])
    price = get_base_price(instrument)
    volatility = price * 0.002

    candles = []
    timestamp = start_time
    for _ in range(count):
        # Random walk
        change = (rng.random() - 0.5) * volatility

        open_price = price
        close_price = max(open_price + change, volatility)
        high_price = max(open_price, close_price) + rng.random() * volatility * 0.5
        low_price = min(open_price, close_price) - rng.random() * volatility * 0.5
        low_price = max(low_price, volatility * 0.1)

        candles.append(
            OHLCV(
                timestamp=timestamp,
                open=round(open_price, 5),
                high=round(high_price, 5),
                low=round(low_price, 5),
                close=round(close_price, 5),
                volume=rng.randint(100, 5_000),
            )
        )

        price = close_price
        timestamp += interval

    return candles


class MockCandleSource(CandleSourceInterface):
    """
    Candle source backed by the mock generator.

    `now` pins the current time, which keeps results stable in tests.
    Quotes come from the latest candle of `quote_timeframe`.
    """

    def __init__(
        self,
        seed: int = 42,
        now: Optional[datetime] = None,
        quote_timeframe: Timeframe = Timeframe.S5,
    ):
        self.seed = seed
        self._now = now
        self.quote_timeframe = quote_timeframe

    @property
    def name(self) -> str:
        return "MockCandleSource"

    def now(self) -> datetime:
        return self._now or datetime.now(timezone.utc)

    async def execute(self, input_data: CandleRequest) -> list[OHLCV]:
        """Generate the requested candles, oldest first."""
        timeframe = input_data.timeframe
        interval = timedelta(milliseconds=TIMEFRAME_MS[timeframe])
        latest_open = align_time(self.now(), timeframe)

        if input_data.before is not None and input_data.after is not None:
            if input_data.after >= input_data.before:
                raise ValidationError(self.name, "'after' must be earlier than 'before'")

        if input_data.after is not None:
            start = align_time(input_data.after, timeframe) + interval
            end = latest_open
            if input_data.before is not None:
                end = min(end, last_open_before(input_data.before, timeframe))
            available = int((end - start) / interval) + 1
            count = max(0, min(input_data.count, available))
        else:
            end = latest_open
            if input_data.before is not None:
                end = min(end, last_open_before(input_data.before, timeframe))
            count = input_data.count
            start = end - interval * (count - 1)

        logger.debug(
            f"Mock candles for {input_data.instrument} {timeframe.value}: "
            f"{count} from {start.isoformat()}"
        )
        if count == 0:
            return []
        return generate_mock_ohlcv(
            input_data.instrument, timeframe, start, count, seed=self.seed
        )

    async def get_quote(self, instrument: str) -> Optional[PriceQuote]:
        """Quote around the close of the latest quote_timeframe candle."""
        candles = await self.execute(
            CandleRequest(instrument=instrument, timeframe=self.quote_timeframe, count=1)
        )
        if not candles:
            return None
        last = candles[-1]
        half_spread = last.close * HALF_SPREAD
        return PriceQuote(
            instrument=instrument,
            timestamp=last.timestamp,
            bid=round(last.close - half_spread, 5),
            ask=round(last.close + half_spread, 5),
            last=last.close,
        )

    async def health_check(self) -> bool:
        """Mock source is always available."""
        return True
