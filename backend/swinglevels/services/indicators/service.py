"""
Levels Service Implementation

Fetches candles, sizes Renko bricks by ATR and keeps pulling older history
until the swing classifier has produced both a support and a resistance
line (or the backfill budget runs out).
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from swinglevels.core.config import Settings, get_settings
from swinglevels.schemas.levels import (
    AnalyzeRequest,
    LevelsAnalysis,
    LevelsOutput,
    LevelsRequest,
    SignalType,
)
from swinglevels.schemas.market import CandleRequest, OHLCV, PriceQuote, Timeframe
from swinglevels.services.base import InsufficientDataError
from swinglevels.services.data_ingestion.interface import CandleSourceInterface
from swinglevels.services.data_ingestion.mock_data import MockCandleSource
from swinglevels.services.indicators.interface import LevelsServiceInterface
from swinglevels.services.indicators.pipeline import analyze_candles, recent_atr
from swinglevels.services.indicators.signals import (
    breakout_signal,
    spread_atr_percent,
    spread_too_wide,
)

logger = logging.getLogger(__name__)


class LevelsService(LevelsServiceInterface):
    """
    Levels Service.

    Stateless between calls: every execute() builds fresh pipeline stages,
    so one instance can serve concurrent requests.
    """

    def __init__(self, source: CandleSourceInterface, settings: Optional[Settings] = None):
        self.source = source
        self.settings = settings or get_settings()

    @property
    def name(self) -> str:
        return "LevelsService"

    async def execute(self, input_data: LevelsRequest) -> LevelsOutput:
        """Derive support/resistance and the breakout signal for one instrument."""
        timeframe = input_data.timeframe or Timeframe(self.settings.default_timeframe)
        count = input_data.candle_count or self.settings.candle_count
        window_size = input_data.window_size or self.settings.pivot_window_size
        atr_period = input_data.atr_period or self.settings.atr_period

        # The quote is only needed at the end; fetch it alongside the history
        candles, quote = await asyncio.gather(
            self.source.execute(
                CandleRequest(
                    instrument=input_data.instrument,
                    timeframe=timeframe,
                    count=count,
                )
            ),
            self.source.get_quote(input_data.instrument),
        )

        atr = recent_atr(candles, atr_period)
        if atr is None or atr <= 0:
            raise InsufficientDataError(
                self.name,
                f"Unable to calculate ATR for {input_data.instrument}",
                {"candles": len(candles), "atr_period": atr_period},
            )
        logger.debug(f"{input_data.instrument} atr: {atr}")

        rounds = 0
        while True:
            analysis = analyze_candles(
                candles,
                window_size=window_size,
                atr_period=atr_period,
                brick_size=atr,
                strict=self.settings.pivot_strict,
                max_bricks=self.settings.max_bricks,
            )
            if analysis.support is not None and analysis.resistance is not None:
                break
            if rounds >= self.settings.max_backfill_rounds:
                logger.warning(
                    f"No support/resistance for {input_data.instrument} after "
                    f"{rounds} backfill rounds ({len(candles)} candles)"
                )
                break

            logger.debug(
                f"Getting more candles. Currently have {len(candles)}"
            )
            extended = await self.backfill(
                input_data.model_copy(update={"timeframe": timeframe, "candle_count": count}),
                candles,
            )
            if len(extended) == len(candles):
                logger.warning(f"No older candles available for {input_data.instrument}")
                break
            candles = extended
            rounds += 1

        last_price = _last_price(quote, candles)
        spread = quote.spread if quote else None
        spread_percent = spread_atr_percent(spread, atr)
        if spread_percent is not None:
            logger.debug(f"Spread is {spread}. ATR is {atr}. Spread is {spread_percent:.1f}% of ATR")

        if spread_too_wide(spread_percent, self.settings.max_spread_atr_percent):
            logger.info(
                f"Spread for {input_data.instrument} is {spread_percent:.1f}% of ATR, "
                f"above {self.settings.max_spread_atr_percent}%"
            )
            signal = SignalType.NEUTRAL
        else:
            signal = breakout_signal(
                atr, analysis.support, analysis.resistance, last_price
            )

        return LevelsOutput(
            instrument=input_data.instrument,
            timeframe=timeframe,
            timestamp=datetime.now(timezone.utc),
            atr=atr,
            support=analysis.support,
            resistance=analysis.resistance,
            swing_type=analysis.swing_type,
            last_price=last_price,
            spread=spread,
            spread_atr_percent=spread_percent,
            signal=signal,
            candles_used=len(candles),
            backfill_rounds=rounds,
            analysis=analysis,
        )

    def analyze(self, request: AnalyzeRequest) -> LevelsAnalysis:
        """Run the pipeline over caller-supplied candles."""
        return analyze_candles(
            request.candles,
            window_size=request.window_size,
            atr_period=request.atr_period,
            brick_size=request.brick_size,
            strict=request.strict,
            max_bricks=self.settings.max_bricks,
        )

    async def backfill(
        self, request: LevelsRequest, candles: Sequence[OHLCV]
    ) -> list[OHLCV]:
        """Prepend one batch of candles older than the first one we have."""
        if not candles:
            raise InsufficientDataError(self.name, "Couldn't even get the first candle")

        first = candles[0]
        older = await self.source.execute(
            CandleRequest(
                instrument=request.instrument,
                timeframe=request.timeframe,
                count=request.candle_count,
                before=first.timestamp,
            )
        )
        # Some APIs include the boundary candle
        if older and older[-1].timestamp >= first.timestamp:
            older = [c for c in older if c.timestamp < first.timestamp]
        return [*older, *candles]

    async def health_check(self) -> bool:
        """Healthy when the candle source is."""
        return await self.source.health_check()


def _last_price(quote: Optional[PriceQuote], candles: Sequence[OHLCV]) -> Optional[float]:
    """Quote bid, else the last trade, else the last candle close."""
    if quote is not None:
        if quote.bid is not None:
            return quote.bid
        if quote.last is not None:
            return quote.last
    return candles[-1].close if candles else None


# Singleton instance
_service_instance: Optional[LevelsService] = None


def get_levels_service() -> LevelsService:
    """Get or create levels service instance."""
    global _service_instance
    if _service_instance is None:
        settings = get_settings()
        if settings.data_source != "mock":
            logger.warning(
                f"Unknown data source '{settings.data_source}', using mock candles"
            )
        source = MockCandleSource(
            seed=settings.mock_seed,
            quote_timeframe=Timeframe(settings.quote_timeframe),
        )
        _service_instance = LevelsService(source, settings)
    return _service_instance
