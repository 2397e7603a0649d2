import asyncio

import pytest

from swinglevels.core.config import Settings
from swinglevels.schemas.levels import AnalyzeRequest, LevelsRequest, SignalType, SwingType
from swinglevels.schemas.market import Timeframe
from swinglevels.services.base import ExternalAPIError, InsufficientDataError
from swinglevels.services.data_ingestion.interface import BadStatusError
from swinglevels.services.indicators.service import LevelsService
from conftest import StubCandleSource, make_candles, make_quote


def run(coro):
    return asyncio.run(coro)


def levels_request(**overrides):
    fields = {"instrument": "EUR_USD", "atr_period": 2, "window_size": 5}
    fields.update(overrides)
    return LevelsRequest(**fields)


def test_levels_without_backfill(zigzag_candles):
    source = StubCandleSource(zigzag_candles, quote=make_quote(16.5, 16.6))
    service = LevelsService(source, Settings())

    output = run(service.execute(levels_request()))

    assert output.atr == 1.0
    assert output.support == 10.0
    assert output.resistance == 16.0
    assert output.swing_type == SwingType.LOWER_LOW
    assert output.backfill_rounds == 0
    assert output.candles_used == len(zigzag_candles)
    assert output.last_price == 16.5
    assert output.spread_atr_percent == pytest.approx(10.0)
    assert output.signal == SignalType.BUY
    assert output.timeframe == Timeframe.M15


def test_backfills_until_both_levels_exist(zigzag_candles):
    source = StubCandleSource(zigzag_candles, quote=make_quote(12.0, 12.1))
    service = LevelsService(source, Settings())

    output = run(service.execute(levels_request(candle_count=4)))

    assert output.backfill_rounds == 1
    assert output.candles_used == 7
    assert (output.support, output.resistance) == (10.0, 16.0)
    assert output.signal == SignalType.NEUTRAL
    # history, then one batch before the first candle we had
    history_requests = [r for r in source.requests if r.before is not None]
    assert len(history_requests) == 1
    assert history_requests[0].before == zigzag_candles[3].timestamp


def test_backfill_stops_when_source_runs_dry(zigzag_candles):
    source = StubCandleSource(zigzag_candles[3:])
    service = LevelsService(source, Settings())

    output = run(service.execute(levels_request(candle_count=4)))

    assert output.backfill_rounds == 0
    assert output.support is None
    assert output.resistance is None
    assert output.signal == SignalType.NEUTRAL
    # No quote: last close stands in for the price
    assert output.last_price == 17.5


def test_backfill_budget(zigzag_candles):
    source = StubCandleSource(zigzag_candles)
    service = LevelsService(source, Settings(max_backfill_rounds=0))

    output = run(service.execute(levels_request(candle_count=4)))

    assert output.backfill_rounds == 0
    assert output.candles_used == 4
    assert output.support is None


def test_wide_spread_suppresses_signal(zigzag_candles):
    source = StubCandleSource(zigzag_candles, quote=make_quote(16.5, 16.9))
    service = LevelsService(source, Settings(max_spread_atr_percent=25.0))

    output = run(service.execute(levels_request()))

    assert output.spread_atr_percent == pytest.approx(40.0)
    assert output.signal == SignalType.NEUTRAL


def test_sell_below_support(zigzag_candles):
    source = StubCandleSource(zigzag_candles, quote=make_quote(9.5, 9.6))
    service = LevelsService(source, Settings())

    assert run(service.execute(levels_request())).signal == SignalType.SELL


def test_fetch_errors_propagate(zigzag_candles):
    error = BadStatusError("StubCandleSource", 503, "maintenance")
    service = LevelsService(StubCandleSource(zigzag_candles, error=error), Settings())

    with pytest.raises(ExternalAPIError) as info:
        run(service.execute(levels_request()))
    assert info.value.details["status_code"] == 503


def test_no_atr_is_insufficient_data():
    service = LevelsService(StubCandleSource(make_candles([10.5])), Settings())
    with pytest.raises(InsufficientDataError):
        run(service.execute(levels_request()))


def test_analyze_posted_candles(zigzag_candles):
    service = LevelsService(StubCandleSource([]), Settings())
    analysis = service.analyze(AnalyzeRequest(candles=zigzag_candles, brick_size=1.0))
    assert (analysis.support, analysis.resistance) == (10.0, 16.0)


def test_health_check_follows_source():
    service = LevelsService(StubCandleSource([]), Settings())
    assert run(service.health_check()) is True
