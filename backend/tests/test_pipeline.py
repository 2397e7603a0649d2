import pytest

from swinglevels.schemas.levels import Pivot, SwingType
from swinglevels.services.base import InsufficientDataError
from swinglevels.services.indicators.pipeline import analyze_candles, latest_swing_type, recent_atr
from swinglevels.services.indicators.swing import swing_statuses
from conftest import Bar, ZIGZAG_CLOSES, make_candles


def test_zigzag_levels(zigzag_candles):
    analysis = analyze_candles(zigzag_candles, window_size=5, brick_size=1.0)

    assert len(analysis.bricks) == 23
    assert len(analysis.pivots) == len(analysis.bricks)
    assert [p for p in analysis.pivots if p != Pivot.no_change()] == [
        Pivot.pivot_high(15.0),
        Pivot.pivot_low(11.0),
        Pivot.pivot_high(16.0),
        Pivot.pivot_low(10.0),
    ]
    assert analysis.support == 10.0
    assert analysis.resistance == 16.0
    assert analysis.swing_type == SwingType.LOWER_LOW


def test_atr_sized_bricks():
    # Last two candles: close 17.5 then high 17.5 / low 16.5 -> TR 1.0
    analysis = analyze_candles(make_candles(ZIGZAG_CLOSES), atr_period=2)
    assert analysis.atr == 1.0
    assert analysis.brick_size == 1.0
    assert (analysis.support, analysis.resistance) == (10.0, 16.0)


def test_too_few_bricks_is_no_levels_not_an_error():
    analysis = analyze_candles(make_candles([10.5, 11.5]), brick_size=1.0)
    assert len(analysis.bricks) == 1
    assert analysis.pivots == []
    assert analysis.support is None
    assert analysis.resistance is None
    assert analysis.swing_type == SwingType.HOLD


def test_no_atr_without_two_candles():
    with pytest.raises(InsufficientDataError):
        analyze_candles(make_candles([10.5]))


def test_flat_market_cannot_size_bricks():
    flat = [Bar(10.0, 10.0, 10.0, 10.0)] * 20
    with pytest.raises(InsufficientDataError):
        analyze_candles(flat)


def test_recent_atr_uses_last_period_candles():
    candles = [Bar(100.0, 0.0, close=50.0)] + [Bar(11.0, 10.0, close=10.5)] * 3
    assert recent_atr(candles, 3) == 1.0
    assert recent_atr(candles, 4) > 1.0


def test_latest_swing_type_skips_holds():
    statuses = list(swing_statuses([
        Pivot.pivot_high(1.0),
        Pivot.pivot_high(2.0),
        Pivot.no_change(),
    ]))
    assert latest_swing_type(statuses) == SwingType.HIGHER_HIGH
    assert latest_swing_type([]) == SwingType.HOLD


def test_brick_budget(zigzag_candles):
    analysis = analyze_candles(zigzag_candles, brick_size=1.0, max_bricks=23)
    assert len(analysis.bricks) == 23

    with pytest.raises(ValueError):
        analyze_candles(zigzag_candles, brick_size=1.0, max_bricks=22)
