"""
Breakout decision from support/resistance.

Buy when price has just cleared resistance by less than one ATR, sell when it
has just broken support by less than one ATR. No orders are placed here.
"""

from typing import Optional

from swinglevels.schemas.levels import SignalType


def breakout_signal(
    atr: float,
    support: Optional[float],
    resistance: Optional[float],
    last_price: Optional[float],
) -> SignalType:
    if last_price is None:
        return SignalType.NEUTRAL
    if resistance is not None and resistance < last_price < resistance + atr:
        return SignalType.BUY
    if support is not None and support - atr < last_price < support:
        return SignalType.SELL
    return SignalType.NEUTRAL


def spread_atr_percent(spread: Optional[float], atr: float) -> Optional[float]:
    """Bid/ask spread as a percentage of ATR."""
    if spread is None or atr <= 0:
        return None
    return spread / atr * 100


def spread_too_wide(
    spread_percent: Optional[float], max_spread_atr_percent: Optional[float]
) -> bool:
    if spread_percent is None or max_spread_atr_percent is None:
        return False
    return spread_percent > max_spread_atr_percent
