"""
Swing Classification

Walks a pivot sequence, keeping the running support and resistance lines and
labelling each structural change (higher high, lower low, ...).

The first pivot high only seeds the previous high; resistance is defined
from the second pivot high on, and then always follows the newest high,
whether it is higher or lower. Support works the same way with lows.
"""

from typing import Iterable, Iterator, Optional

from swinglevels.schemas.levels import (
    Pivot,
    SupportAndResistance,
    SwingStatus,
    SwingType,
)


class SwingClassifier:
    """
    Stateful higher-high / lower-low classifier.

    One instance per sequence; build a new one to start over.
    """

    def __init__(self):
        self.prev_high: Optional[float] = None
        self.prev_low: Optional[float] = None
        self.support: Optional[float] = None
        self.resistance: Optional[float] = None

    def update(self, pivot: Pivot) -> SwingStatus:
        """Consume one pivot and return the state after it."""
        high, low = pivot.high, pivot.low
        prev_high, prev_low = self.prev_high, self.prev_low

        if high is not None:
            if prev_high is not None:
                self.resistance = high
            self.prev_high = high

        if low is not None:
            if prev_low is not None:
                self.support = low
            self.prev_low = low

        higher_high = None
        if high is not None and prev_high is not None:
            higher_high = high >= prev_high

        lower_low = None
        if low is not None and prev_low is not None:
            lower_low = low <= prev_low

        return SwingStatus(
            swing_type=_swing_type(higher_high, lower_low),
            support=self.support,
            resistance=self.resistance,
        )

    def classify(self, pivots: Iterable[Pivot]) -> Iterator[SwingStatus]:
        for pivot in pivots:
            yield self.update(pivot)


def _swing_type(higher_high: Optional[bool], lower_low: Optional[bool]) -> SwingType:
    if higher_high is not None and lower_low is not None:
        if higher_high:
            return (
                SwingType.HIGHER_HIGH_AND_LOWER_LOW
                if lower_low
                else SwingType.HIGHER_HIGH_AND_HIGHER_LOW
            )
        return (
            SwingType.LOWER_HIGH_AND_LOWER_LOW
            if lower_low
            else SwingType.LOWER_HIGH_AND_HIGHER_LOW
        )
    if higher_high is not None:
        return SwingType.HIGHER_HIGH if higher_high else SwingType.LOWER_HIGH
    if lower_low is not None:
        return SwingType.LOWER_LOW if lower_low else SwingType.HIGHER_LOW
    return SwingType.HOLD


def swing_statuses(pivots: Iterable[Pivot]) -> Iterator[SwingStatus]:
    """Classify a pivot sequence with a fresh classifier."""
    return SwingClassifier().classify(pivots)


def support_and_resistance(statuses: Iterable[SwingStatus]) -> SupportAndResistance:
    """Support and resistance of the last status, both None when there is none."""
    last: Optional[SwingStatus] = None
    for last in statuses:
        pass
    if last is None:
        return SupportAndResistance()
    return SupportAndResistance(support=last.support, resistance=last.resistance)
