"""
Candle Source Service

CONTRACT:
    Input:  CandleRequest
    Output: list[OHLCV]

RESPONSIBILITIES:
    - Fetch candles for an instrument, optionally before/after a time
    - Fetch the latest bid/ask quote
    - Raise typed CandleFetchError subclasses on failure

Broker REST clients implement CandleSourceInterface; the mock source ships
for development and tests.
"""

from swinglevels.services.data_ingestion.interface import (
    CandleSourceInterface,
    CandleFetchError,
    RequestFailedError,
    BadStatusError,
    MalformedResponseError,
)
from swinglevels.services.data_ingestion.mock_data import MockCandleSource

__all__ = [
    "CandleSourceInterface",
    "CandleFetchError",
    "RequestFailedError",
    "BadStatusError",
    "MalformedResponseError",
    "MockCandleSource",
]
