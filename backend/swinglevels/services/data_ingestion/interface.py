"""
Candle Source Interface

Defines the contract for whatever supplies candles to the levels pipeline
(a broker REST client, a replay file, the mock generator).
"""

from abc import abstractmethod
from typing import Optional

from swinglevels.services.base import BaseService, ExternalAPIError
from swinglevels.schemas.market import CandleRequest, OHLCV, PriceQuote


class CandleFetchError(ExternalAPIError):
    """Candles could not be fetched."""
    pass


class RequestFailedError(CandleFetchError):
    """The request never got a response (network failure, timeout)."""
    pass


class BadStatusError(CandleFetchError):
    """The API answered with a non-success HTTP status."""

    def __init__(self, service_name: str, status_code: int, body: str = ""):
        self.status_code = status_code
        super().__init__(
            service_name,
            f"HTTP status {status_code}",
            {"status_code": status_code, "body": body},
        )


class MalformedResponseError(CandleFetchError):
    """The response body could not be parsed into candles."""
    pass


class CandleSourceInterface(BaseService[CandleRequest, list[OHLCV]]):
    """
    Candle Source Contract.

    INPUT: CandleRequest
        - instrument: e.g. EUR_USD
        - timeframe: Candle timeframe
        - count: Number of candles
        - before / after: Optional time bounds

    OUTPUT: list[OHLCV]
        - Ordered oldest first

    Failures are raised as CandleFetchError subclasses.
    """

    @property
    def name(self) -> str:
        return "CandleSource"

    @abstractmethod
    async def execute(self, input_data: CandleRequest) -> list[OHLCV]:
        """Fetch candles."""
        pass

    @abstractmethod
    async def get_quote(self, instrument: str) -> Optional[PriceQuote]:
        """Get the latest bid/ask for an instrument."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check connectivity to the source."""
        pass
