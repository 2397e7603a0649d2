"""
Levels Service Interface

Defines the contract for the support/resistance layer.
"""

from abc import abstractmethod
from typing import Sequence

from swinglevels.services.base import BaseService
from swinglevels.schemas.levels import AnalyzeRequest, LevelsAnalysis, LevelsOutput, LevelsRequest
from swinglevels.schemas.market import OHLCV


class LevelsServiceInterface(BaseService[LevelsRequest, LevelsOutput]):
    """
    Levels Service Contract.

    INPUT: LevelsRequest
        - instrument: What to analyse
        - timeframe / candle_count / window_size / atr_period: Optional overrides

    OUTPUT: LevelsOutput
        - support / resistance: None until the pivots define them
        - swing_type: Latest structural change
        - signal: Breakout decision against the latest quote
    """

    @property
    def name(self) -> str:
        return "LevelsService"

    @abstractmethod
    async def execute(self, input_data: LevelsRequest) -> LevelsOutput:
        """Fetch candles and derive support/resistance for one instrument."""
        pass

    @abstractmethod
    def analyze(self, request: AnalyzeRequest) -> LevelsAnalysis:
        """Run the pipeline over candles supplied by the caller."""
        pass

    @abstractmethod
    async def backfill(
        self, request: LevelsRequest, candles: Sequence[OHLCV]
    ) -> list[OHLCV]:
        """Return `candles` with one older batch prepended."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Healthy when the candle source is reachable."""
        pass
