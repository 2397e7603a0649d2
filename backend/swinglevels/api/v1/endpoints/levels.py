"""
Levels API Endpoints

Endpoints for support/resistance and swing analysis.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from swinglevels.schemas.levels import (
    AnalyzeRequest,
    LevelsAnalysis,
    LevelsOutput,
    LevelsRequest,
)
from swinglevels.schemas.market import Timeframe
from swinglevels.services.base import ExternalAPIError, InsufficientDataError
from swinglevels.services.indicators import get_levels_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=LevelsAnalysis)
async def analyze_levels(request: AnalyzeRequest):
    """
    Run the levels pipeline over candles posted by the caller.

    Returns the Renko bricks, pivots, swing statuses and the final
    support/resistance. Nothing is fetched.
    """
    service = get_levels_service()
    try:
        return service.analyze(request)
    except InsufficientDataError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/{instrument}", response_model=LevelsOutput)
async def get_levels(
    instrument: str,
    timeframe: Optional[Timeframe] = None,
    candle_count: Optional[int] = Query(default=None, ge=2, le=5000),
    window_size: Optional[int] = Query(default=None, ge=1),
):
    """
    Get support/resistance for an instrument.

    Returns:
        - ATR used as the Renko brick size
        - Support and resistance (null until established)
        - Latest swing classification
        - Breakout signal against the latest quote
    """
    instrument = instrument.upper().strip()
    request = LevelsRequest(
        instrument=instrument,
        timeframe=timeframe,
        candle_count=candle_count,
        window_size=window_size,
    )

    service = get_levels_service()
    try:
        return await service.execute(request)
    except InsufficientDataError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except ExternalAPIError as e:
        logger.error(f"Candle fetch failed for {instrument}: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to get candles for {instrument}")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
