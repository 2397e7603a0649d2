"""
Quick levels smoke script.
Run with: python smoke_levels.py [INSTRUMENT]
"""

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

backend_dir = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(backend_dir, ".env"))


async def smoke_levels(instrument: str):
    """Run the levels service against the configured candle source."""
    print("\n" + "=" * 60)
    print("SWINGLEVELS - SMOKE RUN")
    print("=" * 60)

    from swinglevels.core.config import settings
    from swinglevels.schemas.levels import LevelsRequest
    from swinglevels.services.indicators import get_levels_service

    logging.basicConfig(level=settings.log_level.upper())
    service = get_levels_service()

    # Step 1: Health check
    print("\n[1] Health Check...")
    print("-" * 40)
    is_healthy = await service.health_check()
    print(f"Service Healthy: {is_healthy}")

    # Step 2: Levels
    print(f"\n[2] Levels for {instrument}...")
    print("-" * 40)
    output = await service.execute(LevelsRequest(instrument=instrument))

    print(f"ATR: {output.atr:.6f}")
    print(f"Candles used: {output.candles_used} ({output.backfill_rounds} backfill rounds)")
    print(f"Bricks: {len(output.analysis.bricks)}")
    print(f"Support: {output.support}")
    print(f"Resistance: {output.resistance}")
    print(f"Swing: {output.swing_type.value}")
    print(f"Last price: {output.last_price}  Signal: {output.signal.value}")

    print("\n" + "=" * 60)
    print("SMOKE RUN COMPLETE")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(smoke_levels(sys.argv[1] if len(sys.argv) > 1 else "EUR_USD"))
