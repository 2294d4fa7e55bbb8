"""
HTTP surface for the clean energy window.

Run: uvicorn greenwindow.api:app --port 8000
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

from .config import GreenWindowConfig
from .tasks import process_weis_data
from .weis_api import WeisFeed, WeisFetchError, fetch_weis_feed

logger = logging.getLogger(__name__)

FeedFetcher = Callable[[GreenWindowConfig], WeisFeed]

app = FastAPI(
    title="Clean Energy Window API",
    description="Green/carbon-heavy grid windows derived from the SPP WEIS forecast feed",
    version="1.0.0",
)


@lru_cache(maxsize=1)
def get_config() -> GreenWindowConfig:
    return GreenWindowConfig.from_env()


def get_feed_fetcher() -> FeedFetcher:
    return fetch_weis_feed


def get_reference_instant() -> Optional[datetime]:
    return None


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "ts": datetime.now(timezone.utc).isoformat()}


@app.get("/api/weis")
def get_weis(
    config: GreenWindowConfig = Depends(get_config),
    fetch: FeedFetcher = Depends(get_feed_fetcher),
    reference_instant: Optional[datetime] = Depends(get_reference_instant),
):
    """Fetch the WEIS feed and return the processed clean-window payload."""
    try:
        feed = fetch(config)
    except WeisFetchError as exc:
        logger.error("[api] WEIS fetch failed: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch WEIS data", "details": str(exc)},
        )

    result = process_weis_data(feed, config, reference_instant)
    return result.to_payload()
