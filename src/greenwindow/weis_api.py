from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import GreenWindowConfig
from .intervals import RawRow

logger = logging.getLogger(__name__)


class WeisFetchError(RuntimeError):
    """The upstream WEIS feed could not be fetched or decoded."""


@dataclass(frozen=True)
class WeisFeed:
    updated: str
    rows: list[RawRow] = field(default_factory=list)


def _create_session(config: GreenWindowConfig) -> requests.Session:
    session = requests.Session()
    retries = Retry(
        total=config.max_retries,
        backoff_factor=config.backoff_factor,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=frozenset(["GET"]),
    )
    session.mount("https://", HTTPAdapter(max_retries=retries))
    session.mount("http://", HTTPAdapter(max_retries=retries))
    return session


def parse_feed_payload(payload: object, *, source: str = "") -> WeisFeed:
    """Validate the ``{"updated": ..., "rows": [...]}`` envelope."""
    if not isinstance(payload, dict):
        raise WeisFetchError(f"WEIS payload is not an object. type={type(payload).__name__} source={source}")

    rows = payload.get("rows")
    if not isinstance(rows, list):
        raise WeisFetchError(
            f"WEIS payload missing 'rows' list. source={source} keys={list(payload.keys())[:25]}"
        )

    rows = [r for r in rows if isinstance(r, dict)]
    updated = payload.get("updated")
    return WeisFeed(updated="" if updated is None else str(updated), rows=rows)


def fetch_weis_feed(
    config: Optional[GreenWindowConfig] = None,
    session: Optional[requests.Session] = None,
) -> WeisFeed:
    """
    Fetch the raw WEIS forecast feed.

    Retries transient failures through the session; anything left over is
    raised as WeisFetchError with the cause embedded.
    """
    config = config or GreenWindowConfig()
    session = session or _create_session(config)

    try:
        resp = session.get(config.source_url, timeout=config.request_timeout)
    except requests.RequestException as exc:
        raise WeisFetchError(f"Request failed: {exc}") from exc

    if not resp.ok:
        raise WeisFetchError(f"Status: {resp.status_code}")

    try:
        payload = resp.json()
    except ValueError as exc:
        raise WeisFetchError(f"Invalid JSON from {config.source_url}: {exc}") from exc

    feed = parse_feed_payload(payload, source=config.source_url)
    logger.info("[weis-fetch] rows=%d updated=%s", len(feed.rows), feed.updated)
    return feed


def load_feed_file(path: str | Path) -> WeisFeed:
    """Read a feed saved as JSON (same envelope as the live endpoint)."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise WeisFetchError(f"Could not read feed file {path}: {exc}") from exc

    feed = parse_feed_payload(payload, source=str(path))
    logger.info("[weis-file] rows=%d updated=%s path=%s", len(feed.rows), feed.updated, path)
    return feed
