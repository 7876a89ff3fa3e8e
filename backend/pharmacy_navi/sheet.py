from __future__ import annotations

import logging
import time

import httpx

from pharmacy_navi.config.settings import get_settings


_logger = logging.getLogger(__name__)


class SheetFetchError(RuntimeError):
    pass


async def fetch_sheet_csv(
    url: str | None = None,
    *,
    timeout_s: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Download the published CSV export of the pharmacy sheet."""
    settings = get_settings()
    sheet_url = (url if url is not None else settings.sheet_url).strip()
    if not sheet_url:
        raise SheetFetchError("NAVI_SHEET_URL is not set")

    start = time.time()
    try:
        async with httpx.AsyncClient(
            timeout=timeout_s if timeout_s is not None else settings.sheet_timeout_s,
            follow_redirects=True,
            transport=transport,
        ) as client:
            res = await client.get(sheet_url)
    except httpx.HTTPError as exc:
        raise SheetFetchError(f"Failed to fetch sheet: {exc}") from exc

    elapsed_ms = int((time.time() - start) * 1000)
    _logger.info("sheet fetch status=%s bytes=%s ms=%s", res.status_code, len(res.content), elapsed_ms)
    if res.status_code >= 400:
        raise SheetFetchError(f"Failed to fetch sheet: {res.status_code}")
    res.encoding = "utf-8"
    return res.text
