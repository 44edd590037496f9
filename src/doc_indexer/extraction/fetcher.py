"""Page download."""

from __future__ import annotations

import logging

import requests

from doc_indexer.config import settings
from doc_indexer.exceptions import FetchError

logger = logging.getLogger(__name__)


def fetch_page(
    url: str,
    *,
    timeout: int | None = None,
    session: requests.Session | None = None,
) -> str:
    """Download *url* and return the response body as text.

    Transport errors and non-2xx responses raise :class:`FetchError`.
    No retries are attempted.
    """
    http = session or requests
    try:
        resp = http.get(
            url,
            headers={"User-Agent": settings.user_agent},
            timeout=timeout or settings.request_timeout,
        )
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"failed to fetch page {url}: {exc}") from exc

    logger.debug("Fetched %s (%d chars)", url, len(resp.text))
    return resp.text
