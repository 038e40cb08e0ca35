"""
pagegrade/services/fetcher.py
Page retrieval with sequential fallback across retrieval sources.

A source is a URL template: "{url}" is the target as-is, "{quoted}" is the
target percent-encoded for relay services. Sources are tried in order and
the first usable body wins. No state survives between calls.
"""
import logging
from typing import Optional, Sequence
from urllib.parse import quote

import httpx

from ..config import Settings, get_settings
from ..utils.exceptions import RetrievalError
from .validation import _ssrf_safe

logger = logging.getLogger(__name__)

RETRIEVAL_FAILED = "Could not access the website. The site may be blocking requests or unavailable."


def normalize_target(url: str) -> str:
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def expand_source(template: str, target: str) -> str:
    return template.format(url=target, quoted=quote(target, safe="!*'()"))


async def _guard_hop(request: httpx.Request) -> None:
    # Runs for every request the client sends, redirect hops included.
    if not _ssrf_safe(request.url.host):
        logger.warning("Blocked request to %s", request.url)
        raise httpx.RequestError(f"Blocked host {request.url.host}", request=request)


def build_client(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Client used when the caller supplies none. Redirects are followed, private hosts refused."""
    return httpx.AsyncClient(
        timeout=settings.request_timeout_seconds,
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
        event_hooks={"request": [_guard_hop]},
        transport=transport,
    )


async def _try_source(client: httpx.AsyncClient, source_url: str, min_length: int) -> Optional[str]:
    response = await client.get(
        source_url,
        headers={"Accept": "text/html,application/xhtml+xml"},
    )
    if not response.is_success:
        logger.warning("Source %s answered HTTP %d", source_url, response.status_code)
        return None
    body = response.text
    if len(body) <= min_length:
        logger.warning("Source %s returned only %d characters", source_url, len(body))
        return None
    return body


async def fetch_page(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    sources: Optional[Sequence[str]] = None,
    settings: Optional[Settings] = None,
) -> str:
    """
    Return the raw HTML for `url` from the first source that yields a 2xx
    body longer than `min_content_bytes` characters.

    Raises RetrievalError once every source has failed. A caller-supplied
    client is left open.
    """
    settings = settings or get_settings()
    sources = list(sources if sources is not None else settings.retrieval_sources)
    target = normalize_target(url)

    owns_client = client is None
    if owns_client:
        client = build_client(settings)
    try:
        for attempt, template in enumerate(sources, start=1):
            source_url = expand_source(template, target)
            try:
                body = await _try_source(client, source_url, settings.min_content_bytes)
            except httpx.HTTPError as e:
                logger.warning("Source %d/%d failed for %s: %s", attempt, len(sources), target, e)
                continue
            if body is not None:
                logger.info("Fetched %s via source %d/%d (%d chars)", target, attempt, len(sources), len(body))
                return body
    finally:
        if owns_client:
            await client.aclose()

    logger.error("All %d retrieval sources failed for %s", len(sources), target)
    raise RetrievalError(RETRIEVAL_FAILED, url=target, attempts=len(sources))
