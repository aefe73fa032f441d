"""HTTP fetch capability used by the discovery sources.

Every request bypasses caches: the manifest and the directory listing can
change between two runs, and a stale copy would hide new files.
"""

import json
import logging
from typing import Any, NamedTuple, Optional, Protocol, Tuple

import httpx

from vidgal.domain.errors import FetchError

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, max-age=0",
    "Pragma": "no-cache",
}


class FetchResponse(NamedTuple):
    status: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Fetcher(Protocol):
    def fetch_text(self, url: str) -> FetchResponse: ...

    def fetch_json(self, url: str) -> Tuple[int, Any]: ...


class HttpFetcher:
    """Fetcher backed by a single httpx.Client.

    Relative URLs are resolved against base_url. Transport failures
    (connection refused, timeouts, ...) are raised as FetchError with
    status None; HTTP error statuses are returned to the caller.
    """

    def __init__(self, base_url: str, timeout_s: float = 30.0, client: Optional[httpx.Client] = None):
        self.base_url = base_url
        self._client = client or httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(timeout_s),
            follow_redirects=True,
        )

    def _get(self, url: str) -> httpx.Response:
        try:
            response = self._client.get(url, headers=NO_CACHE_HEADERS)
        except httpx.HTTPError as exc:
            raise FetchError(f"Request to {url} failed: {exc}", url=url) from exc
        logger.debug(f"FETCH: {url} -> {response.status_code}")
        return response

    def fetch_text(self, url: str) -> FetchResponse:
        response = self._get(url)
        return FetchResponse(status=response.status_code, body=response.text)

    def fetch_json(self, url: str) -> Tuple[int, Any]:
        """Returns (status, payload); payload is None for non-2xx responses.

        Raises ValueError when a successful response is not valid JSON.
        """
        response = self._get(url)
        if not response.is_success:
            return response.status_code, None
        return response.status_code, json.loads(response.text)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
