"""Feed document fetcher."""

import logging
from typing import Optional

import httpx

from ..errors import TransportError

logger = logging.getLogger(__name__)


class FeedFetcher:
    """Download raw feed documents over HTTP."""

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = "gator",
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """Initialize feed fetcher."""
        self.timeout = timeout
        self.user_agent = user_agent
        self._client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    def fetch(self, url: str) -> bytes:
        """
        GET the feed and return the response body.

        The status code is not checked: an error page is handed on as-is and
        rejected by the parser.

        Raises:
            TransportError: the request/response cycle did not complete
        """
        try:
            response = self._client.get(url)
        except httpx.TimeoutException as e:
            raise TransportError(url, f"timed out after {self.timeout}s") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(url, str(e) or type(e).__name__) from e

        if response.is_error:
            logger.debug("%s answered HTTP %s", url, response.status_code)
        return response.content

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "FeedFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
