"""HTTP GET with fallback through CORS relay proxies.

Each request is tried directly first, then through the configured relays in
order. Failed attempts are followed by a linear backoff (1s, 2s, 3s, ...).
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterator
from urllib.parse import quote

import httpx

from stock_dashboard.config import Settings, REQUEST_HEADERS
from stock_dashboard.data.errors import FetchExhausted


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProxyStep:
    """One way of reaching a URL: directly (no prefix) or through a relay."""

    prefix: str | None = None

    @property
    def is_direct(self) -> bool:
        return self.prefix is None

    def rewrite(self, url: str) -> str:
        if self.prefix is None:
            return url
        return self.prefix + quote(url, safe="")

    def __str__(self) -> str:
        return "direct" if self.prefix is None else self.prefix


DIRECT = ProxyStep()


class ProxyChain:
    """Ordered request strategies: direct first, then each relay."""

    def __init__(self, prefixes: tuple[str, ...] | list[str]) -> None:
        self.proxies: tuple[ProxyStep, ...] = tuple(ProxyStep(p) for p in prefixes)

    def __len__(self) -> int:
        return 1 + len(self.proxies)

    def steps(self, attempts: int | None = None) -> Iterator[ProxyStep]:
        """
        Yield the step for each attempt.

        Args:
            attempts: Number of attempts (default: one per step). When larger
                than the chain, the relays are reused in order.
        """
        if attempts is None:
            attempts = len(self)
        if attempts <= 0:
            return

        yield DIRECT
        cursor = 0
        for _ in range(attempts - 1):
            if not self.proxies:
                yield DIRECT
                continue
            yield self.proxies[cursor]
            cursor = (cursor + 1) % len(self.proxies)


class ResilientFetcher:
    """Fetches JSON endpoints, falling back to relay proxies on failure."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
        max_attempts: int | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.settings.validate()
        self.chain = ProxyChain(self.settings.proxies)
        self.max_attempts = max_attempts if max_attempts is not None else len(self.chain)
        self._sleep = sleep
        self._client = client
        self._owns_client = client is None
        self._lock = threading.Lock()

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(
                    timeout=self.settings.timeout,
                    headers=REQUEST_HEADERS,
                    follow_redirects=True,
                )
            return self._client

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "ResilientFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def backoff(self, attempt: int) -> float:
        """Delay in seconds after failed attempt `attempt` (0-based)."""
        return self.settings.backoff_seconds * (attempt + 1)

    def _get(self, url: str) -> httpx.Response:
        response = self.client.get(
            url, timeout=self.settings.timeout, headers=REQUEST_HEADERS
        )
        response.raise_for_status()
        # Relays sometimes answer 200 with an HTML error page
        response.json()
        return response

    def request(self, url: str) -> httpx.Response:
        """
        GET `url`, trying each step of the proxy chain until one succeeds.

        Args:
            url: Target URL (unencoded)

        Returns:
            The first successful response

        Raises:
            FetchExhausted: If every attempt failed
        """
        last_error: Exception | None = None

        for attempt, step in enumerate(self.chain.steps(self.max_attempts)):
            request_url = step.rewrite(url)
            try:
                response = self._get(request_url)
                if attempt > 0:
                    logger.info(f"Request succeeded on attempt {attempt + 1} via {step}")
                return response
            except (httpx.HTTPError, ValueError) as e:
                last_error = e
                logger.warning(f"Request attempt {attempt + 1} failed via {step}: {e}")

            if attempt < self.max_attempts - 1:
                self._sleep(self.backoff(attempt))

        logger.error(f"All {self.max_attempts} attempts failed for {url}")
        raise FetchExhausted(url, self.max_attempts, last_error) from last_error

    def request_json(self, url: str) -> dict:
        """GET `url` through the proxy chain and decode the JSON body."""
        return self.request(url).json()
