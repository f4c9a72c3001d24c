"""
Page Fetcher Implementation

Issues outbound HTTP GET requests with a browser user agent and returns
the raw HTML, or raises FetchFailed carrying the URL and status code.
No retries and no caching: every call is a live fetch against the origin.
"""

import asyncio
import time
from typing import Dict, Any, Optional

import aiohttp

from farmscope.core.base import FetcherInterface, FetchFailed
from farmscope.core.config import FetchConfig
from farmscope.core.logging import get_logger, logging_manager


class Fetcher(FetcherInterface):
    """
    aiohttp-based fetcher.

    One session is opened by initialize() and closed by cleanup(); routes
    open a fresh fetcher per request, batch jobs hold one for a whole run.
    """

    def __init__(self, config: Optional[FetchConfig] = None):
        self.fetch_config = config or FetchConfig()
        super().__init__({'fetch': self.fetch_config})
        self.logger = get_logger()
        self.session: Optional[aiohttp.ClientSession] = None

        self.stats = {
            'total_fetched': 0,
            'successful_fetches': 0,
            'failed_fetches': 0,
            'total_time': 0.0
        }

    async def initialize(self) -> None:
        """Open the HTTP session"""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.fetch_config.timeout),
                headers=self.default_headers()
            )
        self._initialized = True

    async def cleanup(self) -> None:
        """Close the HTTP session"""
        if self.session:
            await self.session.close()
            self.session = None
        self._initialized = False

    def default_headers(self) -> Dict[str, str]:
        """Headers sent with every request"""
        headers = {'User-Agent': self.fetch_config.user_agent}
        if self.fetch_config.no_store:
            headers['Cache-Control'] = 'no-store'
            headers['Pragma'] = 'no-cache'
        return headers

    async def fetch(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """
        Fetch a page

        Args:
            url: Absolute URL to fetch
            headers: Extra headers merged over the defaults

        Returns:
            Raw HTML text

        Raises:
            FetchFailed: On non-2xx status, network error or timeout
        """
        if not self._initialized:
            await self.initialize()

        start_time = time.time()
        self.stats['total_fetched'] += 1
        self.logger.debug(f"Fetching {url}")

        try:
            async with self.session.get(url, headers=headers) as response:
                if not 200 <= response.status < 300:
                    raise FetchFailed(url, status=response.status)
                # Origins sometimes mislabel their charset
                html = await response.text(errors='replace')
        except FetchFailed as e:
            self._record_failure(start_time)
            logging_manager.log_fetch_failure(url, status=e.status)
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._record_failure(start_time)
            logging_manager.log_fetch_failure(url, error=str(e) or type(e).__name__)
            raise FetchFailed(url, reason=str(e) or type(e).__name__) from e

        self.stats['successful_fetches'] += 1
        self.stats['total_time'] += time.time() - start_time
        self.logger.debug(f"Fetched {url} ({len(html)} chars)")
        return html

    def _record_failure(self, start_time: float) -> None:
        self.stats['failed_fetches'] += 1
        self.stats['total_time'] += time.time() - start_time

    def get_stats(self) -> Dict[str, Any]:
        """Get fetch statistics"""
        return {
            **self.stats,
            'success_rate': (
                self.stats['successful_fetches'] / max(self.stats['total_fetched'], 1)
            ) * 100
        }
