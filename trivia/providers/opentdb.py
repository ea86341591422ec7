# trivia/providers/opentdb.py - HTTP access to Open Trivia DB

import asyncio
import logging
import aiohttp
from typing import Dict, Optional

logger = logging.getLogger(__name__)

API_BASE_URL = "https://opentdb.com/api.php"
TOKEN_URL = "https://opentdb.com/api_token.php"


class OpenTDBClient:
    """Thin GET-only client; failures are logged and reported as None"""

    def __init__(self, user_agent: str = "TriviaBot/2.0",
                 connect_timeout: float = 10, read_timeout: float = 10):
        self._user_agent = user_agent
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def is_available(self) -> bool:
        return self._session is not None and not self._session.closed

    async def initialize(self) -> None:
        """Create HTTP session for API calls"""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=2, ttl_dns_cache=300)
            timeout = aiohttp.ClientTimeout(
                sock_connect=self._connect_timeout,
                sock_read=self._read_timeout,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                headers={'User-Agent': self._user_agent}
            )
            logger.info("Open Trivia DB session created")

    async def cleanup(self) -> None:
        """Close HTTP session"""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.info("Open Trivia DB session closed")

    async def get_text(self, url: str, params: Optional[Dict[str, str]] = None) -> Optional[str]:
        """GET url and return the body, or None on any transport problem"""
        if not self.is_available:
            await self.initialize()

        try:
            async with self._session.get(url, params=params, allow_redirects=False) as resp:
                if resp.status != 200:
                    logger.warning(f"Open Trivia DB returned HTTP {resp.status} for {url}")
                    return None
                # Stray bytes only damage the field they sit in, not the batch
                return await resp.text(encoding="utf-8", errors="replace")
        except asyncio.TimeoutError:
            logger.warning(f"Open Trivia DB request timed out: {url}")
            return None
        except aiohttp.ClientError as e:
            logger.warning(f"Open Trivia DB request failed: {e}")
            return None
