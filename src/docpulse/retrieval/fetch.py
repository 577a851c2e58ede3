"""HTTP fetching for blog pages.

Fetches web content with a browser-like user-agent and a short timeout.
"""

import httpx
from typing import Optional
from ..log import get_logger

logger = get_logger("fetch")

BROWSER_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

class Fetcher:
    def __init__(self, http: httpx.AsyncClient, timeout: float = 5.0):
        self.http = http
        self.timeout = timeout
        self.headers = {
            "User-Agent": BROWSER_USER_AGENT
        }

    async def fetch_url(self, url: str) -> str:
        """
        Fetches the content of a URL. Returns text/html content.
        Raises on network errors, timeouts and non-2xx responses.
        """
        resp = await self.http.get(url, headers=self.headers, timeout=self.timeout)
        resp.raise_for_status()
        return resp.text

def build_http_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout, follow_redirects=True)
