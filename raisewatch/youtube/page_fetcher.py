from typing import Optional, Protocol

import httpx

YOUTUBE_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/118.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,*/*",
    "Accept-Language": "en-US,en;q=0.9",
}


class PageSource(Protocol):
    async def fetch_page_text(self, url: str) -> str: ...


class PageFetcher:
    """Raw page download. Transport errors are left to the caller."""

    def __init__(self, http: Optional[httpx.AsyncClient] = None, timeout: float = 10):
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=timeout, headers=YOUTUBE_HEADERS, follow_redirects=True)

    async def fetch_page_text(self, url: str) -> str:
        r = await self._http.get(url)
        return r.text

    async def aclose(self):
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()
