"""Generated-asset downloader using aiohttp — implements AssetFetcherPort."""

from typing import Optional

import aiohttp


class AssetFetchError(RuntimeError):
    def __init__(self, url: str, status: int):
        super().__init__(f"GET {url} returned HTTP {status}")
        self.url = url
        self.status = status


class AssetFetcher:
    """Buffers the whole response body in memory; assets are small generated media."""

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        self._session = session
        self._owns_session = session is None

    async def start(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def fetch(self, url: str) -> bytes:
        await self.start()
        async with self._session.get(url) as resp:
            if not 200 <= resp.status < 300:
                raise AssetFetchError(url, resp.status)
            return await resp.read()
