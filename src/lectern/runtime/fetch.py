"""Content fragment fetching.

The router only needs ``status`` and ``text`` back; anything other than
200 sends the navigation down the not-found path.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import anyio
import httpx


@dataclass(frozen=True, slots=True)
class FetchResult:
    status: int
    text: str = ""

    @property
    def ok(self) -> bool:
        return self.status == 200


class Fetcher(Protocol):
    async def fetch(self, url: str) -> FetchResult: ...


class FileFetcher:
    """Reads fragments from a built site on disk.

    Paths resolving outside *root* are answered with 403, missing files
    with 404, like a static file server would.
    """

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    async def fetch(self, url: str) -> FetchResult:
        file_path = (self._root / url.lstrip("/")).resolve()
        if not file_path.is_relative_to(self._root):
            return FetchResult(403)
        path = anyio.Path(file_path)
        if not await path.is_file():
            return FetchResult(404)
        try:
            text = await path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            # Unreadable or not UTF-8: a server would answer 500.
            return FetchResult(500)
        return FetchResult(200, text)


class HttpFetcher:
    """Fetches fragments from a served site with httpx.

    Usage::

        async with HttpFetcher("https://example.org/docs/") as fetcher:
            result = await fetcher.fetch("content/guide.html")
    """

    __slots__ = ("_client",)

    def __init__(self, base_url: str, *, timeout: float = 10.0, client: httpx.AsyncClient | None = None) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def fetch(self, url: str) -> FetchResult:
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL):
            # No usable response; the router treats it like any failed status.
            return FetchResult(0)
        return FetchResult(response.status_code, response.text if response.status_code == 200 else "")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
