"""Tests for lectern.runtime.fetch — fragment fetchers."""

from pathlib import Path

import httpx
import pytest

from lectern.runtime.fetch import FetchResult, FileFetcher, HttpFetcher


class TestFetchResult:
    def test_ok_only_for_200(self) -> None:
        assert FetchResult(200).ok
        assert not FetchResult(404).ok
        assert not FetchResult(0).ok


class TestFileFetcher:
    @pytest.mark.anyio
    async def test_reads_file(self, site: Path) -> None:
        result = await FileFetcher(site).fetch("content/guide.html")
        assert result == FetchResult(200, "<p>The guide</p>")

    @pytest.mark.anyio
    async def test_leading_slash(self, site: Path) -> None:
        result = await FileFetcher(site).fetch("/content/guide.html")
        assert result.ok

    @pytest.mark.anyio
    async def test_missing_file(self, site: Path) -> None:
        assert (await FileFetcher(site).fetch("content/broken.html")).status == 404

    @pytest.mark.anyio
    async def test_directory_is_missing(self, site: Path) -> None:
        assert (await FileFetcher(site).fetch("content")).status == 404

    @pytest.mark.anyio
    async def test_outside_root(self, site: Path) -> None:
        (site.parent / "secret.html").write_text("nope")
        assert (await FileFetcher(site).fetch("../secret.html")).status == 403

    @pytest.mark.anyio
    async def test_undecodable_file_is_server_error(self, site: Path) -> None:
        (site / "content" / "latin.html").write_bytes(b"\xff\xfe bad")
        result = await FileFetcher(site).fetch("content/latin.html")
        assert result == FetchResult(500)


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://docs.test/")


class TestHttpFetcher:
    @pytest.mark.anyio
    async def test_success(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/content/guide.html"
            return httpx.Response(200, text="<p>remote</p>")

        async with HttpFetcher("https://docs.test/", client=_client(handler)) as fetcher:
            result = await fetcher.fetch("content/guide.html")
        assert result == FetchResult(200, "<p>remote</p>")

    @pytest.mark.anyio
    async def test_error_status_drops_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="missing page")

        async with HttpFetcher("https://docs.test/", client=_client(handler)) as fetcher:
            result = await fetcher.fetch("content/nope.html")
        assert result == FetchResult(404, "")

    @pytest.mark.anyio
    async def test_transport_error_is_status_zero(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with HttpFetcher("https://docs.test/", client=_client(handler)) as fetcher:
            result = await fetcher.fetch("content/guide.html")
        assert result.status == 0
        assert not result.ok

    @pytest.mark.anyio
    async def test_invalid_url_is_status_zero(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.InvalidURL("Invalid port")

        async with HttpFetcher("https://docs.test/", client=_client(handler)) as fetcher:
            result = await fetcher.fetch("content/guide.html")
        assert result == FetchResult(0)

    @pytest.mark.anyio
    async def test_decoding_error_is_status_zero(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.DecodingError("bad gzip", request=request)

        async with HttpFetcher("https://docs.test/", client=_client(handler)) as fetcher:
            result = await fetcher.fetch("content/guide.html")
        assert result == FetchResult(0)
