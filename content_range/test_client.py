import httpx
import pytest

from content_range import Bytes, UnboundBytes
from content_range.client import (
    InvalidRangeResponse,
    Range,
    RangeClient,
    RangeNotSatisfiable,
)
from content_range.testing import BLOB, ETAG


def test_range_header() -> None:
    assert Range(start=0, end=9).header() == "bytes=0-9"
    assert Range(start=100, end=None).header() == "bytes=100-"
    assert not Range(start=0, end=None)
    assert Range(start=0, end=0)


@pytest.mark.anyio
async def test_get_range(endpoint: str) -> None:
    async with RangeClient.connect(base_url=endpoint) as client:
        body = await client.get("/blob", Range(start=10, end=19))
    assert body.data == BLOB[10:20]
    assert body.content_range == Bytes(10, 19, len(BLOB))
    assert body.total == len(BLOB)


@pytest.mark.anyio
async def test_get_whole_body(endpoint: str) -> None:
    async with RangeClient.connect(base_url=endpoint) as client:
        body = await client.get("/blob")
    assert body.data == BLOB
    assert body.content_range is None
    assert body.total == len(BLOB)


@pytest.mark.anyio
async def test_resume(endpoint: str) -> None:
    async with RangeClient.connect(base_url=endpoint) as client:
        body = await client.resume("/blob", 1000)
    assert body.data == BLOB[1000:]
    assert body.content_range == Bytes(1000, len(BLOB) - 1, len(BLOB))


@pytest.mark.anyio
async def test_get_unbound(endpoint: str) -> None:
    async with RangeClient.connect(base_url=endpoint) as client:
        body = await client.get("/unbound", Range(start=0, end=4))
    assert body.content_range == UnboundBytes(0, 4)
    assert body.total is None


@pytest.mark.anyio
async def test_not_satisfiable(endpoint: str) -> None:
    async with RangeClient.connect(base_url=endpoint) as client:
        with pytest.raises(RangeNotSatisfiable) as exc_info:
            await client.get("/blob", Range(start=5000, end=None))
    assert exc_info.value.complete_length == len(BLOB)


@pytest.mark.anyio
async def test_not_satisfiable_without_header(endpoint: str) -> None:
    async with RangeClient.connect(base_url=endpoint) as client:
        with pytest.raises(RangeNotSatisfiable) as exc_info:
            await client.get("/bare-416", Range(start=5, end=None))
    assert exc_info.value.complete_length is None


@pytest.mark.anyio
@pytest.mark.parametrize("path", ["/inverted", "/star-star", "/unsatisfied-206", "/no-content-range"])
async def test_invalid_partial_response(endpoint: str, path: str) -> None:
    async with RangeClient.connect(base_url=endpoint) as client:
        with pytest.raises(InvalidRangeResponse):
            await client.get(path, Range(start=0, end=4))


@pytest.mark.anyio
async def test_error_status(endpoint: str) -> None:
    async with RangeClient.connect(base_url=endpoint) as client:
        with pytest.raises(httpx.HTTPStatusError):
            await client.get("/missing", Range(start=0, end=4))


@pytest.mark.anyio
async def test_head(endpoint: str) -> None:
    async with RangeClient.connect(base_url=endpoint) as client:
        meta = await client.head("/blob")
        no_ranges = await client.head("/no-ranges")
    assert meta.total == len(BLOB)
    assert meta.etag == ETAG
    assert meta.accept_ranges
    assert no_ranges.total == 3
    assert no_ranges.etag is None
    assert not no_ranges.accept_ranges


@pytest.mark.anyio
async def test_head_without_content_length(endpoint: str) -> None:
    async with RangeClient.connect(base_url=endpoint) as client:
        with pytest.raises(InvalidRangeResponse, match="Content-Length"):
            await client.head("/no-length")
