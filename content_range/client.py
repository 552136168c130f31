from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from httpx import AsyncClient, Response

from content_range.parser import (
    Bytes,
    ContentRange,
    ParseError,
    UnboundBytes,
    Unsatisfied,
    parse,
)

logger = logging.getLogger(__name__)


@dataclass
class Range:
    start: int
    end: int | None

    def __bool__(self) -> bool:
        return self.start > 0 or self.end is not None

    def header(self) -> str:
        return f"bytes={self.start}-{'' if self.end is None else self.end}"


@dataclass
class ObjectMetadata:
    total: int
    etag: str | None
    accept_ranges: bool


@dataclass
class PartialData:
    data: bytes
    content_range: ContentRange | None
    total: int | None


class RangeError(Exception):
    pass


class RangeNotSatisfiable(RangeError):
    def __init__(self, url: str, complete_length: int | None) -> None:
        super().__init__(f"range not satisfiable for {url} (complete length {complete_length})")
        self.url = url
        self.complete_length = complete_length


class InvalidRangeResponse(RangeError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"invalid partial response from {url}: {reason}")
        self.url = url
        self.reason = reason


def _unsatisfied_length(response: Response) -> int | None:
    header = response.headers.get("Content-Range")
    if header is None:
        return None
    try:
        content_range = parse(header)
    except ParseError:
        logger.debug("ignoring malformed Content-Range %r on 416", header)
        return None
    if isinstance(content_range, Unsatisfied):
        return content_range.complete_length
    return None


@dataclass
class RangeClient:
    client: AsyncClient

    @classmethod
    @asynccontextmanager
    async def connect(cls, **client_kwargs: Any) -> AsyncIterator[RangeClient]:
        async with AsyncClient(**client_kwargs) as client:
            yield cls(client)

    async def get(self, url: str, range: Range | None = None) -> PartialData:
        headers: dict[str, str] = {}
        if range:
            headers["Range"] = range.header()
        logger.debug("GET %s range=%s", url, headers.get("Range"))
        response = await self.client.get(url, headers=headers)

        if response.status_code == 416:
            raise RangeNotSatisfiable(url, _unsatisfied_length(response))
        response.raise_for_status()
        if response.status_code != 206:
            return PartialData(data=response.content, content_range=None, total=len(response.content))

        header = response.headers.get("Content-Range")
        if header is None:
            raise InvalidRangeResponse(url, "206 response without Content-Range")
        try:
            content_range = parse(header)
        except ParseError as e:
            raise InvalidRangeResponse(url, e.reason) from e
        logger.debug("GET %s -> %r", url, content_range)

        match content_range:
            case Bytes(complete_length=total):
                return PartialData(data=response.content, content_range=content_range, total=total)
            case UnboundBytes():
                return PartialData(data=response.content, content_range=content_range, total=None)
            case _:
                raise InvalidRangeResponse(url, "206 response with an unsatisfied range")

    async def head(self, url: str) -> ObjectMetadata:
        response = await self.client.head(url)
        response.raise_for_status()
        try:
            total = int(response.headers["Content-Length"])
        except (KeyError, ValueError) as e:
            raise InvalidRangeResponse(url, "HEAD response without a usable Content-Length") from e
        accept_ranges = [
            unit.strip().lower()
            for unit in response.headers.get("Accept-Ranges", "").split(",")
        ]
        return ObjectMetadata(
            total=total,
            etag=response.headers.get("ETag"),
            accept_ranges="bytes" in accept_ranges,
        )

    async def resume(self, url: str, offset: int) -> PartialData:
        # an offset of 0 sends no Range header and gets the whole body back
        return await self.get(url, Range(start=offset, end=None))
