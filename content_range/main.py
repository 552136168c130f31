from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from functools import partial

import anyio
import httpx

from content_range.client import Range, RangeClient, RangeError
from content_range.parser import (
    Bytes,
    ContentRange,
    ParseError,
    UnboundBytes,
    Unsatisfied,
    parse,
)


def describe(content_range: ContentRange) -> str:
    match content_range:
        case Bytes(first_byte, last_byte, complete_length):
            return f"first_byte={first_byte}, last_byte={last_byte}, complete_length={complete_length}"
        case UnboundBytes(first_byte, last_byte):
            return f"first_byte={first_byte}, last_byte={last_byte}, complete_length is unknown"
        case Unsatisfied(complete_length):
            return f"unsatisfied, complete_length={complete_length}"
    raise TypeError(f"not a content range: {content_range!r}")


def describe_headers(headers: Sequence[str]) -> int:
    status = 0
    for header in headers:
        try:
            print(describe(parse(header)))
        except ParseError as e:
            print(f"unable to parse: {e.reason}")
            status = 1
    return status


async def fetch(url: str, range: Range) -> int:
    async with RangeClient.connect(follow_redirects=True) as client:
        try:
            body = await client.get(url, range)
        except (RangeError, httpx.HTTPError) as e:
            print(e, file=sys.stderr)
            return 1
    if body.content_range is None:
        print(f"whole body, complete_length={body.total}")
    else:
        print(describe(body.content_range))
    return 0


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="content-range",
        description="Decode HTTP Content-Range header values.",
    )
    parser.add_argument("headers", nargs="*", metavar="HEADER", help="header value, e.g. 'bytes 0-9/20'")
    parser.add_argument("--url", help="fetch a byte range of URL and decode its Content-Range")
    parser.add_argument("--start", type=int, default=0, help="first byte to request with --url")
    parser.add_argument("--end", type=int, default=None, help="last byte to request with --url")
    parser.add_argument("-v", "--verbose", action="store_true", help="log requests")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = make_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.url is not None:
        if args.headers:
            parser.error("HEADER arguments cannot be combined with --url")
        return anyio.run(partial(fetch, args.url, Range(start=args.start, end=args.end)))
    if not args.headers:
        parser.error("give at least one HEADER or --url")
    return describe_headers(args.headers)


if __name__ == "__main__":
    sys.exit(main())
