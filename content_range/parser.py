from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, TypeAlias

PREFIX: Final = "bytes "
U64_MAX: Final = 2**64 - 1

_DIGITS = re.compile(r"[0-9]+")


class ParseError(ValueError):
    """The header value does not match the bytes Content-Range grammar."""

    def __init__(self, header: str | bytes, reason: str) -> None:
        super().__init__(f"invalid Content-Range {header!r}: {reason}")
        self.header = header
        self.reason = reason


@dataclass(frozen=True)
class Bytes:
    """Satisfied range out of a resource of known size (status 206)."""

    first_byte: int
    last_byte: int
    complete_length: int

    @property
    def length(self) -> int:
        return self.last_byte - self.first_byte + 1


@dataclass(frozen=True)
class UnboundBytes:
    """Satisfied range, the server sent ``*`` for the total size."""

    first_byte: int
    last_byte: int

    @property
    def length(self) -> int:
        return self.last_byte - self.first_byte + 1


@dataclass(frozen=True)
class Unsatisfied:
    """Requested range could not be honored (status 416)."""

    complete_length: int


@dataclass(frozen=True)
class Unknown:
    """Legacy stand-in for a header that could not be parsed."""


UNKNOWN: Final = Unknown()

ContentRange: TypeAlias = Bytes | UnboundBytes | Unsatisfied


def _parse_u64(header: str, value: str, name: str) -> int:
    if not _DIGITS.fullmatch(value):
        raise ParseError(header, f"{name} must be a non-empty run of digits")
    digits = value.lstrip("0") or "0"
    # u64 has at most 20 digits
    if len(digits) > 20 or int(digits) > U64_MAX:
        raise ParseError(header, f"{name} does not fit in 64 bits")
    return int(digits)


def parse(header: str) -> ContentRange:
    """Parse a ``Content-Range`` response header value.

    ``header`` is the bare field value, e.g. ``bytes 0-9/30``::

        >>> parse("bytes 42-69/420")
        Bytes(first_byte=42, last_byte=69, complete_length=420)
        >>> parse("bytes 42-69/*")
        UnboundBytes(first_byte=42, last_byte=69)
        >>> parse("bytes */420")
        Unsatisfied(complete_length=420)

    Only the ``bytes`` unit is understood and no whitespace is tolerated
    beyond the single space after it. Raises :class:`ParseError` for
    anything else, including ``bytes */*``.
    """
    if not header.startswith(PREFIX):
        raise ParseError(header, "expected the 'bytes ' unit prefix")
    spec = header[len(PREFIX) :]
    if spec.count("/") != 1:
        raise ParseError(header, "expected exactly one '/'")
    range_spec, length_spec = spec.split("/")

    if range_spec == "*":
        if length_spec == "*":
            raise ParseError(header, "neither a range nor a length was given")
        return Unsatisfied(complete_length=_parse_u64(header, length_spec, "complete-length"))

    first, sep, last = range_spec.partition("-")
    if not sep:
        raise ParseError(header, "expected 'first-last' or '*' before '/'")
    first_byte = _parse_u64(header, first, "first-byte")
    last_byte = _parse_u64(header, last, "last-byte")
    if first_byte > last_byte:
        raise ParseError(header, "first-byte is after last-byte")

    if length_spec == "*":
        return UnboundBytes(first_byte=first_byte, last_byte=last_byte)
    complete_length = _parse_u64(header, length_spec, "complete-length")
    if last_byte >= complete_length:
        raise ParseError(header, "last-byte is outside complete-length")
    return Bytes(
        first_byte=first_byte,
        last_byte=last_byte,
        complete_length=complete_length,
    )


def parse_bytes(header: bytes) -> ContentRange:
    """Same as :func:`parse` for a raw header value read off the wire."""
    try:
        text = header.decode("ascii")
    except UnicodeDecodeError as e:
        raise ParseError(header, "header is not ASCII") from e
    return parse(text)


def parse_or_unknown(header: str | bytes) -> ContentRange | Unknown:
    # older call sites expect a total function with an Unknown result
    try:
        if isinstance(header, bytes):
            return parse_bytes(header)
        return parse(header)
    except ParseError:
        return UNKNOWN
