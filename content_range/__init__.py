from content_range.parser import (
    UNKNOWN,
    Bytes,
    ContentRange,
    ParseError,
    UnboundBytes,
    Unknown,
    Unsatisfied,
    parse,
    parse_bytes,
    parse_or_unknown,
)

__all__ = [
    "UNKNOWN",
    "Bytes",
    "ContentRange",
    "ParseError",
    "UnboundBytes",
    "Unknown",
    "Unsatisfied",
    "parse",
    "parse_bytes",
    "parse_or_unknown",
]
