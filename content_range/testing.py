from typing import Annotated

from fastapi import APIRouter, FastAPI, HTTPException, Header, Response

BLOB = bytes(range(256)) * 4
ETAG = '"blob-v1"'

router = APIRouter()


@router.get("/health")
async def health() -> Response:
    return Response(status_code=200)


def range_from_header(range: str | None) -> tuple[int, int | None] | None:
    if range is None:
        return None
    if not range.startswith("bytes="):
        raise HTTPException(status_code=400, detail="Invalid range header")
    start, end = range[6:].split("-")
    return int(start or "0"), int(end) if end else None


@router.get("/blob")
async def download_blob(range: Annotated[str | None, Header()] = None) -> Response:
    requested = range_from_header(range)
    total = len(BLOB)
    if requested is None:
        return Response(content=BLOB, headers={"ETag": ETAG})
    start, end = requested
    if start >= total:
        return Response(status_code=416, headers={"Content-Range": f"bytes */{total}"})
    end = total - 1 if end is None else min(end, total - 1)
    return Response(
        status_code=206,
        content=BLOB[start : end + 1],
        headers={"Content-Range": f"bytes {start}-{end}/{total}", "ETag": ETAG},
    )


@router.head("/blob")
async def head_blob() -> Response:
    return Response(headers={"ETag": ETAG, "Content-Length": str(len(BLOB)), "Accept-Ranges": "bytes"})


@router.head("/no-ranges")
async def head_no_ranges() -> Response:
    return Response(headers={"Content-Length": "3", "Accept-Ranges": "none"})


@router.head("/no-length")
async def head_no_length() -> Response:
    # 204 keeps the server from filling in Content-Length
    return Response(status_code=204, headers={"Accept-Ranges": "bytes"})


@router.get("/unbound")
async def download_unbound() -> Response:
    return Response(status_code=206, content=BLOB[:5], headers={"Content-Range": "bytes 0-4/*"})


@router.get("/inverted")
async def download_inverted() -> Response:
    return Response(status_code=206, content=BLOB[:5], headers={"Content-Range": "bytes 5-1/10"})


@router.get("/star-star")
async def download_star_star() -> Response:
    return Response(status_code=206, content=b"", headers={"Content-Range": "bytes */*"})


@router.get("/unsatisfied-206")
async def download_unsatisfied_206() -> Response:
    return Response(status_code=206, content=b"", headers={"Content-Range": "bytes */10"})


@router.get("/no-content-range")
async def download_no_content_range() -> Response:
    return Response(status_code=206, content=BLOB[:5])


@router.get("/bare-416")
async def download_bare_416() -> Response:
    return Response(status_code=416)


def make_app() -> FastAPI:
    app = FastAPI()
    app.include_router(router)
    return app
