import socket
from typing import AsyncIterator

import anyio
import pytest
import uvicorn
from httpx import AsyncClient

from content_range.testing import make_app


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def endpoint() -> AsyncIterator[str]:
    """Fixture to provide the base URL of a server answering range requests."""
    app = make_app()
    # find an open port
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("", 0))
        port = s.getsockname()[1]

    host = f"http://127.0.0.1:{port}"

    async with AsyncClient(base_url=host) as client:

        async def is_healthy() -> bool:
            try:
                resp = await client.get("/health")
                return resp.status_code == 200
            except Exception:
                return False

        server = uvicorn.Server(uvicorn.Config(app, host="127.0.0.1", port=port))
        async with anyio.create_task_group() as tg:
            tg.start_soon(server.serve)
            while not (await is_healthy()):
                await anyio.sleep(0.05)

            yield host
            await server.shutdown()
            tg.cancel_scope.cancel()
