"""Pytest configuration for enginoor tests."""

import asyncio
import json
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer


class MockExecutionClient:
    """In-process execution client stub recording every request it receives."""

    def __init__(self, status: int = 200, body: str = '{"jsonrpc":"2.0","id":1,"result":null}'):
        self.status = status
        self.body = body
        self.hold = False
        self.requests: list[dict] = []
        self.received = asyncio.Event()
        self.release = asyncio.Event()

    def reply_json(self, obj) -> None:
        self.body = json.dumps(obj)

    async def handle(self, request: web.Request) -> web.Response:
        envelope = await request.json()
        self.requests.append({
            "authorization": request.headers.get("Authorization"),
            "content_type": request.headers.get("Content-Type"),
            "body": envelope,
        })
        self.received.set()
        if self.hold:
            await self.release.wait()
        return web.Response(status=self.status, text=self.body, content_type="application/json")


def run_with_server(mock: MockExecutionClient, scenario):
    """Run ``scenario(url)`` against a live mock server and return its result."""

    async def _main():
        app = web.Application()
        app.router.add_post("/", mock.handle)
        server = TestServer(app)
        await server.start_server()
        try:
            return await scenario(str(server.make_url("/")))
        finally:
            mock.release.set()
            await server.close()

    return asyncio.run(_main())


@pytest.fixture
def serve():
    return run_with_server


@pytest.fixture
def mock_el():
    return MockExecutionClient()


@pytest.fixture
def forkchoice_state():
    from enginoor.engine import ForkchoiceState

    return ForkchoiceState(
        head_block_hash="0x" + "11" * 32,
        safe_block_hash="0x" + "22" * 32,
        finalized_block_hash="0x" + "33" * 32,
    )


@pytest.fixture
def payload_attributes():
    from enginoor.engine import PayloadAttributes

    return PayloadAttributes(
        timestamp="0x64",
        prev_randao="0x" + "ab" * 32,
        suggested_fee_recipient="0x" + "cd" * 20,
    )
