"""Shared fixtures for safebox_installer tests."""

import sys
from dataclasses import replace
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

# Add the tools directory to the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from safebox_installer.config import InstallerConfig, BASE_URL_ENV, BIN_DIR_ENV, CACHE_DIR_ENV

BINARY_CONTENT = b"\x7fELF" + b"safebox" * 2048


class ReleaseServer:
    """In-process stand-in for the release host that counts requests."""

    def __init__(self) -> None:
        self.requests: list[str] = []
        self.status = 200
        self.body = BINARY_CONTENT
        self._server: TestServer | None = None

    async def _handle(self, request: web.Request) -> web.Response:
        self.requests.append(request.path)
        return web.Response(status=self.status, body=self.body)

    async def start(self) -> None:
        app = web.Application()
        app.router.add_get("/{tail:.*}", self._handle)
        self._server = TestServer(app)
        await self._server.start_server()

    async def close(self) -> None:
        if self._server:
            await self._server.close()

    @property
    def base_url(self) -> str:
        assert self._server is not None
        return str(self._server.make_url("/releases"))


@pytest_asyncio.fixture
async def release_server():
    server = ReleaseServer()
    await server.start()
    yield server
    await server.close()


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    return tmp_path / "bin"


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def make_config(bin_dir: Path, cache_dir: Path):
    """Build a linux/amd64 configuration pointing at the given base URL."""

    def _make(base_url: str = "http://127.0.0.1:9/releases", **overrides) -> InstallerConfig:
        config = InstallerConfig.from_environment(
            system="Linux",
            machine="x86_64",
            environ={
                BASE_URL_ENV: base_url,
                BIN_DIR_ENV: str(bin_dir),
                CACHE_DIR_ENV: str(cache_dir),
            },
        )
        config.ensure_bin_dir()
        return replace(config, **overrides)

    return _make
