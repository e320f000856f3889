"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


import io
from pathlib import Path
from typing import AsyncGenerator, Callable, Tuple

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp import test_utils
from PIL import Image


def _png_bytes(size: Tuple[int, int], colour: Tuple[int, ...] = (255, 0, 0)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, colour).save(buffer, "png")
    return buffer.getvalue()


@pytest.fixture
def make_png() -> Callable[..., bytes]:
    return _png_bytes


@pytest.fixture
def avatar_bytes() -> bytes:
    return _png_bytes((64, 64))


@pytest.fixture
def avatar_path(tmp_path: Path, avatar_bytes: bytes) -> Path:
    path = tmp_path / "avatar.png"
    path.write_bytes(avatar_bytes)
    return path


@pytest_asyncio.fixture
async def avatar_server(
    avatar_bytes: bytes,
) -> AsyncGenerator[test_utils.TestServer, None]:
    async def avatar(request: web.Request) -> web.Response:
        return web.Response(body=avatar_bytes, content_type="image/png")

    async def garbage(request: web.Request) -> web.Response:
        return web.Response(body=b"definitely not an image", content_type="image/png")

    app = web.Application()
    app.router.add_get("/avatar.png", avatar)
    app.router.add_get("/garbage.png", garbage)

    async with test_utils.TestServer(app) as server:
        yield server
