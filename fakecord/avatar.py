"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


from __future__ import annotations

__all__ = (
    "AVATAR_SIZE",
    "build_circular_avatar",
    "load_avatar_bytes",
    "make_circular_avatar",
)


import asyncio
import io
import logging
from pathlib import Path
from typing import Optional

from PIL import Image, ImageChops, ImageDraw, UnidentifiedImageError
from PIL.Image import DecompressionBombError

from .errors import AvatarReadError, DecodeError
from .http import HTTPRequester
from .resolver import RemoteURL, resolve_source

_LOG: logging.Logger = logging.getLogger(__name__)


AVATAR_SIZE: int = 52

# The mask is drawn larger and then scaled down so
# the edge of the circle ends up antialiased.
_MASK_SUPERSAMPLE: int = 4


async def _fetch_remote(url: str, requester: Optional[HTTPRequester]) -> bytes:
    if requester is not None:
        return await requester.read(url)

    async with HTTPRequester() as temp_requester:
        return await temp_requester.read(url)


async def load_avatar_bytes(
    descriptor: str, *, requester: Optional[HTTPRequester] = None
) -> bytes:
    """|coro|

    Loads raw avatar bytes from a URL, file URI or local path.

    Parameters
    ----------
    descriptor: :class:`str`
        Where to load the avatar from.
    requester: Optional[:class:`HTTPRequester`]
        An already started requester to fetch remote avatars
        with. If ``None``, a temporary one is used.

    Returns
    -------
    :class:`bytes`
        The raw avatar data.

    Raises
    ------
    :exc:`.ResolutionError`
        The descriptor was malformed.
    :exc:`.FetchError`
        Fetching a remote avatar failed.
    :exc:`.AvatarReadError`
        Reading a local avatar failed.
    """
    source = resolve_source(descriptor)

    if isinstance(source, RemoteURL):
        return await _fetch_remote(source.url, requester)
    else:
        try:
            data = await asyncio.to_thread(Path(source.path).read_bytes)
        except OSError as exc:
            raise AvatarReadError(exc) from exc

        _LOG.debug("Read %d bytes from %s.", len(data), source.path)
        return data


def build_circular_avatar(data: bytes, size: int = AVATAR_SIZE) -> bytes:
    """Stretches an image to a square and cuts it into a circle.

    The aspect ratio of the source image is not preserved.

    Parameters
    ----------
    data: :class:`bytes`
        The raw image data.
    size: :class:`int`
        The width and height of the result.

    Returns
    -------
    :class:`bytes`
        The masked avatar as PNG data.

    Raises
    ------
    :exc:`.DecodeError`
        The data was not a decodable image.
    """
    if size <= 0:
        raise ValueError(f"invalid size {size} (must be > 0)")

    try:
        with Image.open(io.BytesIO(data)) as image:
            avatar = image.convert("RGBA").resize((size, size), Image.Resampling.LANCZOS)
    except (UnidentifiedImageError, DecompressionBombError, OSError, SyntaxError) as exc:
        raise DecodeError(exc) from exc

    big = size * _MASK_SUPERSAMPLE
    mask = Image.new("L", (big, big))
    ImageDraw.Draw(mask).ellipse((0, 0, big - 1, big - 1), 255)
    mask = mask.resize((size, size), Image.Resampling.LANCZOS)

    # Destination-in: keep whatever transparency the source
    # already had, but only inside the circle.
    avatar.putalpha(ImageChops.multiply(avatar.getchannel("A"), mask))

    buffer = io.BytesIO()
    avatar.save(buffer, "png")

    return buffer.getvalue()


async def make_circular_avatar(
    descriptor: str,
    *,
    size: int = AVATAR_SIZE,
    requester: Optional[HTTPRequester] = None,
) -> bytes:
    """|coro|

    Loads an avatar and cuts it into a circle.

    This is :func:`load_avatar_bytes` followed by
    :func:`build_circular_avatar`.
    """
    data = await load_avatar_bytes(descriptor, requester=requester)
    return build_circular_avatar(data, size)
