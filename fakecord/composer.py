"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


from __future__ import annotations

__all__ = (
    "AVATAR_OFFSET",
    "DEFAULT_AVATAR_SOURCE",
    "HEIGHT",
    "OUTPUT_DPI",
    "SCALE",
    "WIDTH",
    "RenderRequest",
    "compose",
    "render",
)


import asyncio
import io
import logging
import os
from typing import TYPE_CHECKING, Any, Mapping, NamedTuple, Optional, Tuple, Type, Union

from PIL import Image, ImageColor, ImageDraw

from .avatar import AVATAR_SIZE, make_circular_avatar
from .errors import CompositionError, ConfigurationError, FakecordError, OutputWriteError
from .fonts import FontSet, load_fonts
from .utils import measure_performance, random_timestamp

if TYPE_CHECKING:
    from types import TracebackType

    from .http import HTTPRequester

    PILColour = Union[str, Tuple[int, ...]]


_LOG: logging.Logger = logging.getLogger(__name__)


# fmt: off
WIDTH:  int = 500
HEIGHT: int = 80
SCALE:  int = 4

AVATAR_OFFSET: Tuple[int, int] = (10, 14)
OUTPUT_DPI:    int = 144

DEFAULT_AVATAR_SOURCE: str = "https://i.postimg.cc/Prhch3nx/image.png"
DEFAULT_OUTPUT_PATH:   str = "fake_discord_message.png"

DEFAULT_BACKGROUND_COLOUR: str = "#2b2d31"
DEFAULT_USERNAME_COLOUR:   str = "white"
DEFAULT_TIMESTAMP_COLOUR:  str = "#83838b"
DEFAULT_MESSAGE_COLOUR:    str = "#efeff0"
DEFAULT_TIMESTAMP_OFFSET:  float = 35
# fmt: on


def _as_text(key: str, value: Any) -> str:
    if isinstance(value, str):
        return value

    if isinstance(value, (bool, int, float)):
        return str(value)

    raise ConfigurationError(f"{key} must be text, not {type(value).__name__}.")


def _as_number(key: str, value: Any) -> float:
    # bool is an int subclass, but "yes" is never a meaningful offset.
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be a number, not bool.")

    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{key} must be a number, not {value!r}.") from exc


class RenderRequest(NamedTuple):
    """The options for rendering a single fake message.

    Fields left as ``None`` are filled in by :meth:`with_defaults`
    when composition starts.
    """

    avatar_source: str = DEFAULT_AVATAR_SOURCE
    output_path: str = DEFAULT_OUTPUT_PATH
    username: str = "Ethanol"
    timestamp: Optional[str] = None
    message: str = "C'est la vie"
    background_colour: Optional[str] = None
    username_colour: Optional[str] = None
    timestamp_colour: Optional[str] = None
    message_colour: Optional[str] = None
    timestamp_x_offset: Optional[float] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> RenderRequest:
        """Builds a request from a configuration mapping.

        Keys that are missing or ``None`` keep their defaults.

        Scalar values are converted to the field's type, since
        YAML reads values such as ``1234`` or ``yes`` as numbers
        and booleans.

        Raises
        ------
        :exc:`.ConfigurationError`
            The mapping had an unknown key or a value that could
            not be converted.
        """
        unknown = set(mapping).difference(cls._fields)

        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(sorted(unknown))}.")

        options = {}

        for key, value in mapping.items():
            if value is None:
                continue

            if key == "timestamp_x_offset":
                options[key] = _as_number(key, value)
            else:
                options[key] = _as_text(key, value)

        return cls(**options)

    def with_defaults(self) -> RenderRequest:
        """Returns a copy with every unset option filled in.

        A random timestamp is generated if none was given.
        """
        return self._replace(
            timestamp=random_timestamp() if self.timestamp is None else self.timestamp,
            background_colour=self.background_colour or DEFAULT_BACKGROUND_COLOUR,
            username_colour=self.username_colour or DEFAULT_USERNAME_COLOUR,
            timestamp_colour=self.timestamp_colour or DEFAULT_TIMESTAMP_COLOUR,
            message_colour=self.message_colour or DEFAULT_MESSAGE_COLOUR,
            timestamp_x_offset=(
                DEFAULT_TIMESTAMP_OFFSET
                if self.timestamp_x_offset is None
                else self.timestamp_x_offset
            ),
        )


class _Surface:
    # Pillow has no transform on its drawing context, so the
    # surface does the scaling itself. Every coordinate and
    # font size passed in here is in logical units.

    __slots__: Tuple[str, ...] = ("fonts", "image", "_draw")

    def __init__(self, fonts: FontSet) -> None:
        self.fonts: FontSet = fonts
        self.image: Image.Image = Image.new("RGBA", (WIDTH * SCALE, HEIGHT * SCALE))
        self._draw: ImageDraw.ImageDraw = ImageDraw.Draw(self.image)

    def __enter__(self) -> _Surface:
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.image.close()

    def fill(self, colour: PILColour) -> None:
        self._draw.rectangle((0, 0, WIDTH * SCALE, HEIGHT * SCALE), colour)

    def text(
        self,
        xy: Tuple[float, float],
        text: str,
        colour: PILColour,
        *,
        size: int,
        bold: bool = False,
    ) -> None:
        font = self.fonts.get(size * SCALE, bold=bold)
        stroke = 1 if bold and self.fonts.synthetic_bold else 0

        self._draw.text(
            (xy[0] * SCALE, xy[1] * SCALE),
            text,
            colour,
            font,
            anchor="ls",
            stroke_width=stroke,
            stroke_fill=colour,
        )

    def measure(self, text: str, *, size: int, bold: bool = False) -> float:
        font = self.fonts.get(size * SCALE, bold=bold)
        return self._draw.textlength(text, font) / SCALE

    def encode(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, "png")
        return buffer.getvalue()


def _parse_colour(value: str) -> Tuple[int, ...]:
    try:
        return ImageColor.getcolor(value, "RGBA")  # type: ignore
    except (ValueError, AttributeError) as exc:
        raise CompositionError(f'Invalid colour "{value}".') from exc


def _single_line(text: str) -> str:
    # Pillow can't measure multiline text. Line breaks are drawn as
    # spaces instead, the same way a browser canvas draws them.
    return text.replace("\r", " ").replace("\n", " ")


def _draw_background(request: RenderRequest, fonts: FontSet) -> bytes:
    username = _single_line(request.username)
    timestamp = _single_line(request.timestamp)  # type: ignore
    message = _single_line(request.message)

    background = _parse_colour(request.background_colour)  # type: ignore
    username_colour = _parse_colour(request.username_colour)  # type: ignore
    timestamp_colour = _parse_colour(request.timestamp_colour)  # type: ignore
    message_colour = _parse_colour(request.message_colour)  # type: ignore

    with _Surface(fonts) as surface:
        surface.fill(background)

        surface.text((73, 32), username, username_colour, size=16, bold=True)

        username_w = surface.measure(username, size=16, bold=True)
        surface.text(
            (70 + username_w + request.timestamp_x_offset, 32),  # type: ignore
            timestamp,
            timestamp_colour,
            size=12,
        )

        # Long messages just run off the edge.
        surface.text((73, 55), message, message_colour, size=16)

        return surface.encode()


def _overlay_avatar(background: bytes, avatar: bytes) -> Image.Image:
    with Image.open(io.BytesIO(background)) as bg:
        image = bg.convert("RGBA").resize((WIDTH, HEIGHT), Image.Resampling.LANCZOS)

    with Image.open(io.BytesIO(avatar)) as avi:
        image.alpha_composite(avi.convert("RGBA"), AVATAR_OFFSET)

    return image


def _ensure_parent_directory(path: str) -> None:
    parent = os.path.dirname(path)

    if not parent or os.path.isdir(parent):
        return

    try:
        os.makedirs(parent, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(exc) from exc

    _LOG.debug("Created output directory %s.", parent)


def _write_output(image: Image.Image, path: str) -> None:
    try:
        image.save(path, "png", dpi=(OUTPUT_DPI, OUTPUT_DPI))
    except OSError as exc:
        raise OutputWriteError(exc) from exc


@measure_performance
async def _compose(
    request: RenderRequest,
    *,
    requester: Optional[HTTPRequester] = None,
    fonts: Optional[FontSet] = None,
) -> str:
    request = request.with_defaults()
    output_path = os.fspath(request.output_path)

    _ensure_parent_directory(output_path)

    if fonts is None:
        fonts = load_fonts()

    background = _draw_background(request, fonts)

    avatar = await make_circular_avatar(
        request.avatar_source, size=AVATAR_SIZE, requester=requester
    )

    with _overlay_avatar(background, avatar) as image:
        _write_output(image, output_path)

    return output_path


async def compose(
    request: Optional[RenderRequest] = None,
    *,
    requester: Optional[HTTPRequester] = None,
    fonts: Optional[FontSet] = None,
) -> str:
    """|coro|

    Renders a fake chat message and writes it out as a PNG.

    The output is always :data:`WIDTH` by :data:`HEIGHT` pixels. Text
    is drawn at :data:`SCALE` times that size and downsampled so it
    stays sharp. Text that doesn't fit simply runs off the canvas.

    The only point this suspends at is while the avatar is being
    acquired. Everything else runs synchronously, so callers wanting
    to bound latency can wrap this in :func:`asyncio.wait_for`.

    Parameters
    ----------
    request: Optional[:class:`RenderRequest`]
        The render options. ``None`` renders every default.
    requester: Optional[:class:`HTTPRequester`]
        An already started requester to fetch a remote avatar
        with. If ``None``, a temporary one is used.
    fonts: Optional[:class:`FontSet`]
        The fonts to draw with. If ``None``, these are looked up
        via :func:`load_fonts`.

    Returns
    -------
    :class:`str`
        The path the image was written to.

    Raises
    ------
    :exc:`.FakecordError`
        Any stage of composition failed. The subclass identifies
        the stage. If this is raised while writing the output,
        the file at the output path may be missing or truncated.
    """
    if request is None:
        request = RenderRequest()

    try:
        output_path, delta = await _compose(request, requester=requester, fonts=fonts)
    except FakecordError:
        raise
    except Exception as exc:
        raise CompositionError(exc) from exc

    _LOG.info("Rendered message to %s in %.2f ms.", output_path, delta)
    return output_path


def render(request: Optional[RenderRequest] = None, **kwargs: Any) -> str:
    """Synchronous version of :func:`compose`.

    This runs :func:`compose` in a new event loop and
    therefore cannot be called from a running one.
    """
    return asyncio.run(compose(request, **kwargs))
