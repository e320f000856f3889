"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


from __future__ import annotations

__all__ = (
    "FONTS",
    "FontSet",
    "load_fonts",
)


import logging
from pathlib import Path
from typing import NamedTuple, Optional, Sequence, Union

from PIL import ImageFont

from ..errors import FontNotFound

_LOG: logging.Logger = logging.getLogger(__name__)


# Drop Arimo-Regular.ttf and Arimo-Bold.ttf in here to
# pin the typeface regardless of what the host provides.
FONTS: Path = Path(__file__).parent


# Bare filenames are looked up in the system font
# directories by Pillow itself.
_REGULAR_CANDIDATES: Sequence[Union[str, Path]] = (
    FONTS / "Arimo-Regular.ttf",
    "DejaVuSans.ttf",
    "LiberationSans-Regular.ttf",
    "Arial.ttf",
    "arial.ttf",
    "Helvetica.ttc",
)

_BOLD_CANDIDATES: Sequence[Union[str, Path]] = (
    FONTS / "Arimo-Bold.ttf",
    "DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
    "Arial Bold.ttf",
    "arialbd.ttf",
)


class FontSet(NamedTuple):
    """The regular and bold sans-serif faces used for drawing.

    A ``None`` regular path denotes Pillow's built-in scalable
    font. A ``None`` bold path denotes that bold text has to be
    synthesized from the regular face.
    """

    regular_path: Optional[str] = None
    bold_path: Optional[str] = None

    @property
    def synthetic_bold(self) -> bool:
        return self.bold_path is None

    def get(self, size: float, *, bold: bool = False) -> ImageFont.FreeTypeFont:
        path = self.regular_path

        if bold and self.bold_path is not None:
            path = self.bold_path

        if path is None:
            return ImageFont.load_default(size)  # type: ignore

        return ImageFont.truetype(path, size)


def _try_load(candidate: Union[str, Path]) -> Optional[str]:
    try:
        ImageFont.truetype(str(candidate), 12)
    except OSError:
        return None

    return str(candidate)


def _find_font(
    explicit: Optional[Union[str, Path]], candidates: Sequence[Union[str, Path]]
) -> Optional[str]:
    if explicit is not None:
        if (path := _try_load(explicit)) is None:
            raise FontNotFound(str(explicit))

        return path

    for candidate in candidates:
        if (path := _try_load(candidate)) is not None:
            _LOG.debug("Using font %s.", path)
            return path

    return None


def load_fonts(
    regular: Optional[Union[str, Path]] = None, bold: Optional[Union[str, Path]] = None
) -> FontSet:
    """Resolves the fonts to draw with.

    Explicit paths are tried first, then the bundled font
    directory, then common system sans-serif fonts. If no
    regular face is found, Pillow's built-in font is used.

    Parameters
    ----------
    regular: Optional[Union[:class:`str`, :class:`pathlib.Path`]]
        The path of the regular font to use.
    bold: Optional[Union[:class:`str`, :class:`pathlib.Path`]]
        The path of the bold font to use.

    Returns
    -------
    :class:`FontSet`
        The resolved fonts.

    Raises
    ------
    :exc:`.FontNotFound`
        An explicitly given font could not be loaded.
    """
    regular_path = _find_font(regular, _REGULAR_CANDIDATES)

    if regular_path is None:
        _LOG.warning("No sans-serif font found, falling back to the built-in font.")

    bold_path = _find_font(bold, _BOLD_CANDIDATES)

    if bold_path is None:
        _LOG.info("No bold font found, bold text will be synthesized.")

    return FontSet(regular_path, bold_path)
