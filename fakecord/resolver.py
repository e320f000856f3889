"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


from __future__ import annotations

__all__ = (
    "ImageSource",
    "LocalPath",
    "RemoteURL",
    "resolve_source",
)


import logging
from typing import NamedTuple, Union
from urllib.parse import unquote, urlsplit
from urllib.request import url2pathname

from .errors import ResolutionError

_LOG: logging.Logger = logging.getLogger(__name__)


class RemoteURL(NamedTuple):
    """An image source located at an HTTP(S) URL."""

    url: str


class LocalPath(NamedTuple):
    """An image source located on the local filesystem."""

    path: str


ImageSource = Union[RemoteURL, LocalPath]


def _file_uri_to_path(uri: str) -> str:
    parts = urlsplit(uri)

    if parts.netloc not in ("", "localhost"):
        raise ValueError(
            f"File URL host must be empty or localhost, not {parts.netloc!r}."
        )

    lowered = parts.path.lower()

    # Decoding these would change which directories the path walks through.
    if "%2f" in lowered or "%5c" in lowered:
        raise ValueError("File URL path must not include encoded / or \\ characters.")

    # Invalid percent-encoding fails here rather than being replaced.
    unquote(parts.path, errors="strict")

    path = url2pathname(parts.path)

    if not path:
        raise ValueError("File URL path must be absolute.")

    if "\x00" in path:
        raise ValueError("File URL path must not include null bytes.")

    return path


def resolve_source(descriptor: str) -> ImageSource:
    """Classifies a raw image source descriptor.

    ``file://`` URIs are decoded into plain local paths, ``http://``
    and ``https://`` URLs are passed through unchanged, and anything
    else is assumed to already be a local path.

    Parameters
    ----------
    descriptor: :class:`str`
        The descriptor to classify.

    Returns
    -------
    Union[:class:`RemoteURL`, :class:`LocalPath`]
        The classified image source.

    Raises
    ------
    :exc:`.ResolutionError`
        The descriptor was not a string or was a malformed file URI.
    """
    if not isinstance(descriptor, str):
        raise ResolutionError(f"Expected str, not {type(descriptor).__name__}.")

    if descriptor.startswith("file://"):
        try:
            path = _file_uri_to_path(descriptor)
        except (ValueError, UnicodeDecodeError) as exc:
            raise ResolutionError(exc) from exc

        _LOG.debug("Resolved %s to local path %s.", descriptor, path)
        return LocalPath(path)

    if descriptor.startswith(("http://", "https://")):
        return RemoteURL(descriptor)

    return LocalPath(descriptor)
