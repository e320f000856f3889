"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


from __future__ import annotations

__all__ = (
    "AvatarReadError",
    "CompositionError",
    "ConfigurationError",
    "DecodeError",
    "FakecordError",
    "FetchError",
    "FontNotFound",
    "OutputWriteError",
    "ResolutionError",
)


from typing import Any, Optional


class FakecordError(Exception):
    """The base exception for every error raised by this library.

    Each subclass prefixes its message with a fixed string
    identifying the stage that failed. The underlying cause,
    if any, is chained as ``__cause__``.
    """

    prefix: str = "Error generating message: "

    def __init__(self, message: Any) -> None:
        super().__init__(f"{self.prefix}{message}")


class ResolutionError(FakecordError):
    """Exception raised when an image source descriptor is malformed."""

    prefix: str = "Error resolving file input path: "


class FetchError(FakecordError):
    """Exception raised when fetching a remote image fails.

    Attributes
    ----------
    url: :class:`str`
        The URL that was requested.
    status: Optional[:class:`int`]
        The HTTP status code, or ``None`` if no response
        was received at all.
    reason: Optional[:class:`str`]
        The HTTP status reason, if any.
    """

    prefix: str = "Failed to fetch image: "

    def __init__(
        self,
        url: str,
        *,
        status: Optional[int] = None,
        reason: Optional[str] = None,
        detail: Optional[str] = None,
    ) -> None:
        self.url: str = url
        self.status: Optional[int] = status
        self.reason: Optional[str] = reason

        if status is not None:
            msg = f"GET {url} failed with HTTP status {status} {reason or ''}".rstrip()
        else:
            msg = f"GET {url} failed: {detail}"

        super().__init__(msg)


class AvatarReadError(FakecordError, OSError):
    """Exception raised when a local avatar file cannot be read.

    This inherits from :exc:`OSError`.
    """

    prefix: str = "Error loading avatar: "


class DecodeError(FakecordError):
    """Exception raised when avatar bytes are not a decodable image."""

    prefix: str = "Error decoding avatar: "


class OutputWriteError(FakecordError, OSError):
    """Exception raised when the output directory or file cannot be written.

    This inherits from :exc:`OSError`.
    """

    prefix: str = "Error writing output: "


class CompositionError(FakecordError):
    """Exception raised when drawing, compositing or encoding fails."""

    prefix: str = "Error generating message: "


class ConfigurationError(FakecordError):
    """Exception raised when configuration values are invalid."""

    prefix: str = "Invalid configuration: "


class FontNotFound(ConfigurationError):
    """Exception raised when an explicitly configured font cannot be loaded.

    Attributes
    ----------
    path: :class:`str`
        The path of the font that failed to load.
    """

    def __init__(self, path: str) -> None:
        self.path: str = path
        super().__init__(f'Font "{path}" could not be loaded.')
