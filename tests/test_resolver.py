"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


import sys
from typing import Any

import pytest

from fakecord.errors import ResolutionError
from fakecord.resolver import *


@pytest.mark.parametrize(
    ("descriptor", "expected"),
    [
        (
            "https://i.postimg.cc/Prhch3nx/image.png",
            RemoteURL("https://i.postimg.cc/Prhch3nx/image.png"),
        ),
        ("http://localhost:8080/a.png", RemoteURL("http://localhost:8080/a.png")),
        ("file:///tmp/avatar.png", LocalPath("/tmp/avatar.png")),
        ("file://localhost/tmp/avatar.png", LocalPath("/tmp/avatar.png")),
        ("file:///tmp/my%20avatar.png", LocalPath("/tmp/my avatar.png")),
        ("/tmp/avatar.png", LocalPath("/tmp/avatar.png")),
        ("avatars/pfp.png", LocalPath("avatars/pfp.png")),
        ("httpd.png", LocalPath("httpd.png")),
    ],
)
def test_resolve_source(descriptor: str, expected: ImageSource) -> None:
    assert resolve_source(descriptor) == expected


@pytest.mark.parametrize(
    "descriptor",
    [
        "file://example.com/tmp/avatar.png",
        "file:///tmp/a%2Fb.png",
        "file:///tmp/a%5cb.png",
        "file:///tmp/%FF.png",
        "file://",
    ],
)
def test_resolve_source_malformed_file_uri(descriptor: str) -> None:
    with pytest.raises(ResolutionError, match="^Error resolving file input path: "):
        resolve_source(descriptor)


@pytest.mark.parametrize("descriptor", [None, 123, b"/tmp/avatar.png"])
def test_resolve_source_not_str(descriptor: Any) -> None:
    with pytest.raises(ResolutionError):
        resolve_source(descriptor)


@pytest.mark.skipif(sys.platform != "win32", reason="drive letters are Windows-only")
def test_resolve_source_windows_drive() -> None:
    assert resolve_source("file:///C:/avatars/pfp.png") == LocalPath("C:\\avatars\\pfp.png")


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX paths only")
def test_resolve_source_posix_path_is_kept() -> None:
    assert resolve_source("file:///C:/avatars/pfp.png") == LocalPath("/C:/avatars/pfp.png")
