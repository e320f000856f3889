"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


from pathlib import Path

import pytest

from fakecord.config import *
from fakecord.errors import ConfigurationError, FontNotFound
from fakecord.fonts import FontSet


def test_load_config(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        'username: Sleepy\nmessage: "zzz"\ntimestamp_x_offset: 40\n'
        "fonts:\n  regular: null\n",
        encoding="utf-8",
    )

    assert load_config(path) == {
        "username": "Sleepy",
        "message": "zzz",
        "timestamp_x_offset": 40,
        "fonts": {"regular": None},
    }


def test_load_config_empty(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == {}


@pytest.mark.parametrize("content", ["- a\n- b\n", "just a string\n", "key: [unclosed\n"])
def test_load_config_invalid(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError, match="^Invalid configuration: "):
        load_config(path)


def test_load_config_missing(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "nope.yaml")


def test_split_config() -> None:
    options, fonts = split_config({"username": "Sleepy", "fonts": None})

    assert options == {"username": "Sleepy"}
    assert isinstance(fonts, FontSet)


def test_split_config_missing_font(tmp_path: Path) -> None:
    with pytest.raises(FontNotFound):
        split_config({"fonts": {"bold": str(tmp_path / "nope.ttf")}})


@pytest.mark.parametrize("fonts", [["a.ttf"], {"italic": "a.ttf"}])
def test_split_config_malformed_fonts(fonts: object) -> None:
    with pytest.raises(ConfigurationError):
        split_config({"fonts": fonts})
