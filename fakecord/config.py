"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


from __future__ import annotations

__all__ = (
    "load_config",
    "split_config",
)


import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple, Union

import yaml

from .errors import ConfigurationError
from .fonts import FontSet, load_fonts

_LOG: logging.Logger = logging.getLogger(__name__)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Loads render options from a YAML file.

    Top-level keys mirror the fields of :class:`RenderRequest`,
    with an optional ``fonts`` mapping holding ``regular`` and
    ``bold`` font paths. An empty file yields an empty mapping.

    Raises
    ------
    :exc:`.ConfigurationError`
        The file could not be read, was not valid YAML or
        did not contain a mapping.
    """
    try:
        with open(path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f'Failed to read config file "{path}": {exc}') from exc

    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigurationError(
            f'Config file "{path}" must contain a mapping, not {type(config).__name__}.'
        )

    _LOG.debug("Loaded config file %s.", path)
    return config


def split_config(config: Mapping[str, Any]) -> Tuple[Dict[str, Any], FontSet]:
    """Separates the font settings from the render options.

    Returns
    -------
    Tuple[Dict[:class:`str`, Any], :class:`FontSet`]
        The remaining render options and the resolved fonts.

    Raises
    ------
    :exc:`.ConfigurationError`
        The ``fonts`` setting was malformed or named a font
        that could not be loaded.
    """
    options = dict(config)
    fonts = options.pop("fonts", None) or {}

    if not isinstance(fonts, dict):
        raise ConfigurationError("fonts must be a mapping with regular and/or bold keys.")

    unknown = set(fonts).difference(("regular", "bold"))

    if unknown:
        raise ConfigurationError(f"Unknown font option(s): {', '.join(sorted(unknown))}.")

    return options, load_fonts(fonts.get("regular"), fonts.get("bold"))
