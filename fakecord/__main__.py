"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


import argparse
import logging
import sys
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Generator, List, Optional, Sequence, Tuple

from . import __version__
from .composer import RenderRequest, render
from .config import load_config, split_config
from .errors import ConfigurationError, FakecordError

# Command line option name -> RenderRequest field.
_OVERRIDES: Tuple[Tuple[str, str], ...] = (
    ("avatar", "avatar_source"),
    ("output", "output_path"),
    ("username", "username"),
    ("timestamp", "timestamp"),
    ("message", "message"),
    ("background_colour", "background_colour"),
    ("username_colour", "username_colour"),
    ("timestamp_colour", "timestamp_colour"),
    ("message_colour", "message_colour"),
    ("timestamp_x_offset", "timestamp_x_offset"),
)


@contextmanager
def _setup_logging(*, log_filename: Optional[str] = None) -> Generator[None, None, None]:
    root_logger = logging.getLogger()
    handlers: List[logging.Handler] = []

    try:
        stream_handler = logging.StreamHandler()

        formatter = logging.Formatter(
            fmt="[{asctime}] [{levelname:<8}] {name}: {message}",
            datefmt="%Y-%m-%d %H:%M:%S",
            style="{",
        )

        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)
        handlers.append(stream_handler)

        root_logger.setLevel(logging.INFO)

        if log_filename is not None:
            from os import makedirs, path

            log_parent = path.dirname(log_filename)
            if log_parent and not path.isdir(log_parent):
                makedirs(log_parent, exist_ok=True)

            file_handler = RotatingFileHandler(
                filename=log_filename,
                mode="w",
                maxBytes=33_554_432,  # 32 MiB
                backupCount=5,
                encoding="utf-8",
            )

            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            handlers.append(file_handler)

        yield
    finally:
        for handler in handlers:
            handler.close()
            root_logger.removeHandler(handler)


def _parse_args(
    argv: Optional[Sequence[str]] = None,
) -> Tuple[argparse.ArgumentParser, argparse.Namespace]:
    parser = argparse.ArgumentParser(
        prog="fakecord", description="Render a fake chat message as a PNG image."
    )

    parser.add_argument(
        "config_filename",
        help="an optional YAML file to load render options from",
        nargs="?",
    )
    parser.add_argument("--avatar", "-a", help="avatar URL, file:// URI or local path")
    parser.add_argument("--output", "-o", help="where to write the PNG to")
    parser.add_argument("--username", "-u", help="the username to display")
    parser.add_argument("--timestamp", "-t", help="the timestamp (default: random)")
    parser.add_argument("--message", "-m", help="the message content")
    parser.add_argument("--background-colour", "--background-color")
    parser.add_argument("--username-colour", "--username-color")
    parser.add_argument("--timestamp-colour", "--timestamp-color")
    parser.add_argument("--message-colour", "--message-color")
    parser.add_argument(
        "--timestamp-x-offset",
        type=float,
        help="horizontal gap between the username and timestamp (default: 35)",
    )
    parser.add_argument(
        "--log-filename", "-lfn", help="the file to write logging messages to"
    )
    parser.add_argument(
        "--version", "-V", action="version", version=f"%(prog)s {__version__}"
    )
    parser.set_defaults(func=_run)

    return parser, parser.parse_args(argv)


def _run(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    config: Dict[str, Any] = {}

    try:
        if args.config_filename is not None:
            config = load_config(args.config_filename)

        options, fonts = split_config(config)

        for arg_name, field in _OVERRIDES:
            if (value := getattr(args, arg_name)) is not None:
                options[field] = value

        request = RenderRequest.from_mapping(options)
    except ConfigurationError as exc:
        parser.error(str(exc))

    try:
        with _setup_logging(log_filename=args.log_filename):
            try:
                output_path = render(request, fonts=fonts)
            except FakecordError as exc:
                logging.error("%s", exc)
                return 1
    except OSError:
        parser.error(f'Failed to write to log file "{args.log_filename}".')

    print(output_path)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser, args = _parse_args(argv)
    return args.func(parser, args)


if __name__ == "__main__":
    sys.exit(main())
