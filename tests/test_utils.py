"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


import asyncio
import re

import pytest

from fakecord.utils import *

TIMESTAMP_RE = re.compile(r"^([1-9]|1[0-2]):[0-5][0-9] (am|pm)$")


def test_random_timestamp_format() -> None:
    for _ in range(500):
        assert TIMESTAMP_RE.match(random_timestamp()) is not None


@pytest.mark.parametrize(
    ("hour", "minute", "period", "expected"),
    [
        (1, 0, "am", "1:00 am"),
        (9, 5, "pm", "9:05 pm"),
        (12, 59, "pm", "12:59 pm"),
    ],
)
def test_random_timestamp_padding(
    monkeypatch: pytest.MonkeyPatch, hour: int, minute: int, period: str, expected: str
) -> None:
    values = iter((hour, minute))

    monkeypatch.setattr("random.randint", lambda a, b: next(values))
    monkeypatch.setattr("random.choice", lambda seq: period)

    assert random_timestamp() == expected


def test_measure_performance() -> None:
    @measure_performance
    def add(a: int, b: int) -> int:
        return a + b

    result, delta = add(1, 2)

    assert result == 3
    assert delta >= 0


def test_measure_performance_coroutine() -> None:
    @measure_performance
    async def add(a: int, b: int) -> int:
        await asyncio.sleep(0)
        return a + b

    result, delta = asyncio.run(add(1, 2))

    assert result == 3
    assert delta >= 0
