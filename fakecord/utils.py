"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


from __future__ import annotations

__all__ = (
    "measure_performance",
    "random_timestamp",
)


import random
import time
from functools import wraps
from inspect import iscoroutinefunction
from typing import (
    TYPE_CHECKING,
    Awaitable,
    Callable,
    Tuple,
    TypeVar,
    Union,
    cast,
    overload,
)

if TYPE_CHECKING:
    from typing_extensions import ParamSpec

    _R = TypeVar("_R")
    _P = ParamSpec("_P")

    AsyncFunc = Callable[_P, Awaitable[_R]]


def random_timestamp() -> str:
    """Generates a random 12-hour clock timestamp.

    The result takes the form ``H:MM am`` or ``H:MM pm``, where
    the hour has no leading zero and the minute is always two
    digits. Each call is independent and not reproducible.

    Returns
    -------
    :class:`str`
        The random timestamp.
    """
    hour = random.randint(1, 12)
    minute = random.randint(0, 59)
    period = random.choice(("am", "pm"))

    return f"{hour}:{minute:02d} {period}"


@overload
def measure_performance(func: AsyncFunc[_P, _R]) -> AsyncFunc[_P, Tuple[_R, float]]:
    ...


@overload
def measure_performance(func: Callable[_P, _R]) -> Callable[_P, Tuple[_R, float]]:
    ...


def measure_performance(
    func: Union[Callable[_P, _R], AsyncFunc[_P, _R]]
) -> Union[Callable[_P, Tuple[_R, float]], AsyncFunc[_P, Tuple[_R, float]]]:
    """A decorator that returns a function or coroutine's
    execution time in milliseconds alongside its result.

    Example
    -------
    .. code-block:: python3

        @measure_performance
        async def foo():
            ...

        # later...

        result, delta = await foo()
    """
    if iscoroutinefunction(func):

        @wraps(func)
        async def async_deco(*args: _P.args, **kwargs: _P.kwargs) -> Tuple[_R, float]:
            start = time.perf_counter()
            result = await func(*args, **kwargs)
            return result, (time.perf_counter() - start) * 1000

        return async_deco
    else:
        func = cast("Callable[_P, _R]", func)

        @wraps(func)
        def deco(*args: _P.args, **kwargs: _P.kwargs) -> Tuple[_R, float]:
            start = time.perf_counter()
            result = func(*args, **kwargs)
            return result, (time.perf_counter() - start) * 1000

        return deco
