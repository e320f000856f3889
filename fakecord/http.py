"""
Copyright (c) 2018-present HitchedSyringe

This Source Code Form is subject to the terms of the Mozilla Public
License, v. 2.0. If a copy of the MPL was not distributed with this
file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""


from __future__ import annotations

__all__ = ("HTTPRequester",)


import logging
from typing import TYPE_CHECKING, Any, Optional, Tuple, Type, Union

import aiohttp

from .errors import FetchError

if TYPE_CHECKING:
    from types import TracebackType

    from yarl import URL

    RequestUrl = Union[str, URL]


_LOG: logging.Logger = logging.getLogger(__name__)


class HTTPRequester:
    """An HTTP requests handler for fetching raw image data.

    Sessions are not implicitly started during construction.
    Either :meth:`start` must be awaited or the requester must
    be used as an asynchronous context manager.

    No request timeout is configured by default. Callers wanting
    bounded latency should either pass ``timeout`` to :meth:`start`
    or wrap requests in :func:`asyncio.wait_for`.

    Example
    -------
    .. code-block:: python3

        async with HTTPRequester() as requester:
            data = await requester.read("https://example.com/avatar.png")
    """

    __slots__: Tuple[str, ...] = ("__session",)

    def __init__(self) -> None:
        self.__session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> HTTPRequester:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    @property
    def session(self) -> Optional[aiohttp.ClientSession]:
        """Optional[:class:`aiohttp.ClientSession`]: The client session used
        for handling requests, or ``None`` if not started.
        """
        return self.__session

    def is_closed(self) -> bool:
        """:class:`bool`: Indicates whether the HTTP client session is closed."""
        return self.__session is None or self.__session.closed

    async def start(self, **session_kwargs: Any) -> None:
        """|coro|

        Starts this HTTP requester session.

        Parameters
        ----------
        session_kwargs
            The remaining parameters to be passed to the
            :class:`aiohttp.ClientSession` constructor.

        Raises
        ------
        RuntimeError
            This HTTP requester session is already active.
        """
        if not self.is_closed():
            raise RuntimeError("HTTP requester session is active.")

        session_kwargs.setdefault("timeout", aiohttp.ClientTimeout(total=None))

        self.__session = aiohttp.ClientSession(**session_kwargs)

        _LOG.info("New HTTP requester session started.")

    async def close(self) -> None:
        """|coro|

        Closes this HTTP requester session.
        """
        if self.is_closed():
            return

        if self.__session is not None:
            await self.__session.close()
            self.__session = None

        _LOG.info("Closed HTTP requester session.")

    async def read(self, url: RequestUrl, /, **options: Any) -> bytes:
        """|coro|

        Performs a GET request and returns the raw response body.

        Parameters
        ----------
        url: Union[:class:`str`, :class:`yarl.URL`]
            The URL to make a request to.
        options:
            The remaining parameters to be passed into the
            :meth:`aiohttp.ClientSession.get` method.

        Returns
        -------
        :class:`bytes`
            The raw response data.

        Raises
        ------
        :exc:`.FetchError`
            The request returned a status code outside of the 2xx
            range or no response could be obtained at all.
        RuntimeError
            The underlying HTTP client session was closed when trying
            to fetch data.
        """
        if self.is_closed():
            raise RuntimeError("HTTP requester session is closed.")

        try:
            async with self.__session.get(url, **options) as resp:  # type: ignore
                data = await resp.read()

                # aiohttp takes care of HTTP 1xx and 3xx internally, so
                # it's probably safe to exclude these from the range of
                # successful status codes.
                if not 200 <= resp.status < 300:
                    _LOG.warning("GET %s failed with HTTP status %s.", url, resp.status)
                    raise FetchError(str(url), status=resp.status, reason=resp.reason)
        except aiohttp.ClientError as exc:
            _LOG.warning("GET %s failed: %s", url, exc)
            raise FetchError(str(url), detail=str(exc) or type(exc).__name__) from exc

        _LOG.info("GET %s succeeded with HTTP status %s.", url, resp.status)
        return data
