"""Retrying HTTP call helpers shared by every outbound request."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

import aiohttp

from blueair_aws._constants import API_RETRIES, API_TIMEOUT
from blueair_aws.errors import ApiCallError, ApiTimeoutError

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")

HTTP_OK = 200


class _StatusError(Exception):
    """A response arrived with a non-200 status."""

    def __init__(self, status: int, reason: str | None, body: str) -> None:
        super().__init__(f"API call error with status {status}: {reason}, {body[:200]}")
        self.status = status


class HttpCaller:
    """Timeout-bounded, retrying request executor for one base URL.

    When *serialize* is true every attempt runs under a single
    :class:`asyncio.Lock`, so concurrent callers hit the network strictly one
    at a time.  The lock is held for one attempt only (request plus response
    parsing) and released before a retry queues for it again.

    *headers* is called at each attempt to build the default headers, so a
    token swapped in between attempts is picked up.
    """

    def __init__(
        self,
        base_url: str,
        *,
        headers: Callable[[], Mapping[str, str]] | None = None,
        timeout: float = API_TIMEOUT,
        serialize: bool = True,
    ) -> None:
        self._base_url = base_url
        self._headers = headers
        self._timeout = timeout
        self._lock: asyncio.Lock | None = asyncio.Lock() if serialize else None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def call(
        self,
        path: str,
        body: object | None = None,
        method: str = "POST",
        headers: Mapping[str, str] | None = None,
        retries: int = API_RETRIES,
        *,
        form: bool = False,
        auth: aiohttp.BasicAuth | None = None,
        text: bool = False,
    ) -> Any:
        """Send a request and return the decoded response.

        Args:
            path: Path appended to the base URL.
            body: JSON body, or form fields when *form* is true.
            method: HTTP method.
            headers: Extra headers, overriding the defaults.
            retries: Retries after the first attempt.
            form: Send *body* form-encoded instead of as JSON.
            auth: Optional HTTP Basic credentials.
            text: Return the raw body text instead of parsed JSON.

        Raises:
            ApiTimeoutError: If the last attempt timed out.
            ApiCallError: If the last attempt failed any other way.
        """
        url = f"{self._base_url}{path}"
        attempts = retries + 1
        last_error: BaseException | None = None
        last_status: int | None = None

        for attempt in range(1, attempts + 1):
            try:
                async with self._gate():
                    return await self._attempt(
                        method, url, body, headers, form=form, auth=auth, text=text
                    )
            except asyncio.TimeoutError as e:
                last_error = e
                _LOGGER.warning("%s %s timed out (attempt %d/%d)", method, url, attempt, attempts)
            except _StatusError as e:
                last_error = e
                last_status = e.status
                _LOGGER.warning(
                    "%s %s failed (attempt %d/%d): %s", method, url, attempt, attempts, e
                )
            except (aiohttp.ClientError, ValueError) as e:
                last_error = e
                last_status = None
                _LOGGER.warning(
                    "%s %s failed (attempt %d/%d): %s", method, url, attempt, attempts, e
                )

        if isinstance(last_error, asyncio.TimeoutError):
            raise ApiTimeoutError(
                f"API call to {path} failed after {attempts} attempts with timeout.",
                attempts=attempts,
                status=last_status,
            ) from last_error
        raise ApiCallError(
            f"API call to {path} failed after {attempts} attempts with error: {last_error}",
            attempts=attempts,
            status=last_status,
        ) from last_error

    def _gate(self) -> contextlib.AbstractAsyncContextManager[object]:
        if self._lock is None:
            return contextlib.nullcontext()
        return self._lock

    async def _attempt(
        self,
        method: str,
        url: str,
        body: object | None,
        extra_headers: Mapping[str, str] | None,
        *,
        form: bool,
        auth: aiohttp.BasicAuth | None,
        text: bool,
    ) -> Any:
        """Run a single request and parse its response."""
        headers = dict(self._headers() if self._headers is not None else {})
        if extra_headers:
            headers.update(extra_headers)

        kwargs: dict[str, Any] = {"headers": headers, "auth": auth}
        if body is not None:
            kwargs["data" if form else "json"] = body

        _LOGGER.debug("API call - request: %s %s", method, url)
        async with aiohttp.ClientSession() as session:
            async with session.request(
                method,
                url,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                **kwargs,
            ) as resp:
                raw = await resp.text()
                _LOGGER.debug("API call - response: %s (%d bytes)", resp.status, len(raw))
                if resp.status != HTTP_OK:
                    raise _StatusError(resp.status, resp.reason, raw)
        if text:
            return raw
        return json.loads(raw) if raw else None


async def retry(
    func: Callable[[], Awaitable[_T]],
    *,
    attempts: int,
    delay: float,
    description: str = "request",
) -> _T:
    """Await ``func()`` up to *attempts* times, sleeping *delay* seconds between tries.

    Only :class:`ApiCallError` is retried; the last one is re-raised once
    the attempts are used up.  The delay is fixed, with no backoff growth.
    """
    for attempt in range(1, attempts + 1):
        try:
            return await func()
        except ApiCallError as e:
            if attempt >= attempts:
                raise
            _LOGGER.warning(
                "%s failed on attempt %d/%d: %s; retrying in %.1fs",
                description,
                attempt,
                attempts,
                e,
                delay,
            )
            await asyncio.sleep(delay)
    raise ValueError("attempts must be at least 1")
