"""Home-region discovery through the BlueAir homehost endpoint."""

from __future__ import annotations

import logging
import re
from urllib.parse import quote

import aiohttp

from blueair_aws._constants import (
    DISCOVERY_ATTEMPTS,
    DISCOVERY_DELAY,
    HOMEHOST_API_KEY,
    HOMEHOST_ENDPOINT,
)
from blueair_aws._http import HttpCaller, retry
from blueair_aws.errors import ApiCallError, ResolutionError
from blueair_aws.regions import Region, region_from_aws_region

_LOGGER = logging.getLogger(__name__)

_HOST_RE = re.compile(r"^api-([a-z0-9-]+?)\.")


def parse_homehost(host: str) -> str:
    """Extract the AWS region token from a homehost such as ``api-eu-west-1.blueair.io``.

    Raises :class:`ResolutionError` if *host* does not have that shape.
    """
    cleaned = host.strip().strip('"').strip().lower()
    match = _HOST_RE.match(cleaned)
    if match is None:
        raise ResolutionError(f"Unrecognized homehost: {host!r}")
    return match.group(1)


async def fetch_homehost(
    username: str,
    password: str,
    *,
    attempts: int = DISCOVERY_ATTEMPTS,
    delay: float = DISCOVERY_DELAY,
) -> str:
    """Return the homehost string the vendor reports for *username*.

    Raises :class:`ResolutionError` once every attempt has failed.
    """
    http = HttpCaller(
        HOMEHOST_ENDPOINT,
        headers=lambda: {"X-API-KEY-TOKEN": HOMEHOST_API_KEY},
        serialize=False,
    )
    auth = aiohttp.BasicAuth(username, password)

    async def _lookup() -> str:
        result: str = await http.call(
            f"/user/{quote(username, safe='')}/homehost/",
            method="GET",
            retries=0,
            auth=auth,
            text=True,
        )
        return result

    try:
        return await retry(_lookup, attempts=attempts, delay=delay, description="homehost lookup")
    except ApiCallError as e:
        raise ResolutionError(f"Homehost lookup failed: {e}") from e


async def resolve_region(
    username: str,
    password: str,
    *,
    fallback: Region | None = None,
    attempts: int = DISCOVERY_ATTEMPTS,
    delay: float = DISCOVERY_DELAY,
) -> Region:
    """Determine which regional deployment owns the account.

    Unmapped hosts raise :class:`ResolutionError` unless *fallback* is given,
    in which case that region is returned instead.
    """
    host = await fetch_homehost(username, password, attempts=attempts, delay=delay)
    try:
        token = parse_homehost(host)
    except ResolutionError:
        if fallback is None:
            raise
        _LOGGER.warning("Unrecognized homehost %r, using %s", host, fallback.value)
        return fallback

    region = region_from_aws_region(token, fallback=fallback)
    _LOGGER.debug("Homehost %s resolved to region %s", host.strip(), region.value)
    return region
