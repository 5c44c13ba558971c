"""Gigya identity provider client used to obtain a signed identity token."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from blueair_aws._constants import GIGYA_HEADERS
from blueair_aws._http import HttpCaller
from blueair_aws.errors import AuthError
from blueair_aws.regions import Region, get_region_config

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GigyaSession:
    """Session token and secret returned by ``accounts.login``."""

    token: str
    secret: str


class GigyaClient:
    """Two-step Gigya exchange: password login, then session-for-JWT.

    Raises :class:`~blueair_aws.errors.ConfigError` at construction if
    *region* has no configuration.
    """

    def __init__(self, username: str, password: str, region: Region | str) -> None:
        config = get_region_config(region)
        self._username = username
        self._password = password
        self._api_key = config.gigya_api_key
        self._http = HttpCaller(
            config.gigya_url, headers=lambda: GIGYA_HEADERS, serialize=False
        )

    @property
    def base_url(self) -> str:
        return self._http.base_url

    async def login(self) -> GigyaSession:
        """Log in with username and password.

        Raises :class:`AuthError` if the response carries no ``sessionInfo``.
        """
        response = await self._call(
            "/accounts.login",
            {
                "apiKey": self._api_key,
                "loginID": self._username,
                "password": self._password,
                "targetEnv": "mobile",
            },
        )
        session_info = response.get("sessionInfo")
        if not isinstance(session_info, dict) or not session_info.get("sessionToken"):
            raise AuthError(f"Gigya session error: no sessionInfo in response: {_describe(response)}")

        _LOGGER.debug("Gigya session received")
        return GigyaSession(
            token=str(session_info["sessionToken"]),
            secret=str(session_info.get("sessionSecret", "")),
        )

    async def get_jwt(self, token: str, secret: str) -> str:
        """Exchange a Gigya session for a signed identity token.

        Raises :class:`AuthError` if the response carries no ``id_token``.
        """
        response = await self._call(
            "/accounts.getJWT",
            {"oauth_token": token, "secret": secret, "targetEnv": "mobile"},
        )
        id_token = response.get("id_token")
        if not id_token:
            raise AuthError(f"Gigya JWT error: no id_token in response: {_describe(response)}")

        _LOGGER.debug("Gigya JWT received")
        return str(id_token)

    async def _call(self, path: str, params: dict[str, str]) -> dict[str, Any]:
        response = await self._http.call(path, params, form=True)
        if not isinstance(response, dict):
            raise AuthError(f"Unexpected Gigya response from {path}: {response!r}")
        # Gigya answers 200 with a non-zero errorCode for bad credentials.
        if response.get("errorCode", 0) != 0:
            raise AuthError(
                f"Gigya error {response['errorCode']}: "
                f"{response.get('errorMessage', 'unknown error')}"
            )
        return response


def _describe(response: dict[str, Any]) -> str:
    """Summarize a Gigya response without echoing tokens."""
    return ", ".join(sorted(response)) or "<empty>"
