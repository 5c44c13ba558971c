"""BlueAir cloud API client.

Provides programmatic access to BlueAir purifiers through the regional AWS
API.  The :class:`Client` class is the main entry point::

    import asyncio
    from blueair_aws import Client, Region

    client = await Client.connect("email@example.com", "password")
    devices = await client.get_devices()

    statuses = await client.get_device_status(
        devices[0].name, [d.uuid for d in devices]
    )
    await client.set_fan_speed(devices[0].uuid, 2)
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from dataclasses import dataclass

from blueair_aws._constants import API_TIMEOUT, APP_HEADERS, LOGIN_EXPIRATION
from blueair_aws._http import HttpCaller
from blueair_aws.discovery import resolve_region
from blueair_aws.errors import AuthError, ProtocolError, ValidationError
from blueair_aws.gigya import GigyaClient
from blueair_aws.models import DeviceDiscovery, DeviceStatus
from blueair_aws.properties import setting_for
from blueair_aws.regions import Region, get_region_config, parse_region

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    """Tokens from one successful login, swapped as a whole on renewal."""

    session_token: str = ""
    session_secret: str = ""
    id_token: str = ""
    access_token: str = ""
    last_login: float = 0.0
    """Unix time of the login; ``0.0`` if never logged in."""

    def is_expired(self, now: float | None = None) -> bool:
        """Whether the login window has elapsed at *now* (default: current time)."""
        if now is None:
            now = time.time()
        return now - self.last_login >= LOGIN_EXPIRATION


class Client:
    """BlueAir AWS API client.

    The session starts empty; :meth:`initialize` or the first device
    operation logs in.  Every device operation calls :meth:`ensure_fresh`
    first, which logs in again once the 24 hour window has passed.

    Use :meth:`connect` to resolve the region from the account and log in
    in one step.
    """

    def __init__(
        self,
        username: str,
        password: str,
        region: Region | str = Region.EU,
        *,
        timeout: float = API_TIMEOUT,
    ) -> None:
        self._region = parse_region(region)
        config = get_region_config(self._region)
        _LOGGER.debug("Initializing client for region %s", self._region.value)

        self._gigya = GigyaClient(username, password, self._region)
        self._http = HttpCaller(config.api_url, headers=self._auth_headers, timeout=timeout)
        self._session = Session()
        self._refresh_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    async def connect(
        cls,
        username: str,
        password: str,
        region: Region | str | None = None,
        *,
        fallback_region: Region | None = None,
    ) -> Client:
        """Build a client and log in.

        When *region* is ``None`` it is looked up through the homehost
        endpoint; *fallback_region* is used if the reported host maps to no
        known region (otherwise :class:`ResolutionError` is raised).
        """
        if region is None:
            region = await resolve_region(username, password, fallback=fallback_region)
        client = cls(username, password, region)
        await client.login()
        return client

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def region(self) -> Region:
        return self._region

    @property
    def session(self) -> Session:
        """Current session record (possibly empty or stale)."""
        return self._session

    @property
    def access_token(self) -> str:
        """Current cloud access token; empty before the first login."""
        return self._session.access_token

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def initialize(self) -> bool:
        """Log in, reporting success instead of raising.

        Returns ``True`` if the login succeeded, ``False`` on any error; the
        error is logged.
        """
        try:
            _LOGGER.debug("Initializing client...")
            await self.login()
        except Exception as e:
            _LOGGER.error("Error during initialization: %s", e)
            return False
        _LOGGER.debug("Client initialized")
        return True

    async def login(self) -> None:
        """Run the full login sequence and store the new session.

        Gigya login, Gigya JWT, then the cloud ``/login`` exchange.  Any
        failure propagates and leaves the previous session in place.
        """
        _LOGGER.debug("Logging in...")
        gigya_session = await self._gigya.login()
        id_token = await self._gigya.get_jwt(gigya_session.token, gigya_session.secret)
        access_token = await self._get_access_token(id_token)

        self._session = Session(
            session_token=gigya_session.token,
            session_secret=gigya_session.secret,
            id_token=id_token,
            access_token=access_token,
            last_login=time.time(),
        )
        _LOGGER.debug("Logged in")

    async def ensure_fresh(self) -> None:
        """Log in again if the session is older than the expiry window.

        Concurrent callers that find the session stale wait for a single
        login instead of each starting their own.
        """
        if not self._session.is_expired():
            return

        async with self._refresh_lock:
            # Another task may have logged in while we waited for the lock.
            if not self._session.is_expired():
                return
            _LOGGER.debug("Token expired, logging in again")
            await self.login()

    async def _get_access_token(self, id_token: str) -> str:
        response = await self._http.call(
            "/login",
            headers={"Authorization": f"Bearer {id_token}", "idtoken": id_token},
        )
        access_token = response.get("access_token") if isinstance(response, dict) else None
        if not access_token:
            raise AuthError("AWS access token error: no access_token in response")
        _LOGGER.debug("AWS access token received")
        return str(access_token)

    def _auth_headers(self) -> dict[str, str]:
        token = self._session.access_token
        return {**APP_HEADERS, "Authorization": f"Bearer {token}", "idtoken": token}

    # ------------------------------------------------------------------
    # Devices
    # ------------------------------------------------------------------

    async def get_devices(self) -> list[DeviceDiscovery]:
        """Fetch the devices registered to the account.

        Raises :class:`ProtocolError` if the response has no ``devices``.
        """
        await self.ensure_fresh()
        _LOGGER.debug("Getting devices...")

        response = await self._http.call("/registered-devices", method="GET")
        if not isinstance(response, dict) or not isinstance(response.get("devices"), list):
            raise ProtocolError("getDevices error: no devices in response")

        devices = [DeviceDiscovery.from_api(d) for d in response["devices"]]
        _LOGGER.debug("Fetched %d devices", len(devices))
        return devices

    async def get_device_status(self, account_uuid: str, uuids: list[str]) -> list[DeviceStatus]:
        """Fetch sensor readings and state for *uuids* in one batched request.

        *account_uuid* is the ``name`` of a :class:`DeviceDiscovery` record.

        Raises :class:`ProtocolError` if the response has no ``deviceInfo``.
        """
        await self.ensure_fresh()

        body = {
            "deviceconfigquery": [{"id": uuid, "r": {"r": ["sensors"]}} for uuid in uuids],
            "includestates": True,
            "eventsubscription": {
                "include": [{"filter": {"o": f"= {uuid}"}} for uuid in uuids],
            },
        }
        response = await self._http.call(f"/{account_uuid}/r/initial", body)
        if not isinstance(response, dict) or not isinstance(response.get("deviceInfo"), list):
            raise ProtocolError("getDeviceStatus error: no deviceInfo in response")

        statuses = [DeviceStatus.from_api(device) for device in response["deviceInfo"]]
        _LOGGER.debug("Fetched status for %d of %d devices", len(statuses), len(uuids))
        return statuses

    async def set_device_status(self, uuid: str, field: str, value: int | float | bool) -> None:
        """Set one state field on a device.

        Booleans are sent as ``vb`` and numbers as ``v``.

        Raises:
            ValidationError: If *uuid* or *field* is empty, *field* contains
                a slash, or *value* is neither a finite number nor a boolean.
                Nothing is sent in that case.
        """
        _validate_uuid(uuid)
        _validate_field(field)
        body: dict[str, object] = {"n": field}
        if isinstance(value, bool):
            body["vb"] = value
        elif isinstance(value, int) or (isinstance(value, float) and math.isfinite(value)):
            body["v"] = value
        else:
            raise ValidationError(f"setDeviceStatus: unsupported value {value!r}")

        await self.ensure_fresh()
        _LOGGER.debug("setDeviceStatus: %s %s %s", uuid, field, value)
        await self._http.call(f"/{uuid}/a/{field}", body)

    # ------------------------------------------------------------------
    # Typed setters
    # ------------------------------------------------------------------

    async def set_fan_speed(self, uuid: str, value: int) -> None:
        """Set the fan speed (0, 1, 2 or 3)."""
        await self._set_validated(uuid, "fanspeed", value)

    async def set_brightness(self, uuid: str, value: int) -> None:
        """Set the display brightness (0 to 4)."""
        await self._set_validated(uuid, "brightness", value)

    async def set_child_lock(self, uuid: str, value: bool) -> None:
        await self._set_validated(uuid, "childlock", value)

    async def set_night_mode(self, uuid: str, value: bool) -> None:
        await self._set_validated(uuid, "nightmode", value)

    async def set_standby(self, uuid: str, value: bool) -> None:
        await self._set_validated(uuid, "standby", value)

    async def set_fan_auto(self, uuid: str, value: bool) -> None:
        """Switch automatic fan mode on or off."""
        await self._set_validated(uuid, "automode", value)

    async def _set_validated(self, uuid: str, field: str, value: object) -> None:
        _validate_uuid(uuid)
        checked = setting_for(field).validate(value)
        await self.set_device_status(uuid, field, checked)


def _validate_uuid(uuid: object) -> None:
    if not isinstance(uuid, str) or not uuid.strip():
        raise ValidationError("Invalid or missing UUID")


def _validate_field(field: object) -> None:
    if not isinstance(field, str) or not field.strip() or "/" in field:
        raise ValidationError(f"Invalid or missing field: {field!r}")
