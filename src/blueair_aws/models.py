"""Stable shapes built from BlueAir API responses."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from blueair_aws.errors import ProtocolError
from blueair_aws.properties import SENSOR_NAMES

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeviceDiscovery:
    """A device entry from ``/registered-devices``."""

    uuid: str
    name: str
    """Account UUID in the AWS API, used to scope status queries."""

    mac: str = ""
    type: str = ""
    user_type: str = ""
    mcu_firmware: str = ""
    wifi_firmware: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> DeviceDiscovery:
        if not isinstance(data, dict) or not data.get("uuid"):
            raise ProtocolError(f"Device entry without uuid: {data!r}")
        return cls(
            uuid=str(data["uuid"]),
            name=str(data.get("name", "")),
            mac=str(data.get("mac", "")),
            type=str(data.get("type", "")),
            user_type=str(data.get("user-type", "")),
            mcu_firmware=str(data.get("mcu-firmware", "")),
            wifi_firmware=str(data.get("wifi-firmware", "")),
        )


@dataclass
class DeviceStatus:
    """Snapshot of one device: identity, sensor readings and state fields."""

    id: str
    name: str
    model: str
    mac: str = ""
    wifi: str = ""
    mcu: str = ""
    serial: str = ""
    sensor_data: dict[str, float] = field(default_factory=dict)
    state: dict[str, float | bool | str] = field(default_factory=dict)

    @classmethod
    def from_api(cls, device: dict[str, Any]) -> DeviceStatus:
        """Flatten one ``deviceInfo`` entry of an ``/r/initial`` response."""
        configuration = device.get("configuration") or {}
        di = configuration.get("di") or {}
        return cls(
            id=str(device.get("id", "")),
            name=str(di.get("name", "")),
            model=str(configuration.get("_it", "")),
            mac=str(di.get("cma", "")),
            wifi=str(di.get("ofv", "")),
            mcu=str(di.get("mfv", "")),
            serial=str(di.get("ds", "")),
            sensor_data=parse_sensor_data(device.get("sensordata") or []),
            state=parse_states(device.get("states") or []),
        )


def parse_sensor_data(entries: list[dict[str, Any]]) -> dict[str, float]:
    """Translate ``sensordata`` entries to named readings.

    Codes missing from :data:`SENSOR_NAMES` are dropped.
    """
    readings: dict[str, float] = {}
    for entry in entries:
        key = SENSOR_NAMES.get(entry.get("n", ""))
        if key is not None and "v" in entry:
            readings[key] = entry["v"]
    return readings


def parse_states(entries: list[dict[str, Any]]) -> dict[str, float | bool | str]:
    """Collect ``states`` entries keyed by field name, preferring ``v`` over ``vb``."""
    state: dict[str, float | bool | str] = {}
    for entry in entries:
        name = entry.get("n")
        if not name:
            continue
        if entry.get("v") is not None:
            state[name] = entry["v"]
        elif entry.get("vb") is not None:
            state[name] = entry["vb"]
        else:
            _LOGGER.debug("Skipping state without value: %s", entry)
    return state
