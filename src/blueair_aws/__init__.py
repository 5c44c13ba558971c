"""Python API and CLI for BlueAir air purifiers on the AWS cloud."""

from blueair_aws.client import Client, Session
from blueair_aws.discovery import resolve_region
from blueair_aws.errors import (
    ApiCallError,
    ApiTimeoutError,
    AuthError,
    BlueairError,
    ConfigError,
    ProtocolError,
    ResolutionError,
    ValidationError,
)
from blueair_aws.models import DeviceDiscovery, DeviceStatus
from blueair_aws.properties import SENSOR_NAMES, STATES, Setting
from blueair_aws.regions import REGIONS, Region, RegionConfig, get_region_config

__all__ = [
    "REGIONS",
    "SENSOR_NAMES",
    "STATES",
    "ApiCallError",
    "ApiTimeoutError",
    "AuthError",
    "BlueairError",
    "Client",
    "ConfigError",
    "DeviceDiscovery",
    "DeviceStatus",
    "ProtocolError",
    "Region",
    "RegionConfig",
    "ResolutionError",
    "Session",
    "Setting",
    "ValidationError",
    "get_region_config",
    "resolve_region",
]
