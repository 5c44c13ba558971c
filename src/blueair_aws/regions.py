"""Regional deployments of the BlueAir cloud and their configuration."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from blueair_aws.errors import ConfigError, ResolutionError


class Region(enum.Enum):
    EU = "EU"
    AU = "AU"
    CN = "CN"
    RU = "RU"
    US = "US"


@dataclass(frozen=True)
class RegionConfig:
    """Everything needed to talk to one regional deployment."""

    rest_api_id: str
    """API Gateway identifier of the regional REST API."""

    aws_region: str
    """AWS region hosting the REST API (``eu-west-1``)."""

    gigya_region: str
    """Gigya data center (``eu1``)."""

    gigya_api_key: str
    """Gigya site API key for this data center."""

    @property
    def api_url(self) -> str:
        """Base URL of the regional REST API."""
        return f"https://{self.rest_api_id}.execute-api.{self.aws_region}.amazonaws.com/prod/c"

    @property
    def gigya_url(self) -> str:
        """Base URL of the regional Gigya accounts API."""
        return f"https://accounts.{self.gigya_region}.gigya.com"


REGIONS: dict[Region, RegionConfig] = {
    Region.EU: RegionConfig(
        "hkgmr8v960",
        "eu-west-1",
        "eu1",
        "3_qRseYzrUJl1VyxvSJANalu_kNgQ83swB1B9uzgms58--5w1ClVNmrFdsDnWVQQCl",
    ),
    Region.AU: RegionConfig(
        "3lcm4dxjhk",
        "ap-southeast-2",
        "au1",
        "3_Z2N0mIFC6j2fx1z2sq76R3pwkCMaMX2y9btPb0_PgI_3wfjSJoofFnBbxbtuQksN",
    ),
    Region.CN: RegionConfig(
        "ftbkyp79si",
        "cn-north-1",
        "cn1",
        "3_h3UEfJnA-zDpFPR9L4412HO7Mz2VVeN4wprbWYafPN1gX0kSnLcZ9VSfFi7bEIIU",
    ),
    Region.RU: RegionConfig(
        "f3g4h7ik0l",
        "eu-central-1",
        "ru1",
        "3_wYhHEBaOcS_w6idVM3mh8UjyjOP-3Dwn3w9Z6AYc0FhGf-uIwUkrcoCdsYarND2k",
    ),
    Region.US: RegionConfig(
        "on1keymlmh",
        "us-east-2",
        "us1",
        "3_-xUbbrIY8QCbHDWQs1tLXE-CZBQ50SGElcOY5hF1euE11wCoIlNbjMGAFQ6UwhMY",
    ),
}


def parse_region(value: Region | str) -> Region:
    """Return the :class:`Region` for a member or its (case-insensitive) name.

    Raises :class:`ConfigError` if *value* names no known region.
    """
    if isinstance(value, Region):
        return value
    try:
        return Region[str(value).upper()]
    except KeyError:
        raise ConfigError(f"Unknown region: {value!r}") from None


def get_region_config(region: Region | str) -> RegionConfig:
    """Look up the configuration for *region*.

    Raises :class:`ConfigError` if the region is unknown or has no entry.
    """
    config = REGIONS.get(parse_region(region))
    if config is None:
        raise ConfigError(f"No config found for region: {region}")
    return config


def region_from_aws_region(aws_region: str, *, fallback: Region | None = None) -> Region:
    """Map an AWS region name (``us-east-1``) to a :class:`Region`.

    An exact match against the configured AWS regions wins.  Otherwise the
    first region (in table order) whose AWS region shares the two-character
    prefix is used, so ``us-east-1`` maps to US and ``eu-west-2`` to EU.

    If nothing matches, *fallback* is returned when given; otherwise
    :class:`ResolutionError` is raised.
    """
    for region, config in REGIONS.items():
        if config.aws_region == aws_region:
            return region

    prefix = aws_region[:2]
    if len(prefix) == 2:
        for region, config in REGIONS.items():
            if config.aws_region[:2] == prefix:
                return region

    if fallback is not None:
        return fallback
    raise ResolutionError(f"No region mapping found for AWS region: {aws_region}")
