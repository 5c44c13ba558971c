"""Sensor and state field definitions for BlueAir purifiers."""

from __future__ import annotations

import math
from dataclasses import dataclass

from blueair_aws.errors import ValidationError

# Vendor sensor code -> stable sensor name.
SENSOR_NAMES: dict[str, str] = {
    "fsp0": "fanspeed",
    "hcho": "hcho",
    "h": "humidity",
    "pm1": "pm1",
    "pm10": "pm10",
    "pm2_5": "pm2_5",
    "t": "temperature",
    "tVOC": "voc",
}

SENSOR_UNITS: dict[str, str] = {
    "hcho": "ppb",
    "humidity": "%",
    "pm1": "µg/m³",
    "pm10": "µg/m³",
    "pm2_5": "µg/m³",
    "temperature": "C",
}

_TRUE_WORDS = ("on", "true", "yes", "1")
_FALSE_WORDS = ("off", "false", "no", "0")


def _is_finite(value: int | float) -> bool:
    return not isinstance(value, float) or math.isfinite(value)


@dataclass
class Setting:
    """A device state field.

    Maps between the vendor field name (e.g. ``childlock``), CLI-friendly
    slugs (e.g. ``child-lock``), and human-readable labels.
    """

    id: str
    """Vendor field name, as sent in ``n``."""

    slug: str
    """CLI name."""

    name: str
    """Human-readable label."""

    boolean: bool = False
    """Whether the field carries ``vb`` rather than ``v``."""

    writable: bool = False

    allowed: tuple[int, ...] | None = None
    """Accepted values for numeric writable fields; ``None`` = any number."""

    unit: str = ""

    def validate(self, value: object) -> int | float | bool:
        """Check *value* against this field's type and range.

        Raises :class:`ValidationError` if it is not acceptable.
        """
        if self.boolean:
            if not isinstance(value, bool):
                raise ValidationError(
                    f"Invalid {self.name.lower()} value {value!r}. Acceptable values are true or false."
                )
            return value
        # bool is an int subclass but never a valid numeric value here
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not _is_finite(value):
            raise ValidationError(f"{self.name} value must be a numeric value.")
        if self.allowed is not None and value not in self.allowed:
            choices = ", ".join(str(v) for v in self.allowed)
            raise ValidationError(
                f"Invalid {self.name.lower()} value {value!r}. Acceptable values are {choices}."
            )
        return value

    def parse(self, raw: str) -> int | float | bool:
        """Convert a CLI string to a validated value for this field."""
        text = raw.strip().lower()
        if self.boolean:
            if text in _TRUE_WORDS:
                return True
            if text in _FALSE_WORDS:
                return False
            raise ValidationError(f"Invalid value '{raw}' for {self.slug}. Expected: on | off")
        try:
            number: int | float = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise ValidationError(
                    f"Invalid value '{raw}' for {self.slug}. Expected a number."
                ) from None
        return self.validate(number)

    def format_value(self, raw: object) -> str:
        """Format a raw state value for human display."""
        if isinstance(raw, bool):
            return "ON" if raw else "OFF"
        if self.unit and isinstance(raw, (int, float)):
            return f"{raw}{self.unit}"
        return str(raw)


STATES: list[Setting] = [
    Setting("fanspeed", "fan-speed", "Fan speed", writable=True, allowed=(0, 1, 2, 3)),
    Setting("brightness", "brightness", "Brightness", writable=True, allowed=(0, 1, 2, 3, 4)),
    Setting("childlock", "child-lock", "Child lock", boolean=True, writable=True),
    Setting("nightmode", "night-mode", "Night mode", boolean=True, writable=True),
    Setting("standby", "standby", "Standby", boolean=True, writable=True),
    Setting("automode", "auto", "Auto mode", boolean=True, writable=True),
    Setting("germshield", "germ-shield", "Germ shield", boolean=True),
    Setting("gsnm", "germ-shield-night", "Germ shield night mode", boolean=True),
    Setting("safetyswitch", "safety-switch", "Safety switch", boolean=True),
    Setting("disinfection", "disinfection", "Disinfection", boolean=True),
    Setting("disinftime", "disinfection-time", "Disinfection time", unit="s"),
    Setting("filterusage", "filter-usage", "Filter usage", unit="%"),
    Setting("cfv", "connectivity-firmware", "Connectivity firmware"),
    Setting("mfv", "mcu-firmware", "MCU firmware"),
    Setting("ofv", "wifi-firmware", "Wi-Fi firmware"),
]

_by_slug: dict[str, Setting] = {s.slug: s for s in STATES}
_by_id: dict[str, Setting] = {s.id: s for s in STATES}


def resolve(name: str) -> Setting | None:
    """Look up a Setting by slug or vendor field name."""
    return _by_slug.get(name) or _by_id.get(name)


def setting_for(field: str) -> Setting:
    """Return the writable Setting for *field*; raises :class:`KeyError` otherwise."""
    setting = _by_id[field]
    if not setting.writable:
        raise KeyError(field)
    return setting
