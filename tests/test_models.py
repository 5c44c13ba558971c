"""Tests for blueair_aws.models."""

from __future__ import annotations

from typing import Any

import pytest

from blueair_aws.errors import ProtocolError
from blueair_aws.models import DeviceDiscovery, DeviceStatus, parse_sensor_data, parse_states

MOCK_DEVICE_INFO: dict[str, Any] = {
    "id": "dev-uuid-1",
    "configuration": {
        "di": {
            "cma": "c4:dd:57:92:3e:34",
            "name": "Bedroom",
            "sku": "106121",
            "mfv": "1.0.12",
            "ofv": "2.1.1",
            "hw": "high_1.5",
            "ds": "110612100000110110006948",
        },
        "_it": "urn:blueair:openapi:version:healthprotect:0.0.5",
    },
    "sensordata": [
        {"n": "t", "t": 1700000000, "v": 21.5},
        {"n": "h", "t": 1700000000, "v": 40},
        {"n": "pm2_5", "t": 1700000000, "v": 3},
        {"n": "xyz", "t": 1700000000, "v": 99},
    ],
    "states": [
        {"n": "childlock", "t": 1700000000, "vb": True},
        {"n": "fanspeed", "t": 1700000000, "v": 2},
        {"n": "mfv", "t": 1700000000, "v": "1.0.12"},
        {"n": "mystery", "t": 1700000000},
    ],
}


class TestParseSensorData:
    def test_translates_known_codes(self):
        result = parse_sensor_data([{"n": "t", "v": 21.5}, {"n": "fsp0", "v": 11}])
        assert result == {"temperature": 21.5, "fanspeed": 11}

    def test_unknown_code_is_absent(self):
        result = parse_sensor_data([{"n": "co2", "v": 400}])
        assert result == {}
        assert "co2" not in result

    def test_entry_without_value_is_skipped(self):
        assert parse_sensor_data([{"n": "t"}]) == {}


class TestParseStates:
    def test_numeric_and_boolean(self):
        result = parse_states([{"n": "childlock", "vb": True}, {"n": "brightness", "v": 3}])
        assert result == {"childlock": True, "brightness": 3}

    def test_false_and_zero_are_kept(self):
        result = parse_states([{"n": "standby", "vb": False}, {"n": "fanspeed", "v": 0}])
        assert result == {"standby": False, "fanspeed": 0}

    def test_v_preferred_over_vb(self):
        assert parse_states([{"n": "x", "v": 1, "vb": False}]) == {"x": 1}

    def test_entry_without_value_is_dropped(self):
        assert parse_states([{"n": "mystery", "t": 1}]) == {}

    def test_entry_without_name_is_dropped(self):
        assert parse_states([{"v": 1}]) == {}


class TestDeviceStatus:
    def test_from_api(self):
        status = DeviceStatus.from_api(MOCK_DEVICE_INFO)

        assert status.id == "dev-uuid-1"
        assert status.name == "Bedroom"
        assert status.model == "urn:blueair:openapi:version:healthprotect:0.0.5"
        assert status.mac == "c4:dd:57:92:3e:34"
        assert status.wifi == "2.1.1"
        assert status.mcu == "1.0.12"
        assert status.serial == "110612100000110110006948"
        assert status.sensor_data == {"temperature": 21.5, "humidity": 40, "pm2_5": 3}
        assert status.state == {"childlock": True, "fanspeed": 2, "mfv": "1.0.12"}

    def test_minimal_record(self):
        status = DeviceStatus.from_api(
            {"id": "d1", "sensordata": [{"n": "t", "v": 21.5}], "states": [{"n": "childlock", "vb": True}]}
        )
        assert status.sensor_data["temperature"] == 21.5
        assert status.state["childlock"] is True
        assert status.name == ""
        assert status.model == ""


class TestDeviceDiscovery:
    def test_from_api(self):
        device = DeviceDiscovery.from_api(
            {
                "mac": "c4:dd:57:92:3e:34",
                "mcu-firmware": "1.0.12",
                "name": "51b94892-295e-46dd-9fc1-4a73cc162e4d",
                "type": "foobot",
                "user-type": "owner",
                "uuid": "dev-uuid-1",
                "wifi-firmware": "2.1.1",
            }
        )
        assert device.uuid == "dev-uuid-1"
        assert device.name == "51b94892-295e-46dd-9fc1-4a73cc162e4d"
        assert device.user_type == "owner"
        assert device.mcu_firmware == "1.0.12"
        assert device.wifi_firmware == "2.1.1"

    def test_missing_optional_fields(self):
        device = DeviceDiscovery.from_api({"uuid": "u1"})
        assert device.mac == ""
        assert device.name == ""

    def test_missing_uuid(self):
        with pytest.raises(ProtocolError):
            DeviceDiscovery.from_api({"name": "acct"})
