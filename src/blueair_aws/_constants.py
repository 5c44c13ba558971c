"""Internal constants for the BlueAir cloud API."""

from __future__ import annotations

HOMEHOST_ENDPOINT = "https://api.blueair.io/v2"

# Static key shipped in the BlueAir mobile app, sent with homehost lookups.
HOMEHOST_API_KEY = (
    "eyJhbGciOiJIUzI1NiJ9.eyJncmFudGVlIjoiYmx1ZWFpciIsImlhdCI6MTQ1MzEyNTYzMiwidmFsaWRpdHki"
    "Oi0xLCJqdGkiOiJkNmY3OGE0Yi1iMWNkLTRkZDgtOTA2Yi1kN2JkNzM0MTQ2NzQiLCJwZXJtaXNzaW9ucyI6"
    "WyJhbGwiXSwicXVvdGEiOi0xLCJyYXRlTGltaXQiOi0xfQ.CJsfWVzFKKDDA6rWdh-hjVVVE9S3d6Hu9BzXG9htWFw"
)

API_TIMEOUT = 5.0  # seconds per attempt
API_RETRIES = 3

LOGIN_EXPIRATION = 24 * 3600  # seconds

DISCOVERY_ATTEMPTS = 3
DISCOVERY_DELAY = 1.0  # seconds between homehost attempts

USER_AGENT = "Blueair/58 CFNetwork/1327.0.4 Darwin/21.2.0"

APP_HEADERS: dict[str, str] = {
    "Accept": "*/*",
    "Content-Type": "application/json",
    "User-Agent": USER_AGENT,
    "Connection": "keep-alive",
    "Accept-Encoding": "gzip, deflate",
}

GIGYA_HEADERS: dict[str, str] = {
    "Content-Type": "application/x-www-form-urlencoded",
    "Accept": "*/*",
    "Connection": "keep-alive",
    "Accept-Encoding": "gzip, deflate",
}
