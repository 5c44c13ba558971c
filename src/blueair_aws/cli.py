"""Thin CLI wrapper over :class:`blueair_aws.Client`."""

from __future__ import annotations

import asyncio
import dataclasses
import json
import logging
import sys

import typer
from rich.console import Console
from rich.syntax import Syntax

from blueair_aws.client import Client
from blueair_aws.discovery import resolve_region
from blueair_aws.errors import BlueairError
from blueair_aws.models import DeviceStatus
from blueair_aws.properties import SENSOR_UNITS, STATES, resolve

app = typer.Typer(help="Control BlueAir air purifiers.", invoke_without_command=True)

_USERNAME = typer.Option(..., envvar="BLUEAIR_USERNAME", help="BlueAir account email")
_PASSWORD = typer.Option(
    ..., envvar="BLUEAIR_PASSWORD", help="BlueAir account password", show_default=False
)
_REGION = typer.Option(
    None, envvar="BLUEAIR_REGION", help="EU, AU, CN, RU or US (looked up if omitted)"
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP traffic"),
) -> None:
    """Control BlueAir air purifiers."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


def _print_json(obj: object) -> None:
    """Print JSON: syntax-highlighted when stdout is a TTY, compact otherwise."""
    if sys.stdout.isatty():
        Console().print(Syntax(json.dumps(obj, indent=2), "json"))
    else:
        typer.echo(json.dumps(obj))


def _fail(message: str) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(1)


async def _connect(username: str, password: str, region: str | None) -> Client:
    return await Client.connect(username, password, region)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def region(username: str = _USERNAME, password: str = _PASSWORD) -> None:
    """Look up which regional deployment owns the account."""
    try:
        found = asyncio.run(resolve_region(username, password))
    except BlueairError as e:
        raise _fail(str(e)) from None
    typer.echo(found.value)


@app.command()
def devices(
    username: str = _USERNAME,
    password: str = _PASSWORD,
    region: str | None = _REGION,
) -> None:
    """List devices registered to the account."""

    async def run() -> list:
        client = await _connect(username, password, region)
        return await client.get_devices()

    try:
        found = asyncio.run(run())
    except BlueairError as e:
        raise _fail(str(e)) from None

    if not found:
        raise _fail("No devices found.")
    for i, dev in enumerate(found):
        typer.echo(f"  [{i}] {dev.uuid} ({dev.type or 'unknown type'})")
        typer.echo(f"        MAC: {dev.mac}  MCU: {dev.mcu_firmware}  Wi-Fi: {dev.wifi_firmware}")


@app.command()
def status(
    uuids: list[str] | None = typer.Argument(None, help="Device UUIDs (default: all)"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    username: str = _USERNAME,
    password: str = _PASSWORD,
    region: str | None = _REGION,
) -> None:
    """Show sensor readings and state of devices."""

    async def run() -> list[DeviceStatus]:
        client = await _connect(username, password, region)
        registered = await client.get_devices()
        if not registered:
            return []
        targets = uuids or [d.uuid for d in registered]
        return await client.get_device_status(registered[0].name, targets)

    try:
        statuses = asyncio.run(run())
    except BlueairError as e:
        raise _fail(str(e)) from None

    if not statuses:
        raise _fail("No devices found.")
    if as_json:
        _print_json([dataclasses.asdict(s) for s in statuses])
        return

    is_tty = sys.stdout.isatty()
    for s in statuses:
        title = f"{s.name} ({s.id})"
        typer.echo(typer.style(title, bold=True) if is_tty else title)
        typer.echo(f"  Model: {s.model}")
        if s.sensor_data:
            typer.echo("  Sensors")
            for key, value in s.sensor_data.items():
                typer.echo(f"    {key}: {value}{SENSOR_UNITS.get(key, '')}")
        if s.state:
            typer.echo("  State")
            for key, value in s.state.items():
                setting = resolve(key)
                label = f"{setting.name} ({setting.slug})" if setting else key
                formatted = setting.format_value(value) if setting else str(value)
                if is_tty:
                    label = typer.style(label, fg="cyan")
                typer.echo(f"    {label}: {formatted}")


@app.command("set", context_settings={"help_option_names": ["-h", "--help"]})
def set_setting(
    uuid: str = typer.Argument(..., help="Device UUID"),
    setting: str = typer.Argument(..., help="Setting name"),
    value: str = typer.Argument(..., help="Value to set"),
    username: str = _USERNAME,
    password: str = _PASSWORD,
    region: str | None = _REGION,
) -> None:
    """Change a device setting.

    \b
    Settings:
      fan-speed      0 | 1 | 2 | 3
      brightness     0 | 1 | 2 | 3 | 4
      child-lock, night-mode, standby, auto    on | off
    """
    s = resolve(setting)
    if s is None or not s.writable:
        names = ", ".join(p.slug for p in STATES if p.writable)
        if s is not None:
            raise _fail(f"Property '{setting}' is read-only. Writable: {names}")
        raise _fail(f"Unknown setting '{setting}'. Available: {names}")

    try:
        parsed = s.parse(value)
    except BlueairError as e:
        raise _fail(str(e)) from None

    async def run() -> None:
        client = await _connect(username, password, region)
        await client.set_device_status(uuid, s.id, parsed)

    typer.echo(f"Setting {s.slug} to {value}...")
    try:
        asyncio.run(run())
    except BlueairError as e:
        raise _fail(str(e)) from None
    typer.echo("Done.")
