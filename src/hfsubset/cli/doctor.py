"""Doctor command for environment diagnostics."""

from __future__ import annotations

from typing import Optional

import typer

from hfsubset.adapters.http_client import build_client
from hfsubset.adapters.verifier import verify_service
from hfsubset.cli.ui_components import build_console, build_doctor_table, color_disabled
from hfsubset.core.config import AppSettings, get_user_env_file, save_user_settings
from hfsubset.core.errors import HfsubsetError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = build_console()


def _check_service(settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_client(settings) as client:
            version = verify_service(settings.endpoint, client)
        return True, f"api version {version}"
    except HfsubsetError as exc:
        return False, str(exc)


@app.command()
def run(
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="Service base URL to check."),
) -> None:
    """Run baseline diagnostics and show the effective configuration."""

    settings = AppSettings()
    if endpoint is not None:
        settings = settings.model_copy(update={"endpoint": endpoint})

    table = build_doctor_table()

    # Config
    table.add_row("Endpoint", "OK", settings.endpoint)
    table.add_row("Protocol", "OK", settings.protocol.value)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))
    table.add_row("Color", "OFF" if color_disabled() else "ON", "NO_COLOR" if color_disabled() else "")

    # Connectivity
    ok_service, detail_service = _check_service(settings)
    table.add_row("Service", "OK" if ok_service else "FAIL", detail_service)

    _console.print(table)

    if not ok_service:
        _console.print(
            "\n[yellow]Note:[/yellow] set HFSUBSET_ENDPOINT or run `hfsubset-doctor setup` to point at a reachable service."
        )
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores endpoint, protocol and verification in the user config .env)."""

    settings = AppSettings()
    endpoint = typer.prompt("Service endpoint", default=settings.endpoint, show_default=True)
    protocol = typer.prompt("Wire protocol (rest or lambda)", default=settings.protocol.value, show_default=True)
    verify = typer.confirm("Verify the service before each request?", default=settings.verify)

    try:
        env_path = save_user_settings(endpoint=endpoint, protocol=protocol, verify=verify)
    except (HfsubsetError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    _console.print(f"[green]Saved settings to:[/green] {env_path}")
