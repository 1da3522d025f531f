"""hfsubset command line (Typer).

Parses flags and positional identifiers into a `SubsetRequest` and a
`RunOptions`, runs the subset pipeline and turns any failure into one fatal
log line with a non-zero exit status.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from hfsubset.cli.ui_components import build_console, configure_logging
from hfsubset.core.config import AppSettings
from hfsubset.core.domain.identifiers import IdentifierType, WireProtocol
from hfsubset.core.domain.models import DEFAULT_OUTPUT, SubsetRequest
from hfsubset.core.errors import HfsubsetError
from hfsubset.core.services.subset_pipeline import RunOptions, run_subset

DEFAULT_SUBSET_TYPE = "reference"
DEFAULT_VERSION = "2.2"

EXAMPLES = """
Examples:

  hfsubset -o ./divides_nexus.gpkg -v "2.2" -t hl_uri "Gages-06752260"

  # Using network-linked data index identifiers
  hfsubset -o ./poudre.gpkg -t nldi "nwissite:USGS-08279500"

  # Specifying layers
  hfsubset -l divides,nexus -o ./divides_nexus.gpkg -t hl_uri "Gages-06752260"

  # Finding data around a POI
  hfsubset -o ./sacramento_flowpaths.gpkg -t xy -- -121.494400,38.581573
"""

app = typer.Typer(
    add_completion=False,
    help="hfsubset - Hydrofabric Subsetter",
)

_console = build_console()
logger = logging.getLogger("hfsubset.cli")


def _describe(exc: ValidationError) -> str:
    return "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in exc.errors())


@app.command(epilog=EXAMPLES)
def subset(
    ctx: typer.Context,
    identifiers: Optional[List[str]] = typer.Argument(
        None, help="Identifiers to subset by.", show_default=False
    ),
    id_type: IdentifierType = typer.Option(
        IdentifierType.default(), "-t", "--type", case_sensitive=False, help="Identifier type."
    ),
    subset_type: str = typer.Option(
        DEFAULT_SUBSET_TYPE, "-s", "--subset-type", help='Hydrofabric type, only "reference" is supported.'
    ),
    version: str = typer.Option(
        DEFAULT_VERSION, "-v", "--version", help="Hydrofabric version (omit the preceding `v`)."
    ),
    output: Path = typer.Option(DEFAULT_OUTPUT, "-o", "--output", help="Output file name."),
    layers: Optional[List[str]] = typer.Option(
        None,
        "-l",
        "--layers",
        help='Layers to subset (repeatable or comma-delimited); "core" and "all" expand to fixed sets.',
    ),
    weights: Optional[List[str]] = typer.Option(
        None, "-w", "--weights", help="Weights to include (repeatable or comma-delimited)."
    ),
    protocol: Optional[WireProtocol] = typer.Option(
        None, "--protocol", case_sensitive=False, help="Wire protocol (env: HFSUBSET_PROTOCOL)."
    ),
    endpoint: Optional[str] = typer.Option(
        None, "--endpoint", help="Service base URL (env: HFSUBSET_ENDPOINT)."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.001, help="HTTP timeout in seconds (env: HFSUBSET_HTTP_TIMEOUT_SECONDS)."
    ),
    verify: Optional[bool] = typer.Option(
        None, "--verify/--no-verify", help="Check the service with a HEAD request first."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the request URL without sending it."),
    quiet: bool = typer.Option(False, "--quiet", help="Disable logging (errors are still shown)."),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """Request a hydrofabric subset and write it to a GeoPackage."""

    if not identifiers:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    configure_logging(_console, quiet=quiet, debug=debug)

    try:
        settings = AppSettings()
    except ValidationError as exc:
        logger.error("invalid hfsubset configuration: %s", _describe(exc))
        raise typer.Exit(code=1) from None

    updates: dict[str, object] = {}
    if endpoint is not None:
        updates["endpoint"] = endpoint
    if timeout is not None:
        updates["http_timeout_seconds"] = timeout
    if updates:
        settings = settings.model_copy(update=updates)

    options = RunOptions.from_settings(settings)
    options.dry_run = dry_run
    options.quiet = quiet
    options.debug = debug
    if verify is not None:
        options.verify = verify
    if protocol is not None:
        options.protocol = protocol

    try:
        request = SubsetRequest(
            identifiers=identifiers,
            identifier_type=id_type,
            layers=layers,
            weights=weights,
            subset_type=subset_type,
            version=version,
            output=output,
        )
    except ValidationError as exc:
        logger.error("invalid hfsubset request: %s", _describe(exc))
        raise typer.Exit(code=1) from None

    try:
        result = run_subset(settings=settings, request=request, options=options)
    except HfsubsetError as exc:
        logger.error("failed to complete hfsubset request: %s", exc)
        raise typer.Exit(code=1) from None

    if result.dry_run:
        typer.echo(result.url)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
