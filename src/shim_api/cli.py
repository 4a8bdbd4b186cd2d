"""
shim-api CLI - contract checks for shim/polyfill packages.

Usage:
    shim-api [MODULES]... [--bound] [--property] [--skip-shim-returns-polyfill]
             [--skip-auto-shim] [--multi] [--probe-timeout SECONDS] [--tap]

With no MODULES, the package named by pyproject.toml in the current
directory is checked.
"""

from typing import List, Optional

import typer
from rich.console import Console

app = typer.Typer(
    name="shim-api",
    help="Validate that packages follow the shim API contract",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        from shim_api import __version__
        console.print(f"shim-api {__version__}")
        raise typer.Exit()


@app.command()
def main(
    modules: Optional[List[str]] = typer.Argument(None, help="Module names or package paths"),
    bound: bool = typer.Option(False, "--bound", help="Main export is bound; skip the get_polyfill() identity check"),
    property_: bool = typer.Option(False, "--property", help="implementation may be a data property"),
    skip_shim_returns_polyfill: bool = typer.Option(
        False, "--skip-shim-returns-polyfill", help="Don't compare shim() with get_polyfill()"
    ),
    skip_auto_shim: bool = typer.Option(False, "--skip-auto-shim", help="Don't load or probe the auto module"),
    multi: bool = typer.Option(False, "--multi", help="Module is a multi-package root"),
    probe_timeout: Optional[float] = typer.Option(
        None, "--probe-timeout", help="Kill the auto probe after this many seconds"
    ),
    tap: bool = typer.Option(False, "--tap", help="Emit TAP instead of a rich report"),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
    version: bool = typer.Option(
        False, "--version", "-v", callback=_version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """
    Validate shim packages.

    Checks:
    - Main export is callable and is get_polyfill()
    - implementation, polyfill and shim are wired to the main export
    - shim() returns get_polyfill()
    - Importing auto installs the shim

    Example:
        shim-api ./my_shim --bound
    """
    from shim_api.config import ManifestError, ValidationConfiguration, resolve_targets
    from shim_api.logging_config import setup_logging
    from shim_api.validator import format_results, format_tap, run_validation

    setup_logging(verbose=verbose)

    try:
        references, manifest_config = resolve_targets(modules or [])
    except ManifestError as e:
        err_console.print(str(e), markup=False, highlight=False)
        raise typer.Exit(e.exit_code)
    except ValueError as e:
        err_console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)

    config = manifest_config.merged(ValidationConfiguration(
        bound_skip=bound,
        property_skip=property_,
        shim_returns_polyfill_skip=skip_shim_returns_polyfill,
        auto_shim_skip=skip_auto_shim,
        multi_mode=multi,
        probe_timeout=probe_timeout,
    ))

    reports = run_validation(references, config)

    if tap:
        typer.echo(format_tap(reports), nl=False)
    else:
        format_results(reports, console)

    if any(r.has_failures for r in reports):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
