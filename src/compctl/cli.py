from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, NoReturn, Optional

import click
from tabulate import tabulate

from complib.config import get_config, get_raw_config
from complib.errors import ConfigError, format_config_error, suggest_troubleshooting_steps
from complib.loader import find_config_file
from complib.schema import RawConfig


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--json-output",
    "json_output",
    is_flag=True,
    help="Output JSON instead of tables (pretty-printed)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose logging to stderr (what the CLI is doing)",
)
@click.option(
    "--cwd",
    "cwd",
    envvar="COMPCTL_CWD",
    type=click.Path(file_okay=False),
    help="Project directory containing components.json (default: current directory)",
)
@click.pass_context
def cli(ctx: click.Context, json_output: bool, verbose: bool, cwd: Optional[str]) -> None:
    """Components configuration CLI.

    Inspect components.json and the filesystem paths its import aliases
    resolve to. JSON output is always pretty-printed.
    """
    ctx.ensure_object(dict)
    ctx.obj["json"] = json_output
    ctx.obj["verbose"] = verbose
    ctx.obj["cwd"] = os.path.abspath(cwd) if cwd else os.getcwd()

    # Configure logging once per process
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _fail(ctx: click.Context, e: ConfigError) -> NoReturn:
    click.echo(format_config_error(e), err=True)
    if ctx.obj.get("verbose"):
        suggestions = suggest_troubleshooting_steps(e)
        if suggestions:
            click.echo("\nTroubleshooting suggestions:", err=True)
            for suggestion in suggestions[:3]:  # Show top 3 suggestions
                click.echo(f"  • {suggestion}", err=True)
    raise SystemExit(2)


def _not_configured(cwd: str) -> NoReturn:
    click.echo(f"No components configuration found in {cwd}", err=True)
    raise SystemExit(1)


def _display(value: Any) -> str:
    if value is None:
        return "—"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _flatten(data: Dict[str, Any], prefix: str = "") -> List[List[str]]:
    rows: List[List[str]] = []
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            rows.extend(_flatten(value, f"{name}."))
        else:
            rows.append([name, _display(value)])
    return rows


@cli.group()
@click.pass_context
def config(ctx: click.Context) -> None:  # noqa: D401
    """components.json commands."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the configuration with resolved paths."""
    log = logging.getLogger("compctl.config")
    cwd = ctx.obj["cwd"]
    try:
        log.info("Resolving config in %s", cwd)
        cfg = get_config(cwd)
    except ConfigError as e:
        _fail(ctx, e)

    if cfg is None:
        _not_configured(cwd)

    data = cfg.to_dict()
    if ctx.obj.get("json"):
        click.echo(json.dumps(data, indent=2, sort_keys=True))
        return

    rows = _flatten(data)
    log.info("Rendering %d fields", len(rows))
    click.echo(tabulate(rows, headers=["FIELD", "VALUE"]))


@config.command("paths")
@click.pass_context
def config_paths(ctx: click.Context) -> None:
    """Show only the resolved filesystem paths."""
    log = logging.getLogger("compctl.config")
    cwd = ctx.obj["cwd"]
    try:
        log.info("Resolving config in %s", cwd)
        cfg = get_config(cwd)
    except ConfigError as e:
        _fail(ctx, e)

    if cfg is None:
        _not_configured(cwd)

    paths = cfg.resolved_paths.model_dump(by_alias=True)
    if ctx.obj.get("json"):
        click.echo(json.dumps(paths, indent=2, sort_keys=True))
        return

    rows = [[key, value] for key, value in paths.items()]
    log.info("Rendering %d paths", len(rows))
    click.echo(tabulate(rows, headers=["KEY", "PATH"]))


@config.command("raw")
@click.pass_context
def config_raw(ctx: click.Context) -> None:
    """Show the validated configuration without resolving paths."""
    log = logging.getLogger("compctl.config")
    cwd = ctx.obj["cwd"]
    try:
        log.info("Loading config from %s", find_config_file("components", cwd) or cwd)
        raw: Optional[RawConfig] = get_raw_config(cwd)
    except ConfigError as e:
        _fail(ctx, e)

    if raw is None:
        _not_configured(cwd)

    if ctx.obj.get("json"):
        click.echo(raw.to_json())
        return

    click.echo(tabulate(_flatten(raw.to_dict()), headers=["FIELD", "VALUE"]))


@config.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Check that components.json is valid and its aliases resolve."""
    log = logging.getLogger("compctl.config")
    cwd = ctx.obj["cwd"]
    try:
        log.info("Validating config in %s", cwd)
        cfg = get_config(cwd)
    except ConfigError as e:
        _fail(ctx, e)

    if cfg is None:
        _not_configured(cwd)

    if ctx.obj.get("json"):
        click.echo(json.dumps({"valid": True, "cwd": cwd}, indent=2, sort_keys=True))
        return
    click.echo("Configuration is valid")


def main() -> None:  # entry point
    cli(standalone_mode=True)


if __name__ == "__main__":  # pragma: no cover
    main()
