"""dataprops CLI -- query property files from the shell."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler

from dataprops import __version__
from dataprops.config import load_config
from dataprops.errors import PropertiesError
from dataprops.properties import LookupResult, Properties

console = Console(stderr=True)


def _parse_defines(defines: tuple[str, ...]) -> dict[str, str]:
    """Turn ``KEY=VALUE`` option values into a dict."""
    result: dict[str, str] = {}
    for item in defines:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected KEY=VALUE, got {item!r}", param_hint="--define")
        result[key.strip()] = value
    return result


def _load(ctx: click.Context, files: tuple[str, ...]) -> Properties:
    """Build a Properties object from --define presets and the given (or configured) files."""
    cfg = ctx.obj["config"]
    names = list(files) or cfg.files
    if not names:
        raise click.UsageError("No property files given and none configured in .dataprops.toml.")
    try:
        props = Properties(ctx.obj["defines"], path=ctx.obj["path"])
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--define")
    try:
        for name in names:
            props.parse_file(name)
    except PropertiesError as e:
        raise click.ClickException(str(e))
    props.set_context(ctx.obj["context"])
    if ctx.obj["verbose"]:
        console.print(f"[dim]Loaded {len(props.store)} properties from {', '.join(names)}[/dim]")
    return props


@click.group()
@click.option(
    "--path", "-I", "paths", multiple=True,
    help="Directory to search for property files (repeatable; searched before DATAPROPS_PATH and config).",
)
@click.option("--context", "-c", default=None, help="Lookup context (default: DATAPROPS_CONTEXT or config).")
@click.option("--define", "-D", "defines", multiple=True, metavar="KEY=VALUE", help="Preset a property (repeatable).")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.version_option(__version__, prog_name="dataprops")
@click.pass_context
def cli(
    ctx: click.Context,
    paths: tuple[str, ...],
    context: str | None,
    defines: tuple[str, ...],
    verbose: bool,
) -> None:
    """Query hierarchical property files."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    cfg = load_config()
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    ctx.obj["path"] = cfg.resolve_path(list(paths))
    ctx.obj["context"] = cfg.resolve_context(context)
    ctx.obj["defines"] = _parse_defines(defines)
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# dump
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("files", nargs=-1)
@click.option("--root", "-r", default="", help="Only list properties below this key.")
@click.option("--expand", "-x", is_flag=True, help="Expand values before listing them.")
@click.pass_context
def dump(ctx: click.Context, files: tuple[str, ...], root: str, expand: bool) -> None:
    """List all properties in property-file syntax."""
    props = _load(ctx, files)
    click.echo(props.dump(root, expand=expand), nl=False)


# ---------------------------------------------------------------------------
# get / keys
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("key")
@click.argument("files", nargs=-1)
@click.option("--default", "-d", "default", default=None, help="Value to use when KEY has no value.")
@click.option("--strict", is_flag=True, help="Fail when no value can be established.")
@click.pass_context
def get(ctx: click.Context, key: str, files: tuple[str, ...], default: str | None, strict: bool) -> None:
    """Print the expanded value of KEY."""
    props = _load(ctx, files)
    try:
        if strict and default is None:
            value = props.get_strict(key)
        else:
            value = props.get(key, default)
    except PropertiesError as e:
        raise click.ClickException(str(e))
    if value is None:
        if props.last_lookup() is LookupResult.NOT_FOUND:
            raise click.ClickException(f"Key '{key}' not found.")
        return
    click.echo(value)


@cli.command("keys")
@click.argument("files", nargs=-1)
@click.option("--key", "-k", default="", help="Parent key (default: top level).")
@click.pass_context
def list_keys(ctx: click.Context, files: tuple[str, ...], key: str) -> None:
    """Print the immediate subkeys of a key, in definition order."""
    props = _load(ctx, files)
    try:
        names = props.child_keys(key)
    except PropertiesError as e:
        raise click.ClickException(str(e))
    for name in names:
        click.echo(name)


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------

@cli.command("export")
@click.argument("files", nargs=-1)
@click.option("--root", "-r", default="", help="Only export properties below this key.")
@click.option(
    "--format", "fmt",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format.",
)
@click.option(
    "--output", "-o",
    type=click.Path(exists=False),
    default=None,
    help="Output file path (default: stdout).",
)
@click.pass_context
def export(ctx: click.Context, files: tuple[str, ...], root: str, fmt: str, output: str | None) -> None:
    """Export properties as nested JSON or YAML.

    Keys whose subkeys are all numbers become lists.
    """
    props = _load(ctx, files)
    data = props.data(root)
    if fmt == "json":
        text = json.dumps(data, indent=2) + "\n"
    else:
        text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    if output:
        Path(output).write_text(text)
        console.print(f"[green]Exported {root or 'all properties'} to {output}[/green]")
    else:
        click.echo(text, nl=False)
