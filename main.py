#!/usr/bin/env python3
"""
Main CLI for the Font Library
=============================

This CLI installs, inspects and uninstalls font families and their font
face assets.
"""

import json
import logging
import sys
from pathlib import Path

import click

# Setup logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

try:
    from src.font_library.core.config import FontLibraryConfig
    from src.font_library.core.exceptions import FontLibraryError
    from src.font_library.core.models import UploadedFile
    from src.font_library.library.manager import FontLibrary
except ImportError as e:
    logger.exception(f"Import failed: {e}")
    logger.exception(
        "Make sure you have all dependencies installed and the project is properly set up"
    )
    sys.exit(1)


def _parse_uploads(_ctx, _param, values) -> dict[str, UploadedFile]:
    uploads = {}
    for value in values:
        key, sep, path = value.partition("=")
        if not sep or not key or not path:
            raise click.BadParameter(f"expected KEY=PATH, got {value!r}")
        uploads[key] = UploadedFile.from_path(path)
    return uploads


def _open_library(ctx: click.Context) -> FontLibrary:
    config = FontLibraryConfig.from_env_and_yaml(yaml_path=ctx.obj.get("config_path"))
    logging.getLogger().setLevel(
        logging.DEBUG if ctx.obj.get("verbose") else config.log_level.upper()
    )
    return FontLibrary(config)


def _fail(error: FontLibraryError) -> None:
    logger.error(f"{error.code}: {error.message}")
    click.echo(json.dumps(error.to_dict(), default=str), err=True)
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to font library configuration YAML file (optional)",
)
@click.pass_context
def cli(ctx, verbose, config):
    """Font Library CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command(name="install")
@click.argument("family_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--upload",
    "-u",
    "uploads",
    multiple=True,
    callback=_parse_uploads,
    help="Uploaded font file for local sources, as KEY=PATH (repeatable)",
)
@click.pass_context
def install(ctx, family_file, uploads):
    """Install the font family defined in FAMILY_FILE (JSON)."""
    try:
        library = _open_library(ctx)
        family = library.install(family_file.read_text(encoding="utf-8"), uploads)
        click.echo(json.dumps(family.to_dict(), indent=2))
    except FontLibraryError as e:
        _fail(e)


@cli.command(name="uninstall")
@click.argument("slug")
@click.pass_context
def uninstall(ctx, slug):
    """Uninstall the font family SLUG and delete its font files."""
    try:
        library = _open_library(ctx)
        library.uninstall(slug)
        click.echo(f"Uninstalled {slug}")
    except FontLibraryError as e:
        _fail(e)


@cli.command(name="show")
@click.argument("slug")
@click.pass_context
def show(ctx, slug):
    """Print the stored definition of font family SLUG."""
    try:
        library = _open_library(ctx)
        click.echo(json.dumps(library.get_family(slug).to_dict(), indent=2))
    except FontLibraryError as e:
        _fail(e)


@cli.command(name="list")
@click.pass_context
def list_families(ctx):
    """List installed font families."""
    try:
        library = _open_library(ctx)
        families = library.list_families()
    except FontLibraryError as e:
        _fail(e)
        return

    if not families:
        click.echo("No font families installed.")
        return

    for family in families:
        click.echo(f"{family.slug}\t{family.name}\t{len(family.font_face)} font faces")


if __name__ == "__main__":
    cli()
