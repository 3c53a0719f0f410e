"""Command line entry point: ``sprest``."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import httpx
import requests

from .client import SharePointError
from .config import settings
from .models import FileInfo, FolderInfo
from .web import SharePointRest

logger = logging.getLogger(__name__)

_FAILURES = (SharePointError, requests.RequestException, httpx.HTTPError, OSError, ValueError)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _site(ctx: click.Context) -> SharePointRest:
    if "sp" not in ctx.obj:
        cfg = settings
        if ctx.obj.get("site_url"):
            cfg = settings.model_copy(update={"site_url": ctx.obj["site_url"].rstrip("/")})
        errors = cfg.validate_settings()
        if errors:
            for error in errors:
                click.echo(f"Config error: {error}", err=True)
            ctx.exit(1)
        ctx.obj["sp"] = SharePointRest(settings=cfg)
    return ctx.obj["sp"]


def _fail(action: str, exc: Exception) -> None:
    logger.debug("%s failed", action, exc_info=exc)
    click.echo(f"Error: {action} failed: {exc}", err=True)
    sys.exit(1)


@click.group()
@click.option("--site-url", help="Site url (defaults to $SHAREPOINT_SITE_URL)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, site_url: str | None, verbose: bool) -> None:
    """Browse and manage SharePoint folders and files."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["site_url"] = site_url


@cli.command("ls")
@click.argument("folder")
@click.pass_context
def list_folder(ctx: click.Context, folder: str) -> None:
    """List sub folders and files of a server relative FOLDER."""
    target = _site(ctx).folder(folder)
    try:
        folders = [
            FolderInfo.from_payload(data)
            for data in target.folders.select("Name", "ServerRelativeUrl", "ItemCount").get()
        ]
        files = [
            FileInfo.from_payload(data)
            for data in target.files.select("Name", "ServerRelativeUrl", "Length").get()
        ]
    except _FAILURES as exc:
        _fail("ls", exc)
        return

    for info in sorted(folders, key=lambda f: f.name.lower()):
        click.echo(f"d {info.item_count:>10} {info.name}/")
    for info in sorted(files, key=lambda f: f.name.lower()):
        click.echo(f"- {info.length:>10} {info.name}")


@cli.command("mkdir")
@click.argument("parent")
@click.argument("name")
@click.pass_context
def make_folder(ctx: click.Context, parent: str, name: str) -> None:
    """Create folder NAME under the server relative PARENT folder."""
    try:
        result = _site(ctx).folder(parent).folders.add(name)
    except _FAILURES as exc:
        _fail("mkdir", exc)
        return
    created = result.data.get("ServerRelativeUrl", name) if isinstance(result.data, dict) else name
    click.echo(f"Created {created}")


@cli.command("rm")
@click.argument("folder")
@click.option("--recycle", is_flag=True, help="Move to the recycle bin instead of deleting")
@click.pass_context
def remove_folder(ctx: click.Context, folder: str, recycle: bool) -> None:
    """Delete the server relative FOLDER."""
    target = _site(ctx).folder(folder)
    try:
        if recycle:
            recycle_id = target.recycle()
            click.echo(f"Recycled {folder} ({recycle_id})")
        else:
            target.delete()
            click.echo(f"Deleted {folder}")
    except _FAILURES as exc:
        _fail("rm", exc)


@cli.command("cat")
@click.argument("file")
@click.pass_context
def show_file(ctx: click.Context, file: str) -> None:
    """Print the content of the server relative FILE."""
    try:
        text = _site(ctx).file(file).get_text()
    except _FAILURES as exc:
        _fail("cat", exc)
        return
    click.echo(text, nl=False)


@cli.command("upload")
@click.argument("local", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("folder")
@click.option("--no-overwrite", is_flag=True, help="Fail if the file already exists")
@click.pass_context
def upload_file(ctx: click.Context, local: Path, folder: str, no_overwrite: bool) -> None:
    """Upload LOCAL into the server relative FOLDER."""
    try:
        _site(ctx).folder(folder).files.add(
            local.name, local.read_bytes(), should_overwrite=not no_overwrite
        )
    except _FAILURES as exc:
        _fail("upload", exc)
        return
    click.echo(f"Uploaded {local.name} to {folder}")


def main() -> None:
    cli(prog_name="sprest")


if __name__ == "__main__":
    main()
