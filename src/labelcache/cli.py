"""Click CLI for labelcache — inspect and manage a label image cache."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from labelcache.cache.repository import ImageCacheRepository
from labelcache.config.hierarchy import load_config_hierarchy
from labelcache.errors.exceptions import LabelCacheError
from labelcache.types import LabelResponse, LabelWarning

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging based on verbosity level."""
    level = logging.getLevelName(default_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


def _resolve_root(root: str | None, verbose: int) -> Path:
    config = load_config_hierarchy(image_root=root)
    _setup_logging(verbose, str(config.get("log_level", "WARNING")))
    return Path(config["image_root"]).expanduser()


root_option = click.option(
    "--root",
    type=click.Path(file_okay=False),
    default=None,
    help="Cache directory (defaults to the configured image_root).",
)
verbose_option = click.option(
    "-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)."
)


@click.group()
@click.version_option(package_name="labelcache")
def cli() -> None:
    """labelcache — cache of rendered label images."""


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--name", type=str, default=None, help="Logical image name (defaults to first file).")
@click.option("--multi-page", is_flag=True, default=False, help="Store the files as pages of one label.")
@click.option("--warning", "warnings", multiple=True, help="Attach a rendering warning (repeatable).")
@root_option
@verbose_option
def store(
    files: tuple[str, ...],
    name: str | None,
    multi_page: bool,
    warnings: tuple[str, ...],
    root: str | None,
    verbose: int,
) -> None:
    """Store PNG files as one batch."""
    if name and len(files) > 1 and not multi_page:
        raise click.UsageError("--name needs --multi-page when storing more than one file.")

    image_root = _resolve_root(root, verbose)

    # Pages share one name; separate labels keep their own file names.
    labels = [
        LabelResponse(
            image_file_name=name or Path(files[0] if multi_page else f).name,
            label=Path(f).read_bytes(),
            has_multiple_labels=multi_page,
            label_index=index,
            warnings=[LabelWarning(message=w) for w in warnings],
        )
        for index, f in enumerate(files)
    ]

    repo = ImageCacheRepository()
    try:
        stored = asyncio.run(repo.store_label_images(image_root, labels))
    except LabelCacheError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    for image in stored:
        console.print(f"[green]Stored[/green] id {image.id}: {image.full_path}")
    if len(stored) != len(labels):
        error_console.print(
            f"[yellow]{len(labels) - len(stored)} image(s) could not be written.[/yellow]"
        )
        sys.exit(1)


@cli.command("list")
@root_option
@verbose_option
def list_images(root: str | None, verbose: int) -> None:
    """List cached images, oldest first."""
    image_root = _resolve_root(root, verbose)
    images = asyncio.run(ImageCacheRepository().get_all(image_root))

    table = Table(title="Cached Images", show_header=True)
    table.add_column("Id", style="cyan", justify="right")
    table.add_column("Name")
    table.add_column("Created")
    table.add_column("Warnings")

    for image in images:
        created = image.timestamp.strftime("%Y-%m-%d %H:%M:%S") if image.timestamp else "-"
        table.add_row(
            str(image.id),
            image.name,
            created,
            "yes" if image.metadata_path.exists() else "no",
        )

    console.print(table)


@cli.command()
@click.argument("image_name")
@root_option
@verbose_option
def show(image_name: str, root: str | None, verbose: int) -> None:
    """Show the rendering warnings recorded for an image."""
    image_root = _resolve_root(root, verbose)
    image_path = image_root / image_name
    if not image_path.is_file():
        error_console.print(f"[red]Error:[/red] {image_name} not found in {image_root}")
        sys.exit(1)

    try:
        metadata = ImageCacheRepository.load_metadata(image_path)
    except ValueError as e:
        error_console.print(f"[red]Invalid metadata:[/red] {e}")
        sys.exit(1)

    if metadata is None:
        console.print(f"{image_name}: no warnings recorded.")
        return

    table = Table(title=f"Warnings for {image_name}", show_header=True)
    table.add_column("Command", style="cyan")
    table.add_column("Byte")
    table.add_column("Parameter")
    table.add_column("Message")
    for warning in metadata.warnings:
        table.add_row(
            warning.zpl_command or "-",
            "-" if warning.byte_index is None else str(warning.byte_index),
            "-" if warning.parameter_number is None else str(warning.parameter_number),
            warning.message,
        )
    console.print(table)


@cli.command()
@click.argument("image_name")
@root_option
@verbose_option
def delete(image_name: str, root: str | None, verbose: int) -> None:
    """Delete one cached image and its metadata."""
    image_root = _resolve_root(root, verbose)
    deleted = asyncio.run(ImageCacheRepository().delete_image(image_root, image_name))
    if not deleted:
        error_console.print(f"[yellow]Nothing deleted:[/yellow] {image_name} not found.")
        sys.exit(1)
    console.print(f"[green]Deleted {image_name}.[/green]")


@cli.command()
@click.confirmation_option(prompt="Are you sure you want to clear the image cache?")
@root_option
@verbose_option
def clear(root: str | None, verbose: int) -> None:
    """Delete every cached image and its metadata."""
    image_root = _resolve_root(root, verbose)
    if not image_root.is_dir():
        console.print("Cache directory does not exist; nothing to clear.")
        return

    if not asyncio.run(ImageCacheRepository().clear_all(image_root)):
        error_console.print("[red]Some images could not be deleted.[/red]")
        sys.exit(1)
    console.print("[green]Image cache cleared.[/green]")


@cli.command()
@root_option
@verbose_option
def stats(root: str | None, verbose: int) -> None:
    """Show cache statistics."""
    image_root = _resolve_root(root, verbose)
    cache_stats = asyncio.run(ImageCacheRepository().stats(image_root))

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    table.add_row("Directory", str(image_root))
    table.add_row("Images", str(cache_stats.images))
    table.add_row("With warnings", str(cache_stats.sidecars))
    table.add_row("Size (MB)", f"{cache_stats.size_mb:.1f}")
    table.add_row("Next id", "-" if cache_stats.next_id is None else str(cache_stats.next_id))

    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    cli()
