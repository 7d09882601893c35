"""CLI commands using Typer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from drivefs import __version__
from drivefs.config import SettingsError
from drivefs.console import Output
from drivefs.context import create_context
from drivefs.errors import FileSystemError
from drivefs.sync import SyncFileSystem

if TYPE_CHECKING:
    from drivefs.config import Backend
    from drivefs.context import AppContext

app = typer.Typer(
    name="drivefs",
    help="Path-based file operations on local disk or a cloud drive",
    no_args_is_help=True,
)

console = Console()
output = Output(console)


@dataclass
class GlobalOptions:
    """Options given before the command name."""

    config_path: Path | None = None
    backend: Backend | None = None


options = GlobalOptions()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"drivefs v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Settings file (YAML)")
    ] = None,
    backend: Annotated[
        str | None,
        typer.Option(
            "--backend",
            "-b",
            help="Backend: local, drive or memory (an empty store that lasts one command)",
        ),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log remote operations")] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Path-based file operations on local disk or a cloud drive."""
    if backend is not None and backend not in ("local", "drive", "memory"):
        output.show_error(f"Unknown backend '{backend}'")
        raise typer.Exit(1)

    options.config_path = config
    options.backend = backend  # type: ignore[assignment]
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _get_context(context: AppContext | None) -> AppContext:
    """Return the injected context or build one from global options."""
    if context is not None:
        return context
    try:
        created = create_context(options.config_path, options.backend)
    except (SettingsError, ValueError, FileNotFoundError) as e:
        output.show_error(f"Cannot load settings: {e}")
        raise typer.Exit(1) from e
    if created.settings.backend == "memory":
        output.show_warning("Memory backend: nothing is kept after this command exits.")
    return created


def _filesystem(context: AppContext | None) -> SyncFileSystem:
    return SyncFileSystem(_get_context(context).filesystem)


def _fail(message: str, error: Exception) -> typer.Exit:
    output.show_error(f"{message}: {error}")
    return typer.Exit(1)


# ============================================================================
# Query Commands
# ============================================================================


@app.command()
def exists(
    path: Annotated[str, typer.Argument(help="Path to check")],
    _context=None,
) -> None:
    """Check whether a file or directory exists (exit code 1 if not)."""
    fs = _filesystem(_context)
    try:
        found = fs.exists(path)
    except FileSystemError as e:
        raise _fail(f"Cannot check '{path}'", e) from e

    if not found:
        output.show_warning(f"'{path}' does not exist")
        raise typer.Exit(1)
    output.show_success(f"'{path}' exists")


@app.command()
def read(
    path: Annotated[str, typer.Argument(help="File to read")],
    out: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write content to a local file")
    ] = None,
    _context=None,
) -> None:
    """Print a file as UTF-8 text or save it locally."""
    fs = _filesystem(_context)
    try:
        content = fs.read_file(path)
    except FileSystemError as e:
        raise _fail(f"Cannot read '{path}'", e) from e

    if out is not None:
        out.write_bytes(content)
        output.show_success(f"Saved {len(content)} bytes to {out}")
        return
    output.show_text(content.decode("utf-8", errors="replace"))


# ============================================================================
# Mutation Commands
# ============================================================================


@app.command()
def write(
    path: Annotated[str, typer.Argument(help="File to create or replace")],
    text: Annotated[str | None, typer.Option("--text", "-t", help="Text content")] = None,
    source: Annotated[
        Path | None, typer.Option("--input", "-i", help="Local file to upload")
    ] = None,
    _context=None,
) -> None:
    """Create or replace a file."""
    if (text is None) == (source is None):
        output.show_error("Provide exactly one of --text or --input")
        raise typer.Exit(1)

    if text is not None:
        content = text.encode("utf-8")
    else:
        try:
            content = source.read_bytes()
        except OSError as e:
            raise _fail(f"Cannot read '{source}'", e) from e

    fs = _filesystem(_context)
    try:
        fs.create_file(path, content)
    except FileSystemError as e:
        raise _fail(f"Cannot write '{path}'", e) from e
    output.show_success(f"Wrote {len(content)} bytes to '{path}'")


@app.command()
def delete(
    path: Annotated[str, typer.Argument(help="File or directory to delete")],
    _context=None,
) -> None:
    """Delete a file or a directory tree."""
    fs = _filesystem(_context)
    try:
        fs.delete(path)
    except FileSystemError as e:
        raise _fail(f"Cannot delete '{path}'", e) from e
    output.show_success(f"Deleted '{path}'")


@app.command()
def copy(
    src: Annotated[str, typer.Argument(help="Source path")],
    dst: Annotated[str, typer.Argument(help="Destination (trailing / for a directory)")],
    _context=None,
) -> None:
    """Copy a file or directory tree."""
    fs = _filesystem(_context)
    try:
        fs.copy(src, dst)
    except FileSystemError as e:
        raise _fail(f"Cannot copy '{src}' to '{dst}'", e) from e
    output.show_success(f"Copied '{src}' to '{dst}'")


@app.command()
def move(
    src: Annotated[str, typer.Argument(help="Source path")],
    dst: Annotated[str, typer.Argument(help="Destination (trailing / for a directory)")],
    _context=None,
) -> None:
    """Move a file or directory tree."""
    fs = _filesystem(_context)
    try:
        fs.move(src, dst)
    except FileSystemError as e:
        raise _fail(f"Cannot move '{src}' to '{dst}'", e) from e
    output.show_success(f"Moved '{src}' to '{dst}'")


@app.command()
def rename(
    src: Annotated[str, typer.Argument(help="Path to rename")],
    new_name: Annotated[str, typer.Argument(help="New name (no separators)")],
    _context=None,
) -> None:
    """Rename a file or directory in place."""
    fs = _filesystem(_context)
    try:
        fs.rename(src, new_name)
    except FileSystemError as e:
        raise _fail(f"Cannot rename '{src}'", e) from e
    output.show_success(f"Renamed '{src}' to '{new_name}'")


@app.command()
def mkdir(
    path: Annotated[str, typer.Argument(help="Directory to create")],
    _context=None,
) -> None:
    """Create a directory and any missing parents."""
    fs = _filesystem(_context)
    try:
        fs.create_directory(path)
    except FileSystemError as e:
        raise _fail(f"Cannot create '{path}'", e) from e
    output.show_success(f"Created '{path}'")


@app.command("copy-all")
def copy_all(
    src: Annotated[str, typer.Argument(help="Source directory")],
    dst: Annotated[str, typer.Argument(help="Destination directory")],
    _context=None,
) -> None:
    """Overlay every file under SRC onto DST, keeping relative paths."""
    fs = _filesystem(_context)
    try:
        fs.copy_all_files(src, dst)
    except FileSystemError as e:
        raise _fail(f"Cannot copy files from '{src}' to '{dst}'", e) from e
    output.show_success(f"Copied files from '{src}' to '{dst}'")


# ============================================================================
# Config Commands
# ============================================================================


@app.command("config")
def show_config(
    _context=None,
) -> None:
    """Show the effective settings."""
    ctx = _get_context(_context)
    output.show_settings(ctx.settings)


if __name__ == "__main__":
    app()
