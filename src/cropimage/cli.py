"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from typing import Optional

import typer
from rich import print

from .adapters import get_adapter, parse_querystring
from .constraints import constrain
from .errors import ConfigError, CropImageError
from .handles import DragHandle
from .models import CropRect, CropSelection
from .schema import config_from_mapping

app = typer.Typer(help="Constrain crop selections and translate them to RIAPI query strings")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CropImageError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _parse_pair(text: Optional[str], separator: str, label: str) -> Optional[dict[str, float]]:
    """Parse ``"16:9"`` or ``"400x300"`` style options into a width/height mapping."""
    if text is None:
        return None
    width, sep, height = text.lower().partition(separator)
    try:
        if not sep:
            raise ValueError(text)
        return {"width": float(width), "height": float(height)}
    except ValueError:
        raise ConfigError(f"{label} must look like W{separator}H, got {text!r}") from None


def _print_selection(selection: CropSelection) -> None:
    crop = selection.crop
    pad = selection.pad
    print(f"[bold]crop[/bold] {crop.x1:.6g},{crop.y1:.6g},{crop.x2:.6g},{crop.y2:.6g}")
    print(f"[bold]pad[/bold]  {pad.top:.6g},{pad.right:.6g},{pad.bottom:.6g},{pad.left:.6g}")


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command("constrain")
@_handle_errors
def constrain_command(
    x1: float = typer.Argument(..., help="Left edge as a fraction of the source width"),
    y1: float = typer.Argument(..., help="Top edge as a fraction of the source height"),
    x2: float = typer.Argument(..., help="Right edge as a fraction of the source width"),
    y2: float = typer.Argument(..., help="Bottom edge as a fraction of the source height"),
    width: int = typer.Option(..., "--width", help="Source width in pixels"),
    height: int = typer.Option(..., "--height", help="Source height in pixels"),
    mode: str = typer.Option("crop", "--mode", help="crop or crop-pad"),
    aspect: Optional[str] = typer.Option(None, "--aspect", help="Aspect-ratio lock such as 16:9"),
    min_size: Optional[str] = typer.Option(None, "--min", help="Minimum size in pixels, e.g. 400x300"),
    max_size: Optional[str] = typer.Option(None, "--max", help="Maximum size in pixels"),
    snap: Optional[float] = typer.Option(None, "--snap", help="Edge snap threshold"),
    even_padding: bool = typer.Option(False, "--even-padding", help="Mirror padding on opposite sides"),
    handle: Optional[str] = typer.Option(None, "--handle", help="Handle that drives the aspect anchor"),
    adapter: str = typer.Option("generic", "--adapter", help="generic, imageflow or imageresizer"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Run the constraint pipeline over a raw crop rectangle."""

    _configure_logging(verbose)
    data = {
        "mode": mode,
        "aspect_ratio": _parse_pair(aspect, ":", "--aspect"),
        "min_size": _parse_pair(min_size, "x", "--min"),
        "max_size": _parse_pair(max_size, "x", "--max"),
        "even_padding": even_padding,
        "source_width": width,
        "source_height": height,
    }
    if snap is not None:
        data["edge_snap_threshold"] = snap
    config = config_from_mapping(data)
    if handle is not None and DragHandle.coerce(handle) is None:
        raise ConfigError(f"Unknown handle {handle!r}")

    selection = constrain(CropRect(x1, y1, x2, y2), config, handle)
    _print_selection(selection)
    result = get_adapter(adapter).to_params(selection, width, height)
    typer.echo(result.querystring)


@app.command("parse")
@_handle_errors
def parse_command(
    querystring: str = typer.Argument(..., help="Query string such as ?crop=0.1,0.1,0.9,0.9"),
    width: int = typer.Option(..., "--width", help="Source width in pixels"),
    height: int = typer.Option(..., "--height", help="Source height in pixels"),
    adapter: str = typer.Option("generic", "--adapter", help="generic, imageflow or imageresizer"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Decode a RIAPI query string into a crop selection."""

    _configure_logging(verbose)
    selection = get_adapter(adapter).from_params(parse_querystring(querystring), width, height)
    if selection is None:
        typer.echo("Error: query string does not contain a valid crop", err=True)
        raise typer.Exit(1)
    _print_selection(selection)


if __name__ == "__main__":
    app()
