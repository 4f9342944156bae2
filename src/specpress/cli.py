from __future__ import annotations

"""Command line interface for specpress using Typer."""

from pathlib import Path
from typing import Dict, List, Optional

import json
import logging

import typer
import yaml
from pydantic import ValidationError

from ._typer import reported_as_bad_parameter
from .config import Settings, load_settings
from .core import audio, image
from .core.records import AUDIO_MAGIC, IMAGE_MAGIC
from .utils.logging import get_logger
from .viz.analysis import analyze_file

app = typer.Typer(help="Fourier-domain compression of WAV audio and bitmap images")
logger = logging.getLogger(__name__)

AUDIO_SOURCE = ".wav"
IMAGE_SOURCE = ".bmp"


def _parse_override_value(raw: str) -> object:
    lower = raw.lower()
    if lower in {"true", "false"}:
        return lower == "true"
    if lower in {"null", "none"}:
        return None
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        pass
    if raw.startswith("[") or raw.startswith("{"):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            raise typer.BadParameter(f"invalid JSON override value: {raw}") from None
    return raw


def _ensure_path(settings: Settings, keys: List[str]) -> None:
    current: object = settings
    for key in keys[:-1]:
        if not hasattr(current, key):
            raise typer.BadParameter(f"unknown configuration key: {'.'.join(keys)}")
        current = getattr(current, key)
    if not hasattr(current, keys[-1]):
        raise typer.BadParameter(f"unknown configuration key: {'.'.join(keys)}")


def _apply_override(data: Dict[str, object], keys: List[str], value: object) -> None:
    target = data
    for key in keys[:-1]:
        existing = target.get(key)
        if not isinstance(existing, dict):
            existing = {}
            target[key] = existing
        target = existing
    target[keys[-1]] = value


def _output_path(source: Path, output_dir: Optional[Path], settings: Settings, suffix: str) -> Path:
    directory = output_dir if output_dir is not None else Path(settings.output.directory)
    directory.mkdir(parents=True, exist_ok=True)
    return directory / f"{source.stem}{suffix}"


def _refuse_overwrite(output: Path, force: bool) -> None:
    if output.exists() and not force:
        raise typer.BadParameter(
            f"{output} already exists, pass --force to overwrite it", param_hint="--output-dir"
        )


@app.callback()
def init(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        dir_okay=False,
        file_okay=True,
        exists=False,
        help="Path to a YAML or JSON configuration file.",
    ),
    set_overrides: List[str] = typer.Option(
        [],
        "--set",
        help="Override configuration values using dotted paths, e.g. audio.freq_cutoff=4000",
    ),
) -> None:
    """Initialise the Typer context with validated settings."""

    if config is not None and not config.exists():
        raise typer.BadParameter(f"configuration file not found: {config}")

    try:
        settings = load_settings(config) if config else Settings()
    except (FileNotFoundError, TypeError, json.JSONDecodeError, yaml.YAMLError, ValidationError) as exc:
        raise typer.BadParameter(f"failed to load configuration: {exc}") from exc

    if set_overrides:
        data = settings.model_dump()
        for override in set_overrides:
            if "=" not in override:
                raise typer.BadParameter(
                    "overrides must be of the form --set section.key=value"
                )
            key, raw_value = override.split("=", 1)
            if not key:
                raise typer.BadParameter("override key cannot be empty")
            keys = key.split(".")
            _ensure_path(settings, keys)
            value = _parse_override_value(raw_value)
            _apply_override(data, keys, value)
        try:
            settings = Settings.model_validate(data)
        except ValidationError as exc:
            raise typer.BadParameter(f"invalid configuration override: {exc}") from exc

    get_logger("specpress", level=settings.logging.level)
    logger.debug("settings: %s", settings.model_dump())
    ctx.obj = settings


@app.command()
def compress(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="WAV or BMP file to compress"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", file_okay=False),
    freq_cutoff: Optional[float] = typer.Option(
        None, "--freq-cutoff", "-c", min=0.0, help="Highest frequency (Hz) kept in WAV files"
    ),
    level: Optional[float] = typer.Option(
        None, "--level", "-l", help="Compression level (> 1) for bitmap files"
    ),
) -> None:
    """Compress ``FILE``.

    ``.wav`` input is low-passed at ``--freq-cutoff`` and written as
    ``<stem>.cmp``; ``.bmp`` input keeps ``1/level`` of each spectrum axis and
    is written as ``<stem>.cmpi``.
    """

    cfg: Settings = ctx.obj
    suffix = file.suffix.lower()
    with reported_as_bad_parameter("FILE"):
        if suffix == AUDIO_SOURCE:
            cutoff = freq_cutoff if freq_cutoff is not None else cfg.audio.freq_cutoff
            output = _output_path(file, output_dir, cfg, cfg.audio.extension)
            typer.echo(f"Compressing to: {output}")
            record = audio.compress_file(file, output, cutoff)
            typer.echo(
                f"kept {record.truncated_spectrum.size} of {record.padded_sample_count} bins"
            )
        elif suffix == IMAGE_SOURCE:
            compression_level = level if level is not None else cfg.image.compression_level
            output = _output_path(file, output_dir, cfg, cfg.image.extension)
            typer.echo(f"Compressing to: {output}")
            record = image.compress_file(file, output, compression_level)
            corner = record.corner_size
            typer.echo(
                f"kept {corner.width}x{corner.height} of "
                f"{record.transformed_size.width}x{record.transformed_size.height} coefficients"
            )
        else:
            raise typer.BadParameter(f"file suffix unrecognized: {file.name}", param_hint="FILE")


@app.command()
def decompress(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Compressed record"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", file_okay=False),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing output file"),
) -> None:
    """Decompress a record written by ``compress``.

    The record type is taken from its header, so the file suffix does not
    matter.  Audio records become ``<stem>.wav``, image records ``<stem>.bmp``.
    An existing file of that name, such as the original input, is only
    replaced with ``--force``.
    """

    cfg: Settings = ctx.obj
    with open(file, "rb") as fh:
        magic = fh.read(len(AUDIO_MAGIC))

    with reported_as_bad_parameter("FILE"):
        if magic == AUDIO_MAGIC:
            output = _output_path(file, output_dir, cfg, AUDIO_SOURCE)
            _refuse_overwrite(output, force)
            typer.echo(f"Decompressing to: {output}")
            waveform = audio.decompress_file(file, output)
            typer.echo(f"restored {waveform.sample_size} samples at {waveform.sample_rate} Hz")
        elif magic == IMAGE_MAGIC:
            output = _output_path(file, output_dir, cfg, IMAGE_SOURCE)
            _refuse_overwrite(output, force)
            typer.echo(f"Decompressing to: {output}")
            pixels = image.decompress_file(file, output)
            typer.echo(f"restored {pixels.shape[1]}x{pixels.shape[0]} image")
        else:
            raise typer.BadParameter(f"not a specpress record: {file.name}", param_hint="FILE")


@app.command()
def analyze(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="WAV or BMP file"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", file_okay=False),
    log_factor: Optional[float] = typer.Option(
        None, "--log-factor", help="Exponent applied to normalised spectrum magnitudes"
    ),
) -> None:
    """Plot ``FILE`` in the time/colour domain next to its spectrum."""

    cfg: Settings = ctx.obj
    directory = output_dir if output_dir is not None else Path(cfg.output.directory)
    factor = log_factor if log_factor is not None else cfg.analysis.log_factor
    if factor <= 0:
        raise typer.BadParameter("log factor must be positive", param_hint="--log-factor")
    with reported_as_bad_parameter("FILE"):
        figure = analyze_file(file, directory, log_factor=factor, figure_name=cfg.analysis.figure_name)
    typer.echo(f"Analysis written to: {figure}")


def main() -> None:
    """Execute the Typer application."""

    app()


if __name__ == "__main__":
    main()
