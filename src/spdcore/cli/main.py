"""spdcore CLI - decode memory module SPD dumps."""

from __future__ import annotations

from pathlib import Path

import click

from spdcore.exceptions import SpdError
from spdcore.spd.types import SPD_SLOT_COUNT
from spdcore.utils.logging import setup_logging


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Render log lines as JSON")
@click.pass_context
def cli(ctx: click.Context, debug: bool, json_logs: bool) -> None:
    """spdcore - memory module SPD decoder."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    setup_logging(level="DEBUG" if debug else "INFO", json_output=json_logs)


def _load(path: Path) -> bytes:
    from spdcore.core.loader import load_dump

    try:
        return load_dump(path)
    except FileNotFoundError:
        raise click.ClickException(f"No such file: {path}") from None
    except SpdError as exc:
        raise click.ClickException(str(exc)) from exc


def _emit(modules: list, as_table: bool) -> None:
    from spdcore.core.formatters import format_json, format_table

    if as_table:
        click.echo(format_table(modules))
    else:
        click.echo(format_json(modules))


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--list", "as_table", is_flag=True, help="Print a table instead of JSON")
@click.option("--start-slot", type=click.IntRange(0, SPD_SLOT_COUNT - 1), default=0,
              help="Slot number assigned to the first file")
def decode(files: tuple[Path, ...], as_table: bool, start_slot: int) -> None:
    """Decode SPD dump files, one slot per file in argument order."""
    from spdcore.core.scanner import decode_images

    if start_slot + len(files) > SPD_SLOT_COUNT:
        raise click.BadParameter(
            f"{len(files)} file(s) starting at slot {start_slot} exceed "
            f"{SPD_SLOT_COUNT} slots",
            param_hint="FILES",
        )

    images = {start_slot + i: _load(path) for i, path in enumerate(files)}
    try:
        modules = decode_images(images)
    except SpdError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit(modules, as_table)


@cli.command()
@click.argument("directory", type=click.Path(file_okay=False, path_type=Path))
@click.option("--retries", type=click.IntRange(min=1), default=3, help="Read attempts per slot")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=2.0,
              help="Seconds allowed for the read phase")
@click.option("--block-size", type=click.IntRange(min=256), default=1024,
              help="Bytes read per slot; DDR5 profile blocks need at least 700")
@click.option("--list", "as_table", is_flag=True, help="Print a table instead of JSON")
def scan(
    directory: Path, retries: int, timeout: float, block_size: int, as_table: bool
) -> None:
    """Scan slot0..slot7 dump files in DIRECTORY as if they were SPD EEPROMs."""
    from spdcore.core.scanner import scan_slots
    from spdcore.core.source import DirectorySource
    from spdcore.models.scan import ScanConfig

    config = ScanConfig(retries=retries, timeout_s=timeout, block_size=block_size)
    try:
        with DirectorySource(directory, config.base_address, config.slot_count) as source:
            result = scan_slots(source, config)
    except SpdError as exc:
        raise click.ClickException(str(exc)) from exc

    for err in result.errors:
        click.echo(f"Warning: {err}", err=True)
    _emit(result.modules, as_table)


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--slot", type=click.IntRange(0, SPD_SLOT_COUNT - 1), default=0)
def raw(file: Path, slot: int) -> None:
    """Show the decoded fields and a hex dump of one SPD file."""
    from spdcore.core.formatters import format_details, format_hex_dump
    from spdcore.spd.decoder import decode_spd

    data = _load(file)
    module = decode_spd(data, slot=slot)
    click.echo(format_details(module))
    click.echo()
    click.echo(format_hex_dump(module.raw_bytes))


if __name__ == "__main__":
    cli()
