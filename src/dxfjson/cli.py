"""Command-line interface for DXF to JSON conversion.

This module provides the main CLI interface using Click for converting
DXF files to structured JSON, inspecting their content and converting
SLI mesh files to the flat JSON layout.
"""

import json
import traceback
from collections import Counter
from pathlib import Path

import click

from .config import SAMPLE_CONFIG, ConfigurationHandler
from .errors import DXFParseError
from .io.json_exporter import JsonExporter
from .io.sli_reader import InvalidSLIData, SLIReader
from .models import Document, ParserConfig
from .process.geometry import compute_extents
from .processor import DXFProcessor


def _load_config(config: Path | None, verbose: bool = False) -> ParserConfig:
    if config is None:
        return ParserConfig()
    if verbose:
        click.echo(f"Loading configuration from: {config.resolve().as_posix()}")
    handler = ConfigurationHandler(config)
    try:
        return handler.load_config()
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Cannot load configuration: {e}") from e


def _read_text(path: Path, encoding: str) -> str:
    try:
        with open(path, encoding=encoding, newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Cannot read file {path}: {e}") from e


def _write_json(exporter: JsonExporter, text: str, output: Path) -> None:
    try:
        exporter.write(text, output)
    except OSError as e:
        raise click.ClickException(str(e)) from e


def _print_section_statistic(document: Document) -> None:
    header_line = f"{'Section':<25} {'Entries':>12} {'Entities':>12} {'Raw Records':>15}"
    header_length = len(header_line)
    click.echo("\n" + "=" * header_length)
    click.echo("SECTION STATISTICS")
    click.echo("=" * header_length)
    click.echo(header_line)
    click.echo("-" * header_length)

    for section in document.sections:
        name = section.name or "<unnamed>"
        entities = len(section.entities)
        raw_records = len(section.raw_records)
        click.echo(f"{name:<25} {len(section.entries):>12} {entities:>12} {raw_records:>15}")
    click.echo("-" * header_length)


def _print_entity_statistic(document: Document) -> None:
    header_line = f"{'Entity':<25} {'Count':>12} {'% Percentage':>12}"
    header_length = len(header_line)
    click.echo("\n" + "=" * header_length)
    click.echo("ENTITY STATISTICS")
    click.echo("=" * header_length)
    click.echo(header_line)
    click.echo("-" * header_length)

    counts = Counter(entity.kind for entity in document.iter_entities())
    total = sum(counts.values())
    for kind, count in sorted(counts.items()):
        percentage = f"{count / total * 100:.1f}%"
        click.echo(f"{kind:<25} {count:>12} {percentage:>12}")
    click.echo("-" * header_length)


def _print_warning_statistic(document: Document, verbose: bool = False) -> None:
    if not document.warnings:
        click.echo("No warnings")
        return

    header_line = f"{'Warning':<30} {'Count':>12}"
    header_length = len(header_line)
    click.echo("\n" + "=" * header_length)
    click.echo("WARNING STATISTICS")
    click.echo("=" * header_length)
    click.echo(header_line)
    click.echo("-" * header_length)

    counts = Counter(warning.kind.value for warning in document.warnings)
    for kind, count in sorted(counts.items()):
        click.echo(f"{kind:<30} {count:>12}")
    click.echo("-" * header_length)
    if not verbose:
        return
    for warning in document.warnings:
        click.echo(f"Line {warning.line}: {warning.message}")


@click.group()
@click.version_option()
def main() -> None:
    """DXF to JSON converter.

    This tool reads textual DXF files and writes a deterministic JSON
    representation of their sections, entities and header variables.
    """
    pass


@main.command()
@click.argument(
    "dxf_file",
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output JSON file path",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="JSON configuration with conversion options",
)
@click.option(
    "--flat",
    is_flag=True,
    default=False,
    help="Export a flat list of entities with their vertices",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Print every warning and the traceback of failures",
)
def convert(dxf_file: Path, output: Path | None, config: Path | None, flat: bool, verbose: bool) -> None:
    """Convert a DXF file to JSON.

    Arguments:
        DXF_FILE: Path to the DXF file to convert
    """
    if output is None:
        output = dxf_file.with_suffix(".json")

    click.echo(f"Converting DXF: {dxf_file.name}")
    parser_config = _load_config(config, verbose)
    text = _read_text(dxf_file, parser_config.encoding)
    processor = DXFProcessor(parser_config)
    exporter = JsonExporter(parser_config)
    try:
        document = processor.parse(text)
    except DXFParseError as e:
        message = f"Conversion failed: {e}"
        try:
            exporter.write(exporter.export_error(e), output)
        except OSError as write_error:
            message += f"\n{write_error}"
        if verbose:
            message += "\n" + traceback.format_exc()
        raise click.ClickException(message) from e

    if flat:
        _write_json(exporter, exporter.export_flat(document), output)
    else:
        _write_json(exporter, exporter.export_document(document), output)
    click.echo(f"JSON written to: {output}")
    _print_warning_statistic(document, verbose)


@main.command()
@click.argument(
    "dxf_file",
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="JSON configuration with conversion options",
)
def inspect(dxf_file: Path, config: Path | None) -> None:
    """Print section, entity and warning statistics of a DXF file."""
    parser_config = _load_config(config)
    text = _read_text(dxf_file, parser_config.encoding)
    try:
        document = DXFProcessor(parser_config).parse(text)
    except DXFParseError as e:
        raise click.ClickException(f"Inspection failed: {e}") from e

    click.echo(f"DXF: {dxf_file.name}")
    version = document.header.get("$ACADVER")
    if version is not None:
        click.echo(f"Version: {version}")
    _print_section_statistic(document)
    _print_entity_statistic(document)
    _print_warning_statistic(document)

    extents = compute_extents(document)
    if extents is None:
        click.echo("Extents: no geometry")
        return
    minimum, maximum = extents
    click.echo(f"Extents min: ({minimum.x:.3f}, {minimum.y:.3f}, {minimum.z:.3f})")
    click.echo(f"Extents max: ({maximum.x:.3f}, {maximum.y:.3f}, {maximum.z:.3f})")


@main.command()
@click.argument(
    "sli_file",
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output JSON file path",
)
def sli(sli_file: Path, output: Path | None) -> None:
    """Convert an SLI mesh file to the flat JSON layout."""
    if output is None:
        output = sli_file.with_suffix(".json")

    click.echo(f"Converting SLI: {sli_file.name}")
    try:
        entities = SLIReader().read_file(sli_file)
    except (OSError, InvalidSLIData) as e:
        raise click.ClickException(f"Conversion failed: {e}") from e

    exporter = JsonExporter()
    _write_json(exporter, exporter.export_flat_entities(entities), output)
    click.echo(f"Converted {len(entities)} elements")
    click.echo(f"JSON written to: {output}")


@main.command()
@click.argument("config_file", type=click.Path(path_type=Path))
def create_config(config_file: Path) -> None:
    """Create a sample configuration file with the default options.

    Parameters
    ----------
    config_file
        Path to the JSON configuration file
    """
    try:
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(SAMPLE_CONFIG, f, indent=2, ensure_ascii=False)

        click.echo(f"Sample configuration created: {config_file}")
        click.echo("Edit this file to change the conversion options.")

    except OSError as e:
        raise click.ClickException(f"Cannot create configuration file: {e}") from e


if __name__ == "__main__":
    main()
