"""PAC Toolkit CLI."""

import sys
from pathlib import Path
from typing import Optional

import click
from loguru import logger

from . import __version__
from .formats.ttp import DEFAULT_VALUE_COUNT
from .pac.header import PROFILES, get_profile
from .utils.compression import DEFAULT_LEVEL

LOG_LEVELS = ["WARNING", "INFO", "DEBUG"]

profile_option = click.option(
    "--profile",
    type=click.Choice(sorted(PROFILES)),
    default="standard",
    show_default=True,
    help="BMZ body layout of the archive generation",
)


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by -v flags."""
    level = LOG_LEVELS[min(verbosity, len(LOG_LEVELS) - 1)]
    logger.remove()
    logger.add(
        lambda message: click.echo(message, err=True, nl=False),
        level=level,
        format="{level: <8} {message}",
    )


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", count=True, help="Log more (-v info, -vv debug)")
def main(verbose: int):
    """PAC Toolkit - Extract, list and build PAC game archives.

    \b
    BMZ bodies are inflated to .bmp files on extraction and
    bitmaps are compressed back to .bmz entries when packing.
    """
    configure_logging(verbose)


@main.command()
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_dir", type=click.Path(path_type=Path))
@profile_option
def extract(archive: Path, output_dir: Path, profile: str):
    """Extract all files from ARCHIVE into OUTPUT_DIR.

    OUTPUT_DIR is created if missing; its previous contents are REMOVED.
    """
    from .pac import extract as extract_pac

    click.echo(f"Opening: {archive}")
    click.echo(f"Output:  {output_dir}")

    try:
        report = extract_pac(archive, output_dir, get_profile(profile))
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo()
    click.echo(f"Extracted: {len(report.extracted)} files")
    if not report.ok:
        click.echo(f"Failed:    {report.failed_count} files", err=True)
        for index, error in report.failed:
            click.echo(f"  #{index}: {error}", err=True)
        sys.exit(1)


@main.command(name="list")
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@profile_option
def list_command(archive: Path, profile: str):
    """List the entries of ARCHIVE."""
    from .pac import list_entries

    try:
        click.echo(f"{'Index':<6}{'Size':<10}{'Kind':<16}Name")
        click.echo("-" * 60)
        for row in list_entries(archive, get_profile(profile)):
            name = row.name if isinstance(row.name, str) else f"<undecodable: {row.name}>"
            click.echo(f"{row.index:<6}{row.size:<10}{row.kind:<16}{name}")
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument("source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@profile_option
@click.option(
    "--level",
    type=click.IntRange(0, 9),
    default=DEFAULT_LEVEL,
    show_default=True,
    help="zlib compression level for bitmaps",
)
def pack(source_dir: Path, output: Path, profile: str, level: int):
    """Pack every file in SOURCE_DIR into the archive OUTPUT.

    \b
    - .bmp files are compressed and stored as .bmz entries
    - Everything else is stored as-is
    - SOURCE_DIR must not contain subdirectories
    """
    from .pac import pack as pack_pac

    click.echo(f"Packing: {source_dir}")

    try:
        count = pack_pac(source_dir, output, get_profile(profile), level)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Created: {output} ({count} entries)")


@main.command()
@click.argument("ttp_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Output JSON file path",
)
@click.option(
    "--values",
    type=click.IntRange(0),
    default=DEFAULT_VALUE_COUNT,
    show_default=True,
    help="Number of numeric values per frame",
)
def ttp2json(ttp_file: Path, output: Optional[Path], values: int):
    """Convert a TTP animation file to editable JSON."""
    from .converters import convert_ttp_to_json

    click.echo(f"Loading: {ttp_file}")

    try:
        output = convert_ttp_to_json(ttp_file, output, values)
        click.echo(f"Created: {output}")
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument("json_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Output TTP file path",
)
def json2ttp(json_file: Path, output: Optional[Path]):
    """Convert a JSON document back to a TTP animation file."""
    from .converters import convert_json_to_ttp

    click.echo(f"Loading: {json_file}")

    try:
        output = convert_json_to_ttp(json_file, output)
        click.echo(f"Created: {output}")
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
