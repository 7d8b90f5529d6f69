"""
mkflexfs - FLEX Blank Disk Image Creator
========================================

Creates a blank, formatted FLEX disk image with an empty directory and
every data sector in the free chain.

Usage
-----
    $ mkflexfs -o blank.dsk
    $ mkflexfs -t 40 -s 18 -n WORK -v 3 -o work.dsk
    $ mkflexfs -t 35 -s 10 > small.dsk

Standard output is the default destination, but the image is never
written to a terminal.
"""

import logging

import click

from flex_tools import __version__
from flex_tools.cli import setup_logging
from flex_tools.cli.errors import handle_cli_exception
from flex_tools.diskimage import (
    DiskConfig,
    MAX_SECTORS,
    MAX_TRACKS,
    MIN_SECTORS,
    MIN_TRACKS,
    write_disk_image,
)

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "-t", "--tracks",
    type=click.IntRange(MIN_TRACKS, MAX_TRACKS),
    default=77,
    show_default=True,
    help="Number of tracks",
)
@click.option(
    "-s", "--sectors",
    type=click.IntRange(MIN_SECTORS, MAX_SECTORS),
    default=15,
    show_default=True,
    help="Sectors per track",
)
@click.option(
    "-n", "--name",
    "volume_name",
    default="",
    help="Volume name, at most 11 characters",
)
@click.option(
    "-v", "--volume-number",
    type=click.IntRange(0, 0xFFFF),
    default=0,
    show_default=True,
    help="Volume number",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, allow_dash=True),
    default="-",
    show_default=True,
    help="Output image file, - for standard output",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(__version__, "--version", "-V", prog_name="mkflexfs")
def main(
    tracks: int,
    sectors: int,
    volume_name: str,
    volume_number: int,
    output: str,
    verbose: bool,
) -> None:
    """
    FLEX blank disk image creator.

    \b
    Examples:
      mkflexfs -o blank.dsk
      mkflexfs -t 40 -s 18 -n WORK -v 3 -o work.dsk
    """
    setup_logging(verbose)

    config = DiskConfig(
        tracks=tracks,
        sectors=sectors,
        volume_name=volume_name,
        volume_number=volume_number,
    )

    if output == "-":
        stream = click.get_binary_stream("stdout")
        if stream.isatty():
            raise click.UsageError(
                "Refusing to write a disk image to a terminal; use -o FILE"
            )
    else:
        stream = None

    try:
        config.validate()
        if stream is not None:
            written = write_disk_image(config, stream)
            stream.flush()
        else:
            with open(output, "wb") as f:
                written = write_disk_image(config, f)
    except Exception as e:
        handle_cli_exception(e, verbose)

    logger.debug(f"Wrote {written} bytes to {output}")
    if stream is None:
        click.echo(
            f"Created {output} ({tracks} tracks, {sectors} sectors, "
            f"{config.free_sectors} free)",
            err=True,
        )


if __name__ == "__main__":
    main()
