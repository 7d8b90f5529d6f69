"""
flex2sr - FLEX Binary to S-Record Converter
===========================================

Converts a FLEX binary (.CMD, .BIN) into Motorola S-records.

The output starts with an S0 header naming the input file and ends with
an S5 record count and, when the binary has no transfer address, an
S9030000FC placeholder.

Records are written as long as those in the input file. Pass the output
through srec_cat(1) or similar if you need fixed-length records.

Usage
-----
    $ flex2sr prog.cmd prog.s19
    $ flex2sr -v prog.cmd prog.s19

Exit Codes
----------
0 - Input converted completely
1 - Unrecognised record type in the input
2 - Invalid arguments, or a file could not be opened
"""

from pathlib import Path

import click

from flex_tools import __version__
from flex_tools.cli import setup_logging
from flex_tools.cli.errors import handle_cli_exception
from flex_tools.convert import convert_flex_file


@click.command()
@click.argument(
    "infile",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument(
    "outfile",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(__version__, "--version", "-V", prog_name="flex2sr")
def main(infile: Path, outfile: Path, verbose: bool) -> None:
    """
    FLEX binary to Motorola S-record converter.

    Reads the FLEX binary INFILE and writes S-records to OUTFILE.

    \b
    It is recommended that the output be put through srec_cat(1)
    or similar before further use, as this program generates records
    as long as those in the input file.
    """
    setup_logging(verbose)

    try:
        result = convert_flex_file(infile, outfile)
        result.raise_for_error()
    except Exception as e:
        handle_cli_exception(e, verbose, "Conversion")

    stats = result.stats
    if verbose:
        click.echo(f"Converted {infile} -> {outfile}")
        click.echo(f"  Data records: {stats.data_records}")
        click.echo(f"  Transfer address records: {stats.transfer_records}")
        click.echo(f"  S-records written: {stats.records_written}")


if __name__ == "__main__":
    main()
