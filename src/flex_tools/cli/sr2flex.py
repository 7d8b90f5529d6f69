"""
sr2flex - S-Record to FLEX Binary Converter
===========================================

Converts Motorola S-records (S0, S1, S5, S9) into a FLEX binary.

Output records are the same size as input records, so they may not be as
large as possible even where data is contiguous. The output is not padded
to a multiple of 252 bytes.

Usage
-----
    $ sr2flex prog.s19 prog.cmd

Exit Codes
----------
0 - Input converted completely
1 - Bad data between records, unsupported record type, or bad checksum
2 - Invalid arguments, or a file could not be opened
"""

from pathlib import Path

import click

from flex_tools import __version__
from flex_tools.cli import setup_logging
from flex_tools.cli.errors import handle_cli_exception
from flex_tools.convert import convert_srec_file


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
@click.version_option(__version__, "--version", "-V", prog_name="sr2flex")
def main(infile: Path, outfile: Path, verbose: bool) -> None:
    """
    Motorola S-record to FLEX binary converter.

    Reads S-records from INFILE and writes a FLEX binary to OUTFILE.

    \b
    Output records are the same size as input records, so may not
    be as large as possible even where data is contiguous.
    Output is not padded to a multiple of 252 bytes in size.
    """
    setup_logging(verbose)

    try:
        result = convert_srec_file(infile, outfile)
        result.raise_for_error()
    except Exception as e:
        handle_cli_exception(e, verbose, "Conversion")

    stats = result.stats
    if verbose:
        click.echo(f"Converted {infile} -> {outfile}")
        click.echo(f"  Data records: {stats.data_records}")
        click.echo(f"  Transfer address records: {stats.transfer_records}")
        click.echo(f"  Skipped (empty or null address): {stats.skipped_records}")
        click.echo(f"  FLEX records written: {stats.records_written}")


if __name__ == "__main__":
    main()
