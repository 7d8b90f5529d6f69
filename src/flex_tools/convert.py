"""
FLEX Binary / S-Record Converters
=================================

This module drives the record codecs over whole streams.

flex_to_srec
------------
1. Write an S0 header naming the input file.
2. Copy every FLEX record across as S1 (data) or S9 (transfer address).
3. On clean end of input, write S5 with the number of data records and,
   if the input had no transfer address, the placeholder S9030000FC.

An unrecognised FLEX record type stops the run and no trailer is written.

srec_to_flex
------------
Copy S1 and S9 records across as FLEX 0x02 and 0x16 records until end of
input. S0 and S5 records are checked but produce no output, as do empty
S1 records and S9 records with the null address 0000. The first framing,
type or checksum fault stops the run.

In both directions output already written is left in place when a run
fails, and each call starts from fresh counters, so one process can
convert any number of files.

Usage
-----
    >>> result = convert_flex_file("prog.cmd", "prog.s19")
    >>> if not result.ok:
    ...     print(result.error)
    >>> result.stats.data_records
    12
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union
import logging

from flex_tools.codec.flex import FlexDecoder, FlexEncoder
from flex_tools.codec.records import (
    DecodeResult,
    EndOfInput,
    RecordKind,
    is_fault,
)
from flex_tools.codec.srec import SRecordDecoder, SRecordEncoder
from flex_tools.errors import DecodeError

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Run Results
# =============================================================================

@dataclass
class ConversionStats:
    """
    Counters for one conversion run.

    Attributes:
        data_records: Data records read (S1 or 0x02), empty ones included
        transfer_records: Transfer address records read (S9 or 0x16)
        header_records: Header records read (sr2flex) or written (flex2sr)
        count_records: Count records read (sr2flex) or written (flex2sr)
        skipped_records: Data/transfer records with no output form
        records_written: Records written to the output
    """
    data_records: int = 0
    transfer_records: int = 0
    header_records: int = 0
    count_records: int = 0
    skipped_records: int = 0
    records_written: int = 0


@dataclass
class ConversionResult:
    """
    Outcome of a conversion run.

    Attributes:
        stats: Record counters for the run
        terminator: EndOfInput on success, otherwise the fault that
            stopped the run
    """
    stats: ConversionStats = field(default_factory=ConversionStats)
    terminator: Optional[DecodeResult] = None

    @property
    def ok(self) -> bool:
        """True when the whole input was consumed cleanly."""
        return isinstance(self.terminator, EndOfInput)

    @property
    def error(self) -> Optional[DecodeError]:
        """The terminating fault as an exception, or None on success."""
        if self.terminator is None or not is_fault(self.terminator):
            return None
        return self.terminator.to_exception()

    def raise_for_error(self) -> None:
        """
        Raise the terminating fault, if the run failed.

        Raises:
            FramingError, UnsupportedTypeError or ChecksumError
        """
        error = self.error
        if error is not None:
            raise error


# =============================================================================
# Stream Drivers
# =============================================================================

def flex_to_srec(infile: BinaryIO, outfile: TextIO, name: str = "") -> ConversionResult:
    """
    Convert a FLEX binary stream to S-records.

    Args:
        infile: Binary stream positioned at the first FLEX record
        outfile: Text stream receiving S-record lines
        name: Text for the S0 header, normally the input base name

    Returns:
        ConversionResult for the run
    """
    stats = ConversionStats()
    decoder = FlexDecoder(infile)
    encoder = SRecordEncoder(outfile)

    encoder.write_header(name)
    stats.header_records += 1

    for record in decoder:
        encoder.encode(record)
        if record.kind == RecordKind.DATA:
            stats.data_records += 1
        elif record.kind == RecordKind.TRANSFER_ADDRESS:
            stats.transfer_records += 1

    result = ConversionResult(stats, decoder.terminator)
    if result.ok:
        encoder.write_count(stats.data_records)
        stats.count_records += 1
        if stats.transfer_records == 0:
            logger.debug("No transfer address in input, writing S9030000FC")
            encoder.write_default_transfer()
    else:
        logger.debug(f"Conversion stopped: {result.error}")

    stats.records_written = encoder.lines_written
    logger.debug(
        f"flex2sr: {stats.data_records} data, "
        f"{stats.transfer_records} transfer address records"
    )
    return result


def srec_to_flex(infile: BinaryIO, outfile: BinaryIO) -> ConversionResult:
    """
    Convert an S-record stream to a FLEX binary.

    Args:
        infile: Binary stream of S-record text
        outfile: Binary stream receiving FLEX records

    Returns:
        ConversionResult for the run
    """
    stats = ConversionStats()
    decoder = SRecordDecoder(infile)
    encoder = FlexEncoder(outfile)

    for record in decoder:
        if record.kind == RecordKind.HEADER:
            stats.header_records += 1
            logger.debug(f"Header: {record.payload!r}")
            continue

        if record.kind == RecordKind.COUNT:
            stats.count_records += 1
            if record.address != stats.data_records & 0xFFFF:
                logger.warning(
                    f"S5 record count {record.address} does not match "
                    f"{stats.data_records} data records read"
                )
            continue

        if record.kind == RecordKind.DATA:
            stats.data_records += 1
        else:
            stats.transfer_records += 1

        if encoder.encode(record):
            stats.records_written += 1
        else:
            stats.skipped_records += 1

    result = ConversionResult(stats, decoder.terminator)
    if not result.ok:
        logger.debug(f"Conversion stopped: {result.error}")

    logger.debug(
        f"sr2flex: {stats.data_records} data, {stats.transfer_records} transfer "
        f"address records, {encoder.bytes_written} bytes written"
    )
    return result


# =============================================================================
# File Conversions
# =============================================================================

def convert_flex_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
) -> ConversionResult:
    """
    Convert a FLEX binary file to an S-record file.

    The S0 header carries the input file's base name.

    Raises:
        FileNotFoundError: If the input file doesn't exist
        OSError: If either file cannot be opened
    """
    input_path = Path(input_path)
    output_path = Path(output_path)
    with input_path.open("rb") as infile, \
            output_path.open("w", encoding="ascii", newline="\n") as outfile:
        return flex_to_srec(infile, outfile, input_path.name)


def convert_srec_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
) -> ConversionResult:
    """
    Convert an S-record file to a FLEX binary file.

    Raises:
        FileNotFoundError: If the input file doesn't exist
        OSError: If either file cannot be opened
    """
    input_path = Path(input_path)
    output_path = Path(output_path)
    with input_path.open("rb") as infile, output_path.open("wb") as outfile:
        return srec_to_flex(infile, outfile)
