"""
Motorola S-Record Codec
=======================

Reads and writes the subset of Motorola S-records that maps onto FLEX
binaries:

    S0 cc 0000 name... ss       Header (ignored when decoding)
    S1 cc aaaa data... ss       Data, 16-bit address
    S5 cc nnnn ss               Number of S1 records so far
    S9 cc aaaa ss               Transfer (start) address

cc is the number of bytes from the address through the checksum, so a
data record carries cc - 3 payload bytes. ss is the one's complement of
the low byte of the sum of the count, address and payload bytes.

Between records only NUL, CR and LF are accepted. Inside a record the hex
reader skips anything that is not an uppercase hex digit (see
flex_tools.codec.hexio for why that is lenient on purpose).

Usage
-----
    >>> out = io.StringIO()
    >>> encoder = SRecordEncoder(out)
    >>> encoder.encode(Record.data(0x0100, b"\\xAA\\xBB"))
    >>> out.getvalue()
    'S1050100AABB94\\n'
"""

from typing import BinaryIO, Iterator, Optional, TextIO
import logging

from flex_tools.codec.checksum import record_checksum, srec_checksum, verify_srec_checksum
from flex_tools.codec.hexio import HexReader, format_hex_byte, format_hex_word
from flex_tools.codec.records import (
    ChecksumFault,
    DecodeResult,
    EndOfInput,
    FramingFault,
    NULL_TRANSFER_ADDRESS,
    Record,
    SRecordType,
    UnsupportedTypeFault,
)
from flex_tools.errors import TruncatedRecordError

# Logger for this module
logger = logging.getLogger(__name__)

# Bytes tolerated between records: NUL, CR, LF
RECORD_SEPARATORS = frozenset((0x00, 0x0D, 0x0A))

RECORD_START = ord("S")


# =============================================================================
# Decoder
# =============================================================================

class SRecordDecoder:
    """
    Decodes S-records one at a time from a binary stream.

    decode() never raises for malformed input; it returns a fault value.
    Iterating yields records until the first terminal result, which is
    kept in `terminator`.
    """

    def __init__(self, stream: BinaryIO):
        self._reader = HexReader(stream)
        self.terminator: Optional[DecodeResult] = None

    @property
    def offset(self) -> int:
        """Number of bytes consumed from the stream so far."""
        return self._reader.offset

    def __iter__(self) -> Iterator[Record]:
        while True:
            result = self.decode()
            if not isinstance(result, Record):
                self.terminator = result
                return
            yield result

    def _find_record_start(self) -> Optional[DecodeResult]:
        """
        Skip separators up to the next 'S'.

        Returns None when positioned just after an 'S', otherwise the
        terminal result.
        """
        while True:
            char = self._reader.read_char()
            if char is None:
                return EndOfInput(self.offset)
            if char == RECORD_START:
                return None
            if char not in RECORD_SEPARATORS:
                return FramingFault(self.offset - 1, char)

    def decode(self) -> DecodeResult:
        """
        Decode the next record, verifying its checksum.

        Returns:
            A Record, EndOfInput, FramingFault, UnsupportedTypeFault or
            ChecksumFault
        """
        terminal = self._find_record_start()
        if terminal is not None:
            return terminal

        start = self.offset - 1
        reader = self._reader

        type_code = reader.read_char()
        if type_code is None:
            return FramingFault(self.offset, None, "input ended inside a record")
        record_type = SRecordType.from_code(type_code)
        if record_type is None:
            return UnsupportedTypeFault(self.offset - 1, type_code)

        try:
            count = reader.read_byte()
            address = reader.read_word()
            if count < 3:
                return FramingFault(start, count, "record count too small")

            # S9 records never carry payload bytes
            payload = b""
            if record_type != SRecordType.TRANSFER_ADDRESS:
                payload = bytes(reader.read_byte() for _ in range(count - 3))

            stored = reader.read_byte()
        except TruncatedRecordError as e:
            return FramingFault(e.offset, None, "input ended inside a record")

        summed = bytes([count, (address >> 8) & 0xFF, address & 0xFF]) + payload
        if not verify_srec_checksum(summed, stored):
            calculated = srec_checksum(summed)
            logger.debug(
                f"S{record_type.value} record at offset {start:04X}: "
                f"checksum {stored:02X}, expected {calculated:02X}"
            )
            return ChecksumFault(start, stored, calculated)

        logger.debug(
            f"S{record_type.value} record at offset {start:04X}: "
            f"address {address:04X}, {len(payload)} bytes"
        )
        return Record(record_type.to_kind(), address, payload, stored)


# =============================================================================
# Encoder
# =============================================================================

def format_record(record: Record) -> str:
    """
    Format a record as one S-record line, without the line terminator.

    Raises:
        RecordError: For records of kind UNKNOWN
    """
    record_type = SRecordType.for_kind(record.kind)

    parts = [
        "S",
        record_type.value,
        format_hex_byte(record.srec_count),
        format_hex_word(record.address),
        record.srec_payload.hex().upper(),
        format_hex_byte(record_checksum(record)),
    ]
    return "".join(parts)


class SRecordEncoder:
    """
    Writes records as S-record lines to a text stream.

    Data records keep the size they arrived with; the encoder never merges
    or splits them.

    Attributes:
        lines_written: Number of records written
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self.lines_written = 0

    def encode(self, record: Record) -> None:
        """Write one record as an S-record line."""
        self._stream.write(format_record(record) + "\n")
        self.lines_written += 1

    def write_header(self, name: str) -> None:
        """
        Write the S0 header record.

        Names longer than a single record can hold are truncated.
        """
        self.encode(Record.header(name))

    def write_count(self, count: int) -> None:
        """Write an S5 record holding the number of data records."""
        if count > 0xFFFF:
            logger.warning(
                f"{count} data records do not fit in an S5 record; "
                f"writing {count & 0xFFFF}"
            )
        self.encode(Record.count(count))

    def write_default_transfer(self) -> None:
        """Write the placeholder start address record, S9030000FC."""
        self.encode(Record.transfer(NULL_TRANSFER_ADDRESS))
