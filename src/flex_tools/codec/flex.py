"""
FLEX Binary Codec
=================

Reads and writes the FLEX loader format, a byte stream of records:

    0x02 addrHi addrLo len data[len]    Data
    0x16 addrHi addrLo                  Transfer address

Zero bytes between records are padding; FLEX binaries are commonly padded
to a whole number of sectors, so trailing zeros are normal. Any other lead
byte is a record type this codec does not know about.

Usage
-----
    >>> decoder = FlexDecoder(io.BytesIO(b"\\x02\\x01\\x00\\x02\\xAA\\xBB"))
    >>> decoder.decode()
    Record(kind=<RecordKind.DATA: 'data'>, address=256, payload=b'\\xaa\\xbb', checksum=None)
    >>> decoder.decode()
    EndOfInput(offset=6)
"""

from typing import BinaryIO, Iterator, Optional
import logging

from flex_tools.codec.records import (
    DecodeResult,
    EndOfInput,
    FlexRecordType,
    FramingFault,
    MAX_PAYLOAD,
    NULL_TRANSFER_ADDRESS,
    Record,
    RecordKind,
    UnsupportedTypeFault,
)

# Logger for this module
logger = logging.getLogger(__name__)


class _Truncated(Exception):
    """Input ended inside a record."""


# =============================================================================
# Decoder
# =============================================================================

class FlexDecoder:
    """
    Decodes FLEX binary records one at a time.

    decode() never raises for malformed input; it returns a fault value.
    Iterating yields records until the first terminal result, which is
    kept in `terminator`.

    Attributes:
        offset: Number of bytes consumed from the stream so far
        terminator: The EndOfInput or fault that ended iteration, if any
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self.offset = 0
        self.terminator: Optional[DecodeResult] = None

    def __iter__(self) -> Iterator[Record]:
        while True:
            result = self.decode()
            if not isinstance(result, Record):
                self.terminator = result
                return
            yield result

    def _read(self) -> Optional[int]:
        data = self._stream.read(1)
        if not data:
            return None
        self.offset += 1
        return data[0]

    def _read_required(self) -> int:
        value = self._read()
        if value is None:
            raise _Truncated()
        return value

    def decode(self) -> DecodeResult:
        """
        Decode the next record.

        Returns:
            A Record, EndOfInput, FramingFault or UnsupportedTypeFault
        """
        # Skip padding between records
        lead = self._read()
        while lead == FlexRecordType.PADDING:
            lead = self._read()

        if lead is None:
            return EndOfInput(self.offset)

        start = self.offset - 1
        if lead not in (FlexRecordType.DATA, FlexRecordType.TRANSFER_ADDRESS):
            return UnsupportedTypeFault(start, lead)

        try:
            address = self._read_required() << 8
            address |= self._read_required()

            if lead == FlexRecordType.TRANSFER_ADDRESS:
                logger.debug(f"Transfer address {address:04X} at offset {start:04X}")
                return Record.transfer(address)

            length = self._read_required()
            if length > MAX_PAYLOAD:
                return FramingFault(
                    self.offset - 1, length,
                    f"data record length exceeds {MAX_PAYLOAD} bytes",
                )
            payload = bytes(self._read_required() for _ in range(length))
        except _Truncated:
            return FramingFault(self.offset, None, "input ended inside a record")

        logger.debug(f"Data record @ {address:04X}, {length} bytes, offset {start:04X}")
        return Record.data(address, payload)


# =============================================================================
# Encoder
# =============================================================================

class FlexEncoder:
    """
    Writes records in FLEX binary form.

    Records are written at the granularity they arrive in; adjacent data
    records are never merged and the output is not padded.
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self.bytes_written = 0

    @staticmethod
    def to_bytes(record: Record) -> bytes:
        """
        Serialize a record to FLEX binary.

        Returns an empty byte string for records with no FLEX form:
        header and count records, empty data records, and the null
        transfer address 0000.
        """
        if record.kind == RecordKind.DATA:
            if not record.payload:
                return b""
            return (bytes([FlexRecordType.DATA]) + record.address_bytes
                    + bytes([len(record.payload)]) + record.payload)

        if record.kind == RecordKind.TRANSFER_ADDRESS:
            if record.address == NULL_TRANSFER_ADDRESS:
                return b""
            return bytes([FlexRecordType.TRANSFER_ADDRESS]) + record.address_bytes

        return b""

    def encode(self, record: Record) -> int:
        """
        Write one record.

        Returns:
            Number of bytes written (0 if the record was skipped)
        """
        data = self.to_bytes(record)
        if not data:
            if record.kind in (RecordKind.DATA, RecordKind.TRANSFER_ADDRESS):
                logger.debug(f"Skipping {record}")
            return 0
        self._stream.write(data)
        self.bytes_written += len(data)
        return len(data)
