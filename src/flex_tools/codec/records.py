"""
Record Type Definitions
=======================

This module defines the record data structures shared by the FLEX binary
and Motorola S-record codecs.

A Record is built by a decoder, handed straight to an encoder, and then
dropped. Nothing keeps a list of records; the only state that outlives a
record is the driver's counters.

FLEX Binary Records
-------------------
    0x02 addrHi addrLo len data...    Data
    0x16 addrHi addrLo                Transfer address
    0x00                              Padding between records

S-Records
---------
    S0 cc 0000 name... ss             Header
    S1 cc aaaa data... ss             Data
    S5 cc nnnn ss                     Data record count
    S9 cc aaaa ss                     Transfer address

Where cc counts the bytes from the address through the checksum and ss is
the one's complement of the low byte of the sum of all bytes before it.

Decode Results
--------------
Decoders return one of:

- Record: a decoded record
- EndOfInput: the stream ended cleanly at a record boundary
- FramingFault / UnsupportedTypeFault / ChecksumFault: the run must stop

Faults are plain values so that callers handle every case explicitly;
to_exception() converts one into the matching flex_tools.errors class.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Union

from flex_tools.errors import (
    ChecksumError,
    DecodeError,
    FramingError,
    RecordError,
    UnsupportedTypeError,
)


# Largest payload a single data record may carry
MAX_PAYLOAD = 252

# Transfer address used as a "no start address" placeholder
NULL_TRANSFER_ADDRESS = 0x0000


# =============================================================================
# Enumeration Types
# =============================================================================

class RecordKind(Enum):
    """Format-independent record kinds."""
    DATA = "data"
    TRANSFER_ADDRESS = "transfer address"
    HEADER = "header"
    COUNT = "count"
    UNKNOWN = "unknown"


class FlexRecordType(IntEnum):
    """Lead bytes of FLEX binary records."""
    PADDING = 0x00
    DATA = 0x02
    TRANSFER_ADDRESS = 0x16


class SRecordType(str, Enum):
    """
    Supported S-record type digits.

    The value is the ASCII character following 'S'.
    """
    HEADER = "0"
    DATA = "1"
    COUNT = "5"
    TRANSFER_ADDRESS = "9"

    @classmethod
    def from_code(cls, code: int) -> Optional["SRecordType"]:
        """Map a raw type character code to a type, or None if unsupported."""
        try:
            return cls(chr(code))
        except ValueError:
            return None

    @classmethod
    def for_kind(cls, kind: RecordKind) -> "SRecordType":
        """Get the S-record type that carries a record kind."""
        try:
            return _KIND_TO_SREC[kind]
        except KeyError:
            raise RecordError(f"no S-record type for {kind.value} records") from None

    def to_kind(self) -> RecordKind:
        """Get the record kind carried by this S-record type."""
        return _SREC_TO_KIND[self]


_SREC_TO_KIND = {
    SRecordType.HEADER: RecordKind.HEADER,
    SRecordType.DATA: RecordKind.DATA,
    SRecordType.COUNT: RecordKind.COUNT,
    SRecordType.TRANSFER_ADDRESS: RecordKind.TRANSFER_ADDRESS,
}
_KIND_TO_SREC = {kind: srec for srec, kind in _SREC_TO_KIND.items()}


# =============================================================================
# Record
# =============================================================================

@dataclass(frozen=True)
class Record:
    """
    One unit of transfer between the two formats.

    Attributes:
        kind: What the record carries
        address: 16-bit load or transfer address. COUNT records keep the
            record count here, mirroring where S5 stores it.
        payload: Data bytes (data records), or header text (header records)
        checksum: The stored checksum when decoded from an S-record,
            None for records that did not come from one
    """
    kind: RecordKind
    address: int = 0
    payload: bytes = field(default=b"")
    checksum: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not 0 <= self.address <= 0xFFFF:
            raise RecordError(f"address 0x{self.address:X} is not a 16-bit value")
        if len(self.payload) > MAX_PAYLOAD:
            raise RecordError(
                f"payload of {len(self.payload)} bytes exceeds {MAX_PAYLOAD} bytes"
            )

    @classmethod
    def data(cls, address: int, payload: bytes) -> "Record":
        return cls(RecordKind.DATA, address, bytes(payload))

    @classmethod
    def transfer(cls, address: int) -> "Record":
        return cls(RecordKind.TRANSFER_ADDRESS, address)

    @classmethod
    def header(cls, text: Union[str, bytes]) -> "Record":
        if isinstance(text, str):
            text = text.encode("latin-1", errors="replace")
        return cls(RecordKind.HEADER, 0, bytes(text[:MAX_PAYLOAD]))

    @classmethod
    def count(cls, value: int) -> "Record":
        return cls(RecordKind.COUNT, value & 0xFFFF)

    @property
    def address_bytes(self) -> bytes:
        """The address as two big-endian bytes."""
        return bytes([(self.address >> 8) & 0xFF, self.address & 0xFF])

    @property
    def srec_payload(self) -> bytes:
        """
        Payload bytes carried in the S-record form.

        Transfer address and count records never carry payload bytes.
        """
        if self.kind in (RecordKind.DATA, RecordKind.HEADER):
            return self.payload
        return b""

    @property
    def srec_count(self) -> int:
        """S-record count field: address, payload and checksum bytes."""
        return len(self.srec_payload) + 3

    def get_type_name(self) -> str:
        """Get a human-readable name for this record."""
        return self.kind.value.capitalize()

    def __str__(self) -> str:
        if self.kind == RecordKind.DATA:
            return f"Data record @ {self.address:04X} {len(self.payload)} bytes"
        if self.kind == RecordKind.TRANSFER_ADDRESS:
            return f"Transfer address {self.address:04X}"
        if self.kind == RecordKind.COUNT:
            return f"Count record {self.address}"
        return f"{self.get_type_name()} record"


# =============================================================================
# Terminal Decode Results
# =============================================================================

@dataclass(frozen=True)
class EndOfInput:
    """Clean end of input at a record boundary. Not an error."""
    offset: int


@dataclass(frozen=True)
class FramingFault:
    """Unexpected byte, or end of input, where a record was expected."""
    offset: int
    byte: Optional[int] = None
    reason: str = "unexpected byte between records"

    def to_exception(self) -> DecodeError:
        if self.byte is None:
            return FramingError(self.reason, self.offset)
        return FramingError(f"{self.reason} ({self.byte:02X})", self.offset, self.byte)


@dataclass(frozen=True)
class UnsupportedTypeFault:
    """Record type code that neither codec handles."""
    offset: int
    type_code: int

    def to_exception(self) -> DecodeError:
        return UnsupportedTypeError(self.type_code, self.offset)


@dataclass(frozen=True)
class ChecksumFault:
    """Stored checksum that does not match the record."""
    offset: int
    stored: int
    calculated: int

    def to_exception(self) -> DecodeError:
        return ChecksumError(self.stored, self.calculated, self.offset)


DecodeFault = Union[FramingFault, UnsupportedTypeFault, ChecksumFault]
DecodeResult = Union[Record, EndOfInput, FramingFault, UnsupportedTypeFault, ChecksumFault]


def is_fault(result: DecodeResult) -> bool:
    """Check whether a decode result is a fault that stops the run."""
    return isinstance(result, (FramingFault, UnsupportedTypeFault, ChecksumFault))
