"""
FLEX Tools Error Hierarchy
==========================

This module defines the exception hierarchy for the FLEX conversion tools.
All exceptions inherit from FlexError, allowing callers to catch all
tool-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
FlexError (base)
├── RecordError - record fields out of range
├── DecodeError (record decoding, carries the byte offset)
│   ├── FramingError - unexpected byte where a record start was required
│   │   └── TruncatedRecordError - input ended inside a record
│   ├── UnsupportedTypeError - unknown or unhandled record type code
│   └── ChecksumError - stored checksum does not match the record
└── DiskImageError - invalid disk image parameters

Decoders do not raise these for malformed input. They return fault values
(see flex_tools.codec.records) and the driver turns a fault into one of
these exceptions when the caller asks for it.
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class FlexError(Exception):
    """
    Base exception for all FLEX tools errors.

        try:
            convert_flex_file("prog.cmd", "prog.s19").raise_for_error()
        except FlexError as e:
            print(f"Error: {e}")
    """
    pass


class RecordError(FlexError):
    """
    Invalid record content.

    Raised when a record is constructed with an address outside the
    16-bit range or a payload too long for a single record.
    """
    pass


# =============================================================================
# Decode Exceptions
# =============================================================================

class DecodeError(FlexError):
    """
    Base exception for unrecoverable decode conditions.

    Attributes:
        message: The error description
        offset: Byte offset in the input where the condition was detected
    """

    def __init__(self, message: str, offset: Optional[int] = None):
        self.message = message
        self.offset = offset
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.offset is None:
            return self.message
        return f"{self.message} at offset 0x{self.offset:04X}"


class FramingError(DecodeError):
    """
    Unexpected byte where a record start marker was required.

    In an S-record stream only NUL, CR and LF may appear between records.
    """

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        byte: Optional[int] = None,
    ):
        self.byte = byte
        super().__init__(message, offset)


class TruncatedRecordError(FramingError):
    """
    Input ended in the middle of a record.

    The hex readers raise this instead of waiting forever for a digit
    that will never arrive.
    """

    def __init__(self, offset: Optional[int] = None):
        super().__init__("input ended inside a record", offset)


class UnsupportedTypeError(DecodeError):
    """
    Record type code that this tool does not handle.

    FLEX binaries only carry 0x02 (data) and 0x16 (transfer address);
    S-records are limited to S0, S1, S5 and S9.
    """

    def __init__(self, type_code: int, offset: Optional[int] = None):
        self.type_code = type_code
        super().__init__(f"unrecognised record type {type_code:02X}", offset)


class ChecksumError(DecodeError):
    """
    Stored record checksum does not match the recomputed one.
    """

    def __init__(self, stored: int, calculated: int, offset: Optional[int] = None):
        self.stored = stored
        self.calculated = calculated
        super().__init__(
            f"checksum mismatch: stored {stored:02X}, calculated {calculated:02X}",
            offset,
        )


# =============================================================================
# Disk Image Exceptions
# =============================================================================

class DiskImageError(FlexError):
    """
    Invalid disk image parameters.

    Track count must be at least 2, sector count at least 5, and the
    volume name at most 11 characters.
    """
    pass
