"""
ASCII Hex Primitives
====================

Readers and formatters for the hex digit pairs that make up an S-record.

HexReader is deliberately lenient: read_nibble() skips every byte that is
not an uppercase hex digit. Stray spaces or line noise inside a record are
therefore tolerated, but so is real corruption, which can make the reader
resynchronise on the wrong digits. Lowercase digits count as noise too.
Checksum verification is what catches the damage. Keep this behaviour
unless the S-record grammar accepted by the tools changes.
"""

from typing import BinaryIO, Optional

from flex_tools.errors import TruncatedRecordError


_DIGIT_VALUES = {ord(c): int(c, 16) for c in "0123456789ABCDEF"}


class HexReader:
    """
    Reads hex nibbles, bytes and words from a binary stream.

    Attributes:
        offset: Number of bytes consumed from the stream so far
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self.offset = 0

    def read_char(self) -> Optional[int]:
        """Read one raw byte, or None at end of input."""
        data = self._stream.read(1)
        if not data:
            return None
        self.offset += 1
        return data[0]

    def read_nibble(self) -> int:
        """
        Read the next hex digit, skipping anything else.

        Raises:
            TruncatedRecordError: If the input ends before a digit appears
        """
        while True:
            char = self.read_char()
            if char is None:
                raise TruncatedRecordError(self.offset)
            value = _DIGIT_VALUES.get(char)
            if value is not None:
                return value

    def read_byte(self) -> int:
        """Read two hex digits, high nibble first."""
        high = self.read_nibble()
        return (high << 4) | self.read_nibble()

    def read_word(self) -> int:
        """Read four hex digits, high byte first."""
        high = self.read_byte()
        return (high << 8) | self.read_byte()


def format_hex_byte(value: int) -> str:
    return f"{value & 0xFF:02X}"


def format_hex_word(value: int) -> str:
    return f"{value & 0xFFFF:04X}"
