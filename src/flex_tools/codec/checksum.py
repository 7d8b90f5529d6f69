"""
S-Record Checksum Calculations
==============================

An S-record checksum is the one's complement of the low byte of the sum
of every byte in the record before it: the count byte, the address bytes
and the payload bytes.

Verification uses the equivalent form: the stored checksum added to that
sum must give 0xFF in the low byte.

    >>> hex(srec_checksum(bytes([0x03, 0x00, 0x00])))
    '0xfc'

FLEX binary records have no checksum of their own.
"""

from typing import Iterable

from flex_tools.codec.records import Record


def byte_sum(data: Iterable[int]) -> int:
    """Sum bytes, keeping only the low byte."""
    total = 0
    for byte in data:
        total = (total + byte) & 0xFF
    return total


def complement(total: int) -> int:
    """One's complement of the low byte of a running sum."""
    return ~total & 0xFF


def srec_checksum(data: Iterable[int]) -> int:
    """
    Calculate an S-record checksum.

    Args:
        data: Count byte, address bytes and payload bytes, in any order

    Returns:
        The checksum byte (0x00 - 0xFF)
    """
    return complement(byte_sum(data))


def verify_srec_checksum(data: Iterable[int], stored: int) -> bool:
    """
    Verify a stored S-record checksum.

    Args:
        data: Every record byte that precedes the checksum
        stored: The checksum byte read from the record

    Returns:
        True if the checksum matches
    """
    return (byte_sum(data) + stored) & 0xFF == 0xFF


def record_checksum(record: Record) -> int:
    """Calculate the checksum of a record in its S-record form."""
    return srec_checksum(
        bytes([record.srec_count]) + record.address_bytes + record.srec_payload
    )
