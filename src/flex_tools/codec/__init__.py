"""
Record Codecs for FLEX Binaries and S-Records
=============================================

This package holds the record-level codecs used by the converters.

- **FlexDecoder / FlexEncoder**: FLEX binary loader records (0x02, 0x16)
- **SRecordDecoder / SRecordEncoder**: Motorola S-records (S0, S1, S5, S9)
- **Record**: the format-independent record handed between them
- **Checksum utilities**: S-record checksum calculation and verification
- **HexReader**: the lenient ASCII hex reader behind the S-record decoder

Quick Start
-----------
    >>> from flex_tools.codec import FlexDecoder, SRecordEncoder
    >>> decoder = FlexDecoder(open("prog.cmd", "rb"))
    >>> encoder = SRecordEncoder(open("prog.s19", "w"))
    >>> for record in decoder:
    ...     encoder.encode(record)
    >>> decoder.terminator
    EndOfInput(offset=...)

Decoders return faults instead of raising, so a caller sees every
terminal condition as a value; see flex_tools.convert for the drivers
that turn whole streams around.
"""

# =============================================================================
# Public API Exports
# =============================================================================

from flex_tools.codec.records import (
    # Enums
    RecordKind,
    FlexRecordType,
    SRecordType,
    # Data structures
    Record,
    EndOfInput,
    FramingFault,
    UnsupportedTypeFault,
    ChecksumFault,
    DecodeFault,
    DecodeResult,
    is_fault,
    # Constants
    MAX_PAYLOAD,
    NULL_TRANSFER_ADDRESS,
)

from flex_tools.codec.checksum import (
    byte_sum,
    srec_checksum,
    verify_srec_checksum,
    record_checksum,
)

from flex_tools.codec.hexio import (
    HexReader,
    format_hex_byte,
    format_hex_word,
)

from flex_tools.codec.flex import (
    FlexDecoder,
    FlexEncoder,
)

from flex_tools.codec.srec import (
    SRecordDecoder,
    SRecordEncoder,
    format_record,
)

__all__ = [
    # Enums
    "RecordKind",
    "FlexRecordType",
    "SRecordType",
    # Data structures
    "Record",
    "EndOfInput",
    "FramingFault",
    "UnsupportedTypeFault",
    "ChecksumFault",
    "DecodeFault",
    "DecodeResult",
    "is_fault",
    # Constants
    "MAX_PAYLOAD",
    "NULL_TRANSFER_ADDRESS",
    # Checksum
    "byte_sum",
    "srec_checksum",
    "verify_srec_checksum",
    "record_checksum",
    # Hex primitives
    "HexReader",
    "format_hex_byte",
    "format_hex_word",
    # Codecs
    "FlexDecoder",
    "FlexEncoder",
    "SRecordDecoder",
    "SRecordEncoder",
    "format_record",
]
