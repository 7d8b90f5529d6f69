"""
FLEX Tools - Loader Format Converters for the FLEX Operating System
===================================================================

This package converts executable images between the FLEX binary loader
format and Motorola S-records, and creates blank FLEX disk images.

FLEX is a disk operating system for 6800 and 6809 microcomputers. Its
binaries (.CMD, .BIN) are streams of load records:

    0x02 addrHi addrLo len data...    Load len bytes at addr
    0x16 addrHi addrLo                Start execution at addr

Main Components
---------------
- **codec**: Record decoders and encoders for both formats
- **convert**: Stream drivers (flex2sr, sr2flex)
- **diskimage**: Blank disk image generator (mkflexfs)
- **cli**: Command-line tools

Quick Start
-----------
Convert a binary to S-records:
    >>> from flex_tools import convert_flex_file
    >>> result = convert_flex_file("prog.cmd", "prog.s19")
    >>> result.raise_for_error()

Create a blank disk:
    >>> from flex_tools import DiskConfig, create_disk_image
    >>> image = create_disk_image(DiskConfig(tracks=40, sectors=18))

Or use the command-line tools:
    $ flex2sr prog.cmd prog.s19
    $ sr2flex prog.s19 prog.cmd
    $ mkflexfs -t 40 -s 18 -n WORK -o work.dsk
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from flex_tools.errors import (
    FlexError,
    RecordError,
    DecodeError,
    FramingError,
    TruncatedRecordError,
    UnsupportedTypeError,
    ChecksumError,
    DiskImageError,
)

from flex_tools.codec import (
    Record,
    RecordKind,
    FlexDecoder,
    FlexEncoder,
    SRecordDecoder,
    SRecordEncoder,
    EndOfInput,
)

from flex_tools.convert import (
    ConversionStats,
    ConversionResult,
    flex_to_srec,
    srec_to_flex,
    convert_flex_file,
    convert_srec_file,
)

from flex_tools.diskimage import (
    DiskConfig,
    SECTOR_SIZE,
    create_disk_image,
    write_disk_image,
)

__all__ = [
    # Version info
    "__version__",
    # Exception hierarchy
    "FlexError",
    "RecordError",
    "DecodeError",
    "FramingError",
    "TruncatedRecordError",
    "UnsupportedTypeError",
    "ChecksumError",
    "DiskImageError",
    # Codec
    "Record",
    "RecordKind",
    "FlexDecoder",
    "FlexEncoder",
    "SRecordDecoder",
    "SRecordEncoder",
    "EndOfInput",
    # Converters
    "ConversionStats",
    "ConversionResult",
    "flex_to_srec",
    "srec_to_flex",
    "convert_flex_file",
    "convert_srec_file",
    # Disk images
    "DiskConfig",
    "SECTOR_SIZE",
    "create_disk_image",
    "write_disk_image",
]
