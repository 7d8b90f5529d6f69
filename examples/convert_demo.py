#!/usr/bin/env python3
"""
FLEX Tools Conversion Demo
==========================

This script demonstrates how to use the FLEX tools library to:
1. Build a small FLEX binary from records
2. Convert it to Motorola S-records
3. Convert the S-records back and compare
4. Create a blank disk image to copy it onto

Usage:
    source .venv/bin/activate
    python examples/convert_demo.py
"""

from pathlib import Path

from flex_tools import DiskConfig, FlexEncoder, Record, write_disk_image
from flex_tools.convert import convert_flex_file, convert_srec_file


def main():
    # Output directory for generated files
    output_dir = Path("trash")
    output_dir.mkdir(exist_ok=True)

    # ==========================================================================
    # 1. Build a FLEX binary
    # ==========================================================================
    # A 6809 "hello" stub loaded at $C100:
    #   LDX #$C10A ; JSR $CD1E (PSTRNG) ; JMP $CD03 (WARMS)
    # followed by the message and the transfer address.

    binary = output_dir / "hello.cmd"
    records = [
        Record.data(0xC100, bytes.fromhex("8EC10ABDCD1E7ECD03")),
        Record.data(0xC10A, b"HELLO\x04"),
        Record.transfer(0xC100),
    ]
    with binary.open("wb") as f:
        encoder = FlexEncoder(f)
        for record in records:
            encoder.encode(record)
    print(f"Wrote {binary} ({binary.stat().st_size} bytes)")

    # ==========================================================================
    # 2. FLEX binary -> S-records
    # ==========================================================================

    srec = output_dir / "hello.s19"
    result = convert_flex_file(binary, srec)
    result.raise_for_error()
    print(f"\n{srec}:")
    print(srec.read_text(), end="")

    # ==========================================================================
    # 3. S-records -> FLEX binary, and compare
    # ==========================================================================

    copy = output_dir / "hello2.cmd"
    result = convert_srec_file(srec, copy)
    result.raise_for_error()
    same = copy.read_bytes() == binary.read_bytes()
    print(f"\nRound trip {'matches' if same else 'DIFFERS'}")

    # ==========================================================================
    # 4. Blank disk image
    # ==========================================================================

    disk = output_dir / "work.dsk"
    config = DiskConfig(tracks=40, sectors=18, volume_name="WORK", volume_number=1)
    with disk.open("wb") as f:
        size = write_disk_image(config, f)
    print(f"\nCreated {disk}: {size} bytes, {config.free_sectors} free sectors")


if __name__ == "__main__":
    main()
