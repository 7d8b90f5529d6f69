"""
FLEX Blank Disk Image Creator
=============================

This module generates blank FLEX filesystem disk images: a flat sequence
of 256-byte sectors, track by track, with sectors numbered from 1.

Disk Layout
-----------
Track 0 is the system track:

    Sector 1-2      Boot sectors (zero)
    Sector 3        System Information Record (SIR)
    Sector 4        Reserved (zero)
    Sector 5..n     Directory chain, each linked to the next

Every other track belongs to the free chain, which runs from track 1
sector 1 through the last sector of the last track.

Each chained sector starts with the track and sector number of the next
sector in its chain; (0, 0) ends a chain.

System Information Record
-------------------------
    Offset  Size    Description
    ------  ----    -----------
    0       16      Zero
    16      11      Volume name, NUL padded
    27      2       Volume number (big-endian)
    29      2       First free sector (track, sector)
    31      2       Last free sector (track, sector)
    33      2       Free sector count (big-endian)
    35      3       Creation date (month, day, year % 100)
    38      2       Max track, max sector
    40      216     Zero

Usage
-----
    >>> config = DiskConfig(tracks=40, sectors=18, volume_name="WORK")
    >>> image = create_disk_image(config)
    >>> len(image) == 40 * 18 * SECTOR_SIZE
    True
"""

from dataclasses import dataclass, field
from datetime import date
from typing import BinaryIO, Iterator
import logging
import struct

from flex_tools.errors import DiskImageError

# Logger for this module
logger = logging.getLogger(__name__)


SECTOR_SIZE = 256

# SIR location on the system track
SIR_TRACK = 0
SIR_SECTOR = 3

# First directory sector on the system track
DIRECTORY_START = 5

MIN_TRACKS = 2
MAX_TRACKS = 256
MIN_SECTORS = 5
MAX_SECTORS = 255
MAX_VOLUME_NAME = 11


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class DiskConfig:
    """
    Parameters of a blank disk image.

    Attributes:
        tracks: Number of tracks (2-256)
        sectors: Sectors per track (5-255)
        volume_name: Volume label, up to 11 ASCII characters
        volume_number: Volume number (0-65535)
        creation_date: Date stored in the SIR
    """
    tracks: int = 77
    sectors: int = 15
    volume_name: str = ""
    volume_number: int = 0
    creation_date: date = field(default_factory=date.today)

    def validate(self) -> None:
        """
        Check the parameters.

        Raises:
            DiskImageError: If any parameter is out of range
        """
        if not MIN_TRACKS <= self.tracks <= MAX_TRACKS:
            raise DiskImageError(
                f"Track count must be between {MIN_TRACKS} and {MAX_TRACKS}, "
                f"got {self.tracks}"
            )
        if not MIN_SECTORS <= self.sectors <= MAX_SECTORS:
            raise DiskImageError(
                f"Sector count must be between {MIN_SECTORS} and {MAX_SECTORS}, "
                f"got {self.sectors}"
            )
        if len(self.volume_name) > MAX_VOLUME_NAME:
            raise DiskImageError(
                f"Volume name '{self.volume_name}' is longer than "
                f"{MAX_VOLUME_NAME} characters"
            )
        if not self.volume_name.isascii():
            raise DiskImageError(f"Volume name '{self.volume_name}' is not ASCII")
        if not 0 <= self.volume_number <= 0xFFFF:
            raise DiskImageError(
                f"Volume number must be between 0 and 65535, got {self.volume_number}"
            )

    @property
    def last_track(self) -> int:
        return self.tracks - 1

    @property
    def free_sectors(self) -> int:
        """Sectors in the free chain: every sector off the system track."""
        return self.last_track * self.sectors

    @property
    def image_size(self) -> int:
        return self.tracks * self.sectors * SECTOR_SIZE


# =============================================================================
# Sector Builders
# =============================================================================

def blank_sector(link_track: int = 0, link_sector: int = 0) -> bytes:
    """Build a zeroed sector whose first two bytes link to the next one."""
    return bytes([link_track, link_sector]) + bytes(SECTOR_SIZE - 2)


def build_sir(config: DiskConfig) -> bytes:
    """Build the System Information Record sector."""
    name = config.volume_name.encode("ascii").ljust(MAX_VOLUME_NAME, b"\x00")
    stamp = config.creation_date

    sir = bytearray(16)
    sir.extend(name)
    sir.extend(struct.pack(">H", config.volume_number))
    sir.extend([1, 1])                                   # First free sector
    sir.extend([config.last_track, config.sectors])      # Last free sector
    sir.extend(struct.pack(">H", config.free_sectors))
    sir.extend([stamp.month, stamp.day, stamp.year % 100])
    sir.extend([config.last_track, config.sectors])      # Max track/sector
    sir.extend(bytes(SECTOR_SIZE - len(sir)))
    return bytes(sir)


def build_sector(config: DiskConfig, track: int, sector: int) -> bytes:
    """
    Build the contents of one sector of a blank disk.

    Args:
        config: Disk parameters
        track: Track number, from 0
        sector: Sector number, from 1
    """
    if track == SIR_TRACK and sector == SIR_SECTOR:
        return build_sir(config)

    if track == 0:
        if DIRECTORY_START <= sector < config.sectors:
            return blank_sector(track, sector + 1)
        # Boot, reserved, or end of the directory chain
        return blank_sector()

    if sector == config.sectors:
        if track == config.last_track:
            return blank_sector()
        return blank_sector(track + 1, 1)

    return blank_sector(track, sector + 1)


def iter_sectors(config: DiskConfig) -> Iterator[bytes]:
    """Yield every sector of the image in file order."""
    for track in range(config.tracks):
        for sector in range(1, config.sectors + 1):
            yield build_sector(config, track, sector)


# =============================================================================
# Image Output
# =============================================================================

def write_disk_image(config: DiskConfig, stream: BinaryIO) -> int:
    """
    Write a blank disk image to a binary stream.

    Raises:
        DiskImageError: If the configuration is invalid

    Returns:
        Number of bytes written
    """
    config.validate()
    logger.debug(
        f"Creating {config.tracks} tracks x {config.sectors} sectors, "
        f"volume '{config.volume_name}' #{config.volume_number}"
    )

    written = 0
    for data in iter_sectors(config):
        stream.write(data)
        written += len(data)
    return written


def create_disk_image(config: DiskConfig) -> bytes:
    """
    Build a blank disk image in memory.

    Raises:
        DiskImageError: If the configuration is invalid
    """
    config.validate()
    return b"".join(iter_sectors(config))
