"""
Disk Image Tests
================

Tests for the blank FLEX disk image generator.
"""

import io
from datetime import date

import pytest

from flex_tools.diskimage import (
    SECTOR_SIZE,
    DiskConfig,
    blank_sector,
    build_sector,
    build_sir,
    create_disk_image,
    iter_sectors,
    write_disk_image,
)
from flex_tools.errors import DiskImageError


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def config() -> DiskConfig:
    """A 40 track, 18 sector disk with a fixed date."""
    return DiskConfig(
        tracks=40,
        sectors=18,
        volume_name="WORK",
        volume_number=0x0102,
        creation_date=date(2015, 7, 26),
    )


def link(sector: bytes) -> tuple[int, int]:
    return sector[0], sector[1]


def sector_at(image: bytes, config: DiskConfig, track: int, sector: int) -> bytes:
    start = (track * config.sectors + sector - 1) * SECTOR_SIZE
    return image[start:start + SECTOR_SIZE]


# =============================================================================
# Configuration Tests
# =============================================================================

class TestDiskConfig:
    """Tests for DiskConfig validation and derived values."""

    def test_defaults(self):
        """Test the default 77 track, 15 sector geometry."""
        config = DiskConfig()
        config.validate()
        assert config.tracks == 77
        assert config.sectors == 15
        assert config.volume_name == ""
        assert config.volume_number == 0

    def test_free_sectors(self, config):
        """Test that every sector off the system track is free."""
        assert config.free_sectors == 39 * 18

    @pytest.mark.parametrize("kwargs", [
        {"tracks": 1},
        {"tracks": 257},
        {"sectors": 4},
        {"sectors": 256},
        {"volume_name": "TWELVECHARSX"},
        {"volume_name": "DISQUÉ"},
        {"volume_number": -1},
        {"volume_number": 0x10000},
    ])
    def test_invalid(self, kwargs):
        """Test that out-of-range parameters are rejected."""
        with pytest.raises(DiskImageError):
            DiskConfig(**kwargs).validate()

    def test_limits_accepted(self):
        """Test the smallest and largest accepted geometry."""
        DiskConfig(tracks=2, sectors=5).validate()
        DiskConfig(tracks=256, sectors=255, volume_name="ELEVENCHARS").validate()


# =============================================================================
# Sector Tests
# =============================================================================

class TestSectors:
    """Tests for individual sector contents."""

    def test_blank_sector(self):
        """Test a blank sector with a link."""
        sector = blank_sector(3, 4)
        assert len(sector) == SECTOR_SIZE
        assert link(sector) == (3, 4)
        assert sector[2:] == bytes(SECTOR_SIZE - 2)

    def test_sir_layout(self, config):
        """Test every field of the System Information Record."""
        sir = build_sir(config)
        assert len(sir) == SECTOR_SIZE
        assert sir[0:16] == bytes(16)
        assert sir[16:27] == b"WORK" + bytes(7)
        assert sir[27:29] == b"\x01\x02"
        assert sir[29:31] == bytes([1, 1])
        assert sir[31:33] == bytes([39, 18])
        assert sir[33:35] == (39 * 18).to_bytes(2, "big")
        assert sir[35:38] == bytes([7, 26, 15])
        assert sir[38:40] == bytes([39, 18])
        assert sir[40:] == bytes(216)

    def test_boot_and_reserved_sectors(self, config):
        """Test that boot and reserved sectors are zero."""
        for sector in (1, 2, 4):
            assert build_sector(config, 0, sector) == bytes(SECTOR_SIZE)

    def test_sir_position(self, config):
        """Test that track 0 sector 3 is the SIR."""
        assert build_sector(config, 0, 3) == build_sir(config)

    def test_directory_chain(self, config):
        """Test the directory chain on track 0."""
        assert link(build_sector(config, 0, 5)) == (0, 6)
        assert link(build_sector(config, 0, 17)) == (0, 18)
        assert build_sector(config, 0, 18) == bytes(SECTOR_SIZE)

    def test_free_chain(self, config):
        """Test links within and across tracks."""
        assert link(build_sector(config, 1, 1)) == (1, 2)
        assert link(build_sector(config, 1, 18)) == (2, 1)
        assert link(build_sector(config, 38, 18)) == (39, 1)
        assert build_sector(config, 39, 18) == bytes(SECTOR_SIZE)


# =============================================================================
# Image Tests
# =============================================================================

class TestDiskImage:
    """Tests for whole images."""

    def test_image_size(self, config):
        """Test that the image holds every sector."""
        assert len(create_disk_image(config)) == 40 * 18 * SECTOR_SIZE

    def test_smallest_image(self):
        """Test a 2 track, 5 sector disk."""
        config = DiskConfig(tracks=2, sectors=5, creation_date=date(2000, 1, 1))
        image = create_disk_image(config)
        assert len(image) == 10 * SECTOR_SIZE
        # Only one directory sector, so the chain ends immediately
        assert sector_at(image, config, 0, 5) == bytes(SECTOR_SIZE)

    def test_walk_free_chain(self, config):
        """Test that the free chain visits every free sector once."""
        image = create_disk_image(config)
        sir = sector_at(image, config, 0, 3)
        position = (sir[29], sir[30])
        visited = 0
        while position != (0, 0):
            visited += 1
            position = link(sector_at(image, config, *position))
        assert visited == config.free_sectors

    def test_walk_directory_chain(self, config):
        """Test that the directory chain runs from sector 5 to the last sector."""
        image = create_disk_image(config)
        position = (0, 5)
        visited = []
        while position != (0, 0):
            visited.append(position)
            position = link(sector_at(image, config, *position))
        assert visited == [(0, s) for s in range(5, 19)]

    def test_write_matches_create(self, config):
        """Test that streaming and in-memory images are identical."""
        out = io.BytesIO()
        written = write_disk_image(config, out)
        assert written == config.image_size
        assert out.getvalue() == create_disk_image(config)

    def test_sector_count(self, config):
        """Test that iter_sectors yields tracks x sectors sectors."""
        assert sum(1 for _ in iter_sectors(config)) == 40 * 18

    def test_invalid_config_writes_nothing(self):
        """Test that validation happens before any output."""
        out = io.BytesIO()
        with pytest.raises(DiskImageError):
            write_disk_image(DiskConfig(tracks=1), out)
        assert out.getvalue() == b""
