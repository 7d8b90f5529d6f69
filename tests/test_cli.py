"""
Command-Line Tool Tests
=======================

Integration tests for flex2sr, sr2flex and mkflexfs using Click's
CliRunner.
"""

from pathlib import Path

from click.testing import CliRunner

from flex_tools.cli.errors import ExitCode
from flex_tools.cli.flex2sr import main as flex2sr
from flex_tools.cli.mkflexfs import main as mkflexfs
from flex_tools.cli.sr2flex import main as sr2flex
from flex_tools.diskimage import SECTOR_SIZE


class TestFlex2sr:
    """Tests for the flex2sr command."""

    def test_convert(self):
        """Test a successful conversion."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.cmd").write_bytes(b"\x02\x01\x00\x02\xAA\xBB\x16\x01\x00")

            result = runner.invoke(flex2sr, ["prog.cmd", "prog.s19"])

            assert result.exit_code == ExitCode.SUCCESS, result.output
            lines = Path("prog.s19").read_text().splitlines()
            assert lines[1:] == ["S1050100AABB94", "S9030100FB", "S5030001FB"]

    def test_verbose_summary(self):
        """Test that verbose mode prints record counts."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.cmd").write_bytes(b"\x02\x01\x00\x02\xAA\xBB")

            result = runner.invoke(flex2sr, ["-v", "prog.cmd", "prog.s19"])

            assert result.exit_code == 0
            assert "Data records: 1" in result.output

    def test_unknown_record_type(self):
        """Test that an unknown type is reported with its offset."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.cmd").write_bytes(b"\x02\x01\x00\x01\xAA\x7F")

            result = runner.invoke(flex2sr, ["bad.cmd", "bad.s19"])

            assert result.exit_code == ExitCode.CONVERSION_ERROR
            assert "record type 7F" in result.output
            assert "offset 0x0005" in result.output
            # Header and the good record stay; no trailer
            assert len(Path("bad.s19").read_text().splitlines()) == 2

    def test_wrong_arity(self):
        """Test that a missing argument prints usage and fails."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.cmd").write_bytes(b"")

            result = runner.invoke(flex2sr, ["prog.cmd"])

            assert result.exit_code == ExitCode.INVALID_ARGS
            assert "Usage" in result.output

    def test_missing_input(self):
        """Test that a missing input file fails."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(flex2sr, ["missing.cmd", "out.s19"])
            assert result.exit_code == ExitCode.INVALID_ARGS


class TestSr2flex:
    """Tests for the sr2flex command."""

    def test_convert(self):
        """Test a successful conversion."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.s19").write_text("S1050100AABB94\nS9030000FC\n")

            result = runner.invoke(sr2flex, ["prog.s19", "prog.cmd"])

            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert Path("prog.cmd").read_bytes() == b"\x02\x01\x00\x02\xAA\xBB"

    def test_checksum_error(self):
        """Test that a bad checksum fails with the offset reported."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.s19").write_text("S9031000EC\nS1050100AABB95\n")

            result = runner.invoke(sr2flex, ["bad.s19", "bad.cmd"])

            assert result.exit_code == ExitCode.CONVERSION_ERROR
            assert "checksum mismatch" in result.output
            assert "offset 0x000B" in result.output
            assert Path("bad.cmd").read_bytes() == b"\x16\x10\x00"

    def test_too_many_arguments(self):
        """Test that extra arguments print usage and fail."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("a.s19").write_text("")

            result = runner.invoke(sr2flex, ["a.s19", "b.cmd", "c.cmd"])

            assert result.exit_code == ExitCode.INVALID_ARGS


class TestMkflexfs:
    """Tests for the mkflexfs command."""

    def test_create_file(self):
        """Test writing an image to a file."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(
                mkflexfs, ["-t", "35", "-s", "10", "-n", "WORK", "-v", "7", "-o", "work.dsk"]
            )

            assert result.exit_code == ExitCode.SUCCESS, result.output
            image = Path("work.dsk").read_bytes()
            assert len(image) == 35 * 10 * SECTOR_SIZE
            sir = image[2 * SECTOR_SIZE:3 * SECTOR_SIZE]
            assert sir[16:20] == b"WORK"
            assert sir[27:29] == b"\x00\x07"

    def test_stdout(self):
        """Test writing an image to standard output."""
        runner = CliRunner()
        result = runner.invoke(mkflexfs, ["-t", "2", "-s", "5"])

        assert result.exit_code == ExitCode.SUCCESS
        assert len(result.stdout_bytes) == 10 * SECTOR_SIZE

    def test_volume_name_too_long(self):
        """Test that long volume names are rejected."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(mkflexfs, ["-n", "TWELVECHARSX", "-o", "x.dsk"])

            assert result.exit_code == ExitCode.INVALID_ARGS
            assert "Volume name" in result.output
            assert not Path("x.dsk").exists()

    def test_bad_name_keeps_existing_image(self):
        """Test that rejected parameters leave an existing image untouched."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("old.dsk").write_bytes(b"\xE5" * SECTOR_SIZE)

            result = runner.invoke(mkflexfs, ["-n", "TWELVECHARSX", "-o", "old.dsk"])

            assert result.exit_code == ExitCode.INVALID_ARGS
            assert Path("old.dsk").read_bytes() == b"\xE5" * SECTOR_SIZE

    def test_too_few_tracks(self):
        """Test that track counts below 2 are rejected."""
        runner = CliRunner()
        result = runner.invoke(mkflexfs, ["-t", "1"])
        assert result.exit_code == ExitCode.INVALID_ARGS
