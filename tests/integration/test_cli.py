"""
Integration Tests for the lsb-lab command line
"""

import logging

import pytest
from PIL import Image

from lsb_lab.cli import LsbLabCLI, main


@pytest.fixture
def cli(isolated_env):
    return LsbLabCLI()


@pytest.fixture
def root_level():
    root = logging.getLogger()
    saved = root.level
    yield root
    root.setLevel(saved)


class TestEncodeCommand:
    """Test cases for `lsb-lab encode`."""

    def test_encode_literal_text(self, cli, cover_path, tmp_path, capsys):
        output = tmp_path / "hidden"

        code = cli.run(["encode", str(cover_path), "meet at noon", str(output)])

        assert code == 0
        assert (tmp_path / "hidden.png").exists()
        assert "Encoded image saved to" in capsys.readouterr().out

    def test_encode_default_output(self, cli, cover_path, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert cli.run(["e", str(cover_path), "short"]) == 0
        assert (tmp_path / "encoded.png").exists()

    def test_encode_too_large_fails(self, cli, tmp_path, capsys):
        tiny = tmp_path / "tiny.png"
        Image.new("RGB", (3, 3)).save(tiny)

        code = cli.run(["encode", str(tiny), "far too long for nine pixels", str(tmp_path / "out.png")])

        assert code == 1
        assert "Error: Not enough capacity" in capsys.readouterr().err
        assert not (tmp_path / "out.png").exists()

    def test_encode_missing_image_fails(self, cli, tmp_path, capsys):
        code = cli.run(["encode", str(tmp_path / "missing.png"), "text"])

        assert code == 1
        assert "Error:" in capsys.readouterr().err


class TestDecodeCommand:
    """Test cases for `lsb-lab decode`."""

    def test_decode_file_to_stored_name(self, cli, cover_path, tmp_path, monkeypatch, capsys):
        secret = tmp_path / "plans.txt"
        secret.write_bytes(b"step one: hide")
        encoded = tmp_path / "encoded.png"
        assert cli.run(["encode", str(cover_path), str(secret), str(encoded)]) == 0

        workdir = tmp_path / "work"
        workdir.mkdir()
        monkeypatch.chdir(workdir)
        code = cli.run(["d", str(encoded)])

        assert code == 0
        assert (workdir / "plans.txt").read_bytes() == b"step one: hide"
        out = capsys.readouterr().out
        assert "Decoded payload saved to" in out
        assert "Original file name" not in out

    def test_decode_with_output_keeps_extension(self, cli, cover_path, tmp_path, capsys):
        encoded = tmp_path / "encoded.png"
        assert cli.run(["encode", str(cover_path), "literal payload", str(encoded)]) == 0

        code = cli.run(["decode", str(encoded), str(tmp_path / "out" / "message")])

        assert code == 0
        assert (tmp_path / "out" / "message.txt").read_text() == "literal payload"
        assert "Original file name was 'output.txt'" in capsys.readouterr().out

    def test_decode_plain_image_fails(self, cli, tmp_path, capsys):
        white = tmp_path / "white.png"
        Image.new("RGB", (6, 6), (255, 255, 255)).save(white)

        assert cli.run(["decode", str(white)]) == 1
        assert "Carrier truncated" in capsys.readouterr().err


class TestMiscCommands:
    """Test cases for capacity, help and the entry point."""

    def test_capacity(self, cli, cover_path, capsys):
        assert cli.run(["capacity", str(cover_path)]) == 0

        out = capsys.readouterr().out
        assert "40x30" in out
        assert "3600 bits" in out
        assert "440 bytes" in out

    def test_no_command_prints_help(self, cli, capsys):
        assert cli.run([]) == 0
        assert "usage: lsb-lab" in capsys.readouterr().out

    def test_main_exits_with_status(self, isolated_env, cover_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["capacity", str(cover_path)])

        assert exc_info.value.code == 0


class TestLogging:
    """Test cases for the CLI log level."""

    def test_encode_is_quiet_by_default(self, cli, cover_path, tmp_path, root_level, caplog):
        assert cli.run(["encode", str(cover_path), "quiet", str(tmp_path / "out.png")]) == 0

        assert root_level.level == logging.WARNING
        assert not [r for r in caplog.records if r.levelno < logging.WARNING]

    def test_log_level_option(self, cli, cover_path, root_level):
        assert cli.run(["--log-level", "DEBUG", "capacity", str(cover_path)]) == 0
        assert root_level.level == logging.DEBUG

    def test_log_level_from_environment(self, cli, cover_path, root_level, monkeypatch):
        monkeypatch.setenv("LSB_LOG_LEVEL", "info")

        assert cli.run(["capacity", str(cover_path)]) == 0
        assert root_level.level == logging.INFO
