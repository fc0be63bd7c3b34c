"""Tests for the command line interface."""

import io
import json

import pytest

from aprs_codec import __version__
from aprs_codec.cli import create_parser, main
from aprs_codec.core.config import CodecConfig, OutputConfig, ParserConfig
from aprs_codec.protocols.message import Message

POSITION = "ICA3D17F2>APRS,qAS,dl4mea:/074849h4821.61N\\01224.49E^322/103/A=003054 id213D17F2"
STATUS = "N0CALL-9>APRS:>235959hOn air"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the default configuration at an empty temporary directory."""
    path = tmp_path / "default" / "config.json"
    monkeypatch.setattr(CodecConfig, "get_default_config_path", classmethod(lambda cls: path))
    return path


def write_config(tmp_path, config):
    path = tmp_path / "custom.json"
    config.save(str(path))
    return str(path)


class TestParser:
    """Test argument parsing."""

    def test_parse_command(self):
        """Test parse options."""
        args = create_parser().parse_args(["parse", "--summary", POSITION])
        assert args.command == "parse"
        assert args.summary is True
        assert args.packets == [POSITION]

    def test_exclusive_output(self):
        """Test --debug and --summary cannot be combined."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["parse", "--debug", "--summary"])

    def test_version(self, capsys):
        """Test --version."""
        with pytest.raises(SystemExit):
            main(["--version"])
        assert __version__ in capsys.readouterr().out


class TestInfoCommand:
    """Test the info command."""

    def test_info(self, capsys):
        """Test info output."""
        assert main(["info"]) == 0
        assert f"APRS Codec v{__version__}" in capsys.readouterr().out

    def test_default_command(self, capsys):
        """Test no command shows info."""
        assert main([]) == 0
        assert "Supported Reports" in capsys.readouterr().out


class TestParseCommand:
    """Test the parse command."""

    def test_json(self, capsys):
        """Test JSON output for one packet."""
        assert main(["parse", POSITION]) == 0
        document = json.loads(capsys.readouterr().out)
        assert document["from"]["call"] == "ICA3D17F2"
        assert document["data"]["altitude_feet"] == 3054

    def test_compact_json_with_raw(self, tmp_path, capsys):
        """Test output options from a configuration file."""
        path = write_config(
            tmp_path, CodecConfig(output=OutputConfig(json_indent=None, include_raw=True))
        )
        assert main(["--config", path, "parse", POSITION, STATUS]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["raw"] == POSITION
        assert json.loads(lines[1])["data"]["comment"] == "On air"

    def test_summary(self, capsys):
        """Test one-line summaries."""
        assert main(["parse", "--summary", POSITION, STATUS]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == (
            "ICA3D17F2 -> APRS position 48.36017 N, 12.40817 E [\\^] alt 3054 ft"
        )
        assert lines[1] == "N0CALL-9 -> APRS status 'On air'"

    def test_debug(self, capsys):
        """Test Python representation output."""
        assert main(["parse", "--debug", STATUS]) == 0
        assert capsys.readouterr().out.startswith("Message(")

    def test_skip_invalid(self, capsys):
        """Test invalid packets are reported and skipped."""
        assert main(["parse", "--summary", "garbage", STATUS]) == 0
        captured = capsys.readouterr()
        assert "InvalidMessage" in captured.err
        assert "N0CALL-9 -> APRS" in captured.out

    def test_stop_on_invalid(self, tmp_path, capsys):
        """Test strict mode stops at the first invalid packet."""
        path = write_config(tmp_path, CodecConfig(parser=ParserConfig(skip_invalid=False)))
        assert main(["--config", path, "parse", "--summary", "garbage", STATUS]) == 1
        assert capsys.readouterr().out == ""

    def test_stdin(self, monkeypatch, capsys):
        """Test packets read from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO(f"{STATUS}\r\n\n{POSITION}\n"))
        assert main(["parse", "--summary"]) == 0
        assert len(capsys.readouterr().out.splitlines()) == 2

    def test_missing_config_file(self, tmp_path, capsys):
        """Test a missing configuration file falls back to defaults."""
        assert main(["--config", str(tmp_path / "none.json"), "parse", STATUS]) == 0
        assert json.loads(capsys.readouterr().out)["from"]["ssid"] == 9


class TestRoundtripCommand:
    """Test the roundtrip command."""

    def test_lossless(self, capsys):
        """Test packets that re-encode identically."""
        assert main(["roundtrip", POSITION, STATUS]) == 0
        assert "2 packet(s), 0 mismatch(es), 0 error(s)" in capsys.readouterr().out

    def test_leading_zero_ssid(self, capsys):
        """Test SSIDs with leading zeros re-encode identically."""
        assert main(["roundtrip", "N0CALL-09>APRS,WIDE1-01:>x"]) == 0
        assert "1 packet(s), 0 mismatch(es), 0 error(s)" in capsys.readouterr().out

    def test_mismatch(self, monkeypatch, capsys):
        """Test a packet that does not re-encode identically."""
        monkeypatch.setattr(Message, "to_bytes", lambda self: b"N0CALL>APRS:>y")
        assert main(["roundtrip", "N0CALL>APRS:>x"]) == 1
        out = capsys.readouterr().out
        assert "Mismatch" in out
        assert "1 packet(s), 1 mismatch(es), 0 error(s)" in out

    def test_error(self, capsys):
        """Test an invalid packet counts as an error."""
        assert main(["roundtrip", "garbage"]) == 1
        captured = capsys.readouterr()
        assert "1 packet(s), 0 mismatch(es), 1 error(s)" in captured.out
        assert "InvalidMessage" in captured.err
