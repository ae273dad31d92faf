"""Tests for configuration loading and the command-line interface."""

import io
import json

import pytest

from ansi_colorizer.cli import main, parse_args, run, stream
from ansi_colorizer.config import ColorizeConfig, build_config, load_config_file
from ansi_colorizer.errors import ConfigError, FormatError, SinkWriteError
from ansi_colorizer.generators import NO_OP, Constant, StyleFlags
from ansi_colorizer.writer import ColorWriter

RED_FG = b"\x1b[38;2;255;0;0m"
WHITE_FG = b"\x1b[38;2;255;255;255m"
BLACK_BG = b"\x1b[48;2;0;0;0m"
BOLD = b"\x1b[1m"
RESET = b"\x1b[0m"


def wrap(data: bytes, prefix: bytes) -> bytes:
    """Expected output for data with a constant escape prefix per byte."""
    out = b""
    for byte in data:
        char = bytes([byte])
        out += char if char == b"\n" else prefix + char + RESET
    return out


class TestConfig:
    """Tests for config merging and config files."""

    def test_defaults(self):
        """No settings means no colors and no styles."""
        config = build_config({})
        assert config == ColorizeConfig()
        fg, bg, style = config.generators()
        assert fg is NO_OP
        assert bg is NO_OP
        assert style == Constant("")

    def test_preset_supplies_colors(self):
        """A preset fills in colors that weren't given explicitly."""
        config = build_config({"preset": "dark"})
        assert config.fg == "white"
        assert config.bg == "black"

    def test_cli_overrides_file_overrides_preset(self):
        """Command line beats config file, which beats the preset."""
        file_values = {"preset": "dark", "fg": "red", "bg": "navy", "italic": True}
        config = build_config({"fg": "green", "bold": True}, file_values)
        assert config.fg == "green"
        assert config.bg == "navy"
        assert config.style == StyleFlags(bold=True, italic=True)

    def test_unknown_preset(self):
        """An unknown preset name is a config error."""
        with pytest.raises(ConfigError):
            build_config({"preset": "neon"})

    def test_invalid_color_fails_before_streaming(self):
        """Bad color specifiers fail when generators are resolved."""
        config = ColorizeConfig(fg="rgb(300,0,0)")
        with pytest.raises(FormatError):
            config.generators()

    def test_build_writer(self):
        """build_writer resolves and installs all three generators."""
        sink = io.BytesIO()
        config = ColorizeConfig(fg="red", bg="black", style=StyleFlags(bold=True))
        config.build_writer(sink).write(b"a\n")
        assert sink.getvalue() == wrap(b"a\n", RED_FG + BLACK_BG + BOLD)

    def test_build_writer_uses_resolved_generators(self):
        """Generators resolved earlier are installed as given."""
        sink = io.BytesIO()
        config = ColorizeConfig(fg="red")
        config.build_writer(sink, (Constant("F"), NO_OP, NO_OP)).write(b"a")
        assert sink.getvalue() == b"Fa" + RESET

    def test_load_config_file(self, tmp_path):
        """Only the keys present in the file are returned."""
        path = tmp_path / "colors.json"
        path.write_text(json.dumps({"fg": "red", "bold": True}))
        assert load_config_file(str(path)) == {"fg": "red", "bold": True}

    def test_load_config_file_null_means_unset(self, tmp_path):
        """A null value is treated as if the key were absent."""
        path = tmp_path / "colors.json"
        path.write_text(json.dumps({"fg": None, "bg": "navy", "bold": None}))
        values = load_config_file(str(path))
        assert values == {"bg": "navy"}
        assert build_config({}, values).fg is None

    @pytest.mark.parametrize("content", [
        "not json",
        "[1, 2]",
        '{"colour": "red"}',
        '{"bold": "yes"}',
        '{"bold": 1}',
        '{"fg": 12}',
    ])
    def test_load_config_file_rejects_invalid(self, tmp_path, content):
        """Malformed JSON, unknown keys and wrong types are config errors."""
        path = tmp_path / "colors.json"
        path.write_text(content)
        with pytest.raises(ConfigError):
            load_config_file(str(path))

    def test_load_missing_config_file(self, tmp_path):
        """A missing config file is a config error."""
        with pytest.raises(ConfigError):
            load_config_file(str(tmp_path / "missing.json"))


class TestRun:
    """Tests for streaming through run()."""

    def test_streams_stdin_to_stdout(self):
        """stdin is colorized onto stdout, which stays open."""
        stdin = io.BytesIO(b"ab\ncd")
        stdout = io.BytesIO()
        run(ColorizeConfig(fg="red"), stdin=stdin, stdout=stdout)
        # The last line has no trailing newline and is still written
        assert stdout.getvalue() == wrap(b"ab\ncd", RED_FG)
        assert not stdout.closed

    def test_text_argument(self):
        """Literal text is colorized with a trailing newline."""
        stdout = io.BytesIO()
        config = ColorizeConfig(bg="black", style=StyleFlags(bold=True), text="ok")
        run(config, stdout=stdout)
        assert stdout.getvalue() == wrap(b"ok\n", BLACK_BG + BOLD)

    def test_files(self, tmp_path):
        """Input and output files are opened by path."""
        source = tmp_path / "in.txt"
        target = tmp_path / "out.txt"
        source.write_bytes(b"x\n")
        run(ColorizeConfig(fg="white", input=str(source), output=str(target)))
        assert target.read_bytes() == wrap(b"x\n", WHITE_FG)

    def test_short_write_raises(self):
        """A sink accepting only part of a line is reported, not ignored."""
        class ShortSink:
            def write(self, data):
                return len(data) // 2

        writer = ColorWriter(ShortSink()).set_foreground(Constant("F"))
        with pytest.raises(SinkWriteError) as excinfo:
            stream([b"abcd\n"], writer)
        assert excinfo.value.written < 5


class TestMain:
    """Tests for the CLI entry point."""

    def test_parse_args(self):
        """Flags not given are None so lower-priority sources apply."""
        parsed = parse_args(["--fg", "red", "--bold", "-o", "out.txt", "hello"])
        assert parsed.fg == "red"
        assert parsed.bold is True
        assert parsed.italic is None
        assert parsed.output == "out.txt"
        assert parsed.text == "hello"

    def test_main_writes_output_file(self, tmp_path):
        """A preset run from file to file exits 0."""
        source = tmp_path / "in.txt"
        target = tmp_path / "out.txt"
        source.write_bytes(b"hi\n")
        status = main(["--preset", "dark", "-i", str(source), "-o", str(target)])
        assert status == 0
        assert target.read_bytes() == wrap(b"hi\n", WHITE_FG + BLACK_BG)

    def test_main_with_config_file(self, tmp_path):
        """Settings can come entirely from a config file."""
        config = tmp_path / "colors.json"
        config.write_text(json.dumps({"fg": "red", "output": str(tmp_path / "out.txt")}))
        status = main(["--config", str(config), "yo"])
        assert status == 0
        assert (tmp_path / "out.txt").read_bytes() == wrap(b"yo\n", RED_FG)

    def test_main_bad_config_file(self, tmp_path, capsys):
        """An invalid config file exits 1 with an error message."""
        config = tmp_path / "colors.json"
        config.write_text('{"colour": "red"}')
        assert main(["--config", str(config), "x"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_main_bad_color(self, tmp_path, capsys):
        """A bad color exits 1 without creating the output file."""
        target = tmp_path / "out.txt"
        status = main(["--fg", "notacolor", "-o", str(target), "x"])
        assert status == 1
        assert "Error" in capsys.readouterr().err
        assert not target.exists()

    def test_main_missing_input(self, tmp_path, capsys):
        """A missing input exits 1 without creating the output file."""
        target = tmp_path / "out.txt"
        status = main(["-i", str(tmp_path / "missing.txt"), "-o", str(target)])
        assert status == 1
        assert "not found" in capsys.readouterr().err
        assert not target.exists()

    def test_main_bad_preset(self, capsys):
        """An unknown preset is named in the error."""
        assert main(["--preset", "neon", "x"]) == 1
        assert "neon" in capsys.readouterr().err
