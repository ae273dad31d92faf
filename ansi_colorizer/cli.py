"""
Command-line interface for the ANSI colorizer.
"""

import argparse
import sys
from contextlib import ExitStack

from .config import ColorizeConfig, build_config, load_config_file
from .errors import ColorizerError, SinkWriteError
from .generators import STYLE_CODES
from .palette import PRESETS
from .writer import ColorWriter


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="colorize",
        description="Colorize text with 24-bit ANSI colors and styles.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Colors:
  a color name (red, navy, salmon, ...), rainbow, chaos, or rgb(R, G, B)

Examples:
  colorize --fg red --bg blue --bold --underline "Hello, World!"
  colorize --preset dark --input text.txt --output colored_text.txt
  ls -l | colorize --fg rainbow
  colorize --fg "rgb(255, 128, 0)" --bg chaos --italic notes.txt
        """,
    )

    parser.add_argument(
        "text",
        nargs="?",
        default=None,
        help="Text to colorize (default: read from --input or stdin)",
    )

    parser.add_argument(
        "-p", "--preset",
        default=None,
        help=f"Text style preset ({', '.join(PRESETS)}) (default: default)",
    )

    parser.add_argument(
        "--fg",
        default=None,
        metavar="COLOR",
        help="Foreground color (e.g. red, rainbow or rgb(255,0,0))",
    )

    parser.add_argument(
        "--bg",
        default=None,
        metavar="COLOR",
        help="Background color (e.g. black, chaos or rgb(0,0,0))",
    )

    for name in STYLE_CODES:
        parser.add_argument(
            f"--{name}",
            action="store_true",
            default=None,
            help=f"Apply {name} style",
        )

    parser.add_argument(
        "-i", "--input",
        default=None,
        metavar="FILE",
        help="Input file containing text to colorize (default: stdin)",
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        metavar="FILE",
        help="Output file to save the colorized text (default: stdout)",
    )

    parser.add_argument(
        "-c", "--config",
        default=None,
        metavar="FILE",
        help="JSON configuration file with default settings",
    )

    return parser.parse_args(args)


def stream(source, writer: ColorWriter) -> None:
    """
    Copy a binary stream line by line through the writer.

    Raises:
        SinkWriteError: If the output takes only part of a line.
    """
    for line in source:
        written = writer.write(line)
        if written < len(line):
            raise SinkWriteError(
                f"short write: {written} of {len(line)} bytes accepted",
                written=written,
            )
    writer.flush()


def run(config: ColorizeConfig, stdin=None, stdout=None) -> None:
    """
    Colorize according to config.

    Files named in config are opened and closed here; stdin and stdout
    (defaulting to the process's binary streams) are left open.

    Raises:
        FormatError: If a color specifier is invalid. Nothing is opened
            or written in that case.
        SinkWriteError: If writing the output fails.
        OSError: If an input or output file can't be opened.
    """
    generators = config.generators()

    with ExitStack() as stack:
        source = None
        if config.text is None:
            if config.input:
                source = stack.enter_context(open(config.input, "rb"))
            else:
                source = stdin if stdin is not None else sys.stdin.buffer

        if config.output:
            sink = stack.enter_context(open(config.output, "wb"))
        else:
            sink = stdout if stdout is not None else sys.stdout.buffer

        writer = config.build_writer(sink, generators)

        if source is None:
            source = [(config.text + "\n").encode("utf-8")]
        stream(source, writer)


def main(args: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parsed = parse_args(args)

    try:
        file_values = load_config_file(parsed.config) if parsed.config else None
        config = build_config(vars(parsed), file_values)
        run(config)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    except ColorizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
