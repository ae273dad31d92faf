"""
Colorizer configuration.

Values come from three places, highest priority first: command-line
flags, a JSON config file, and the selected preset.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigError
from .generators import (
    BACKGROUND,
    FOREGROUND,
    NO_OP,
    STYLE_CODES,
    Generator,
    StyleFlags,
    compose_style,
)
from .palette import get_preset, resolve_color
from .writer import ColorWriter

Generators = tuple[Generator, Generator, Generator]


class ConfigFile(BaseModel):
    """Settings accepted in a JSON config file. null means "not set"."""
    model_config = ConfigDict(extra="forbid", strict=True)

    preset: str | None = None
    fg: str | None = None
    bg: str | None = None
    input: str | None = None
    output: str | None = None
    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    blink: bool | None = None
    strikethrough: bool | None = None


@dataclass(frozen=True)
class ColorizeConfig:
    """Fully resolved settings for one colorizing run."""
    fg: str | None = None  # Foreground specifier (None = terminal default)
    bg: str | None = None  # Background specifier (None = terminal default)
    style: StyleFlags = field(default_factory=StyleFlags)
    input: str | None = None  # Input path (None = stdin)
    output: str | None = None  # Output path (None = stdout)
    text: str | None = None  # Literal text to colorize instead of input

    def generators(self) -> Generators:
        """
        Resolve the (foreground, background, style) generators.

        Raises:
            FormatError: If fg or bg is not a valid color specifier.
        """
        fg = resolve_color(self.fg, FOREGROUND) if self.fg is not None else NO_OP
        bg = resolve_color(self.bg, BACKGROUND) if self.bg is not None else NO_OP
        return fg, bg, compose_style(self.style)

    def build_writer(self, sink, generators: Generators | None = None) -> ColorWriter:
        """
        Create a writer for sink configured with this run's generators.

        Args:
            sink: Binary stream the writer outputs to.
            generators: Result of an earlier generators() call, resolved
                again when omitted.
        """
        fg, bg, style = generators if generators is not None else self.generators()
        return ColorWriter(sink).set_foreground(fg).set_background(bg).set_style(style)


def load_config_file(path: str) -> dict[str, Any]:
    """
    Read a JSON config file.

    Returns:
        Mapping of the keys that are set (not null) to their values.

    Raises:
        ConfigError: If the file can't be read, isn't a JSON object, or
            has unknown keys or values of the wrong type.
    """
    try:
        with open(path, encoding="utf-8") as f:
            config = ConfigFile.model_validate_json(f.read())
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"invalid config file {path}: {e}") from e

    return config.model_dump(exclude_none=True)


def _pick(*candidates):
    for value in candidates:
        if value is not None:
            return value
    return None


def build_config(
    cli: dict[str, Any],
    file_values: dict[str, Any] | None = None,
) -> ColorizeConfig:
    """
    Merge command-line values over config file values over the preset.

    Args:
        cli: Command-line values; None means "not given".
        file_values: Values loaded from a config file, if any.

    Returns:
        The resolved configuration.

    Raises:
        ConfigError: If the preset name is unknown.
    """
    file_values = file_values or {}
    preset = get_preset(_pick(cli.get("preset"), file_values.get("preset"), "default"))

    def merged(key):
        return _pick(cli.get(key), file_values.get(key))

    style = StyleFlags(**{name: bool(merged(name)) for name in STYLE_CODES})

    return ColorizeConfig(
        fg=_pick(merged("fg"), preset.fg),
        bg=_pick(merged("bg"), preset.bg),
        style=style,
        input=merged("input"),
        output=merged("output"),
        text=cli.get("text"),
    )
