"""
Named colors, presets and color-specifier resolution.

Turns strings such as "red", "rainbow" or "rgb(12, 34, 56)" into
generators for the foreground or background layer.
"""

from dataclasses import dataclass

from .color import Color, parse_rgb
from .errors import ConfigError, FormatError
from .generators import (
    BACKGROUND,
    FOREGROUND,
    RAINBOW_BG_SHIFT,
    RAINBOW_FG_SHIFT,
    RAINBOW_FREQUENCY,
    Chaos,
    ColorGenerator,
    Layer,
    Mono,
    Rainbow,
)

COLOR_TABLE: dict[str, Color] = {
    "white": Color(255, 255, 255),
    "black": Color(0, 0, 0),
    "red": Color(255, 0, 0),
    "green": Color(0, 255, 0),
    "blue": Color(0, 0, 255),
    "yellow": Color(255, 255, 0),
    "cyan": Color(0, 255, 255),
    "magenta": Color(255, 0, 255),
    "gray": Color(128, 128, 128),
    "orange": Color(255, 165, 0),
    "purple": Color(128, 0, 128),
    "brown": Color(165, 42, 42),
    "pink": Color(255, 192, 203),
    "lime": Color(50, 205, 50),
    "teal": Color(0, 128, 128),
    "olive": Color(128, 128, 0),
    "maroon": Color(128, 0, 0),
    "navy": Color(0, 0, 128),
    "beige": Color(245, 245, 220),
    "coral": Color(255, 127, 80),
    "salmon": Color(250, 128, 114),
    "turquoise": Color(64, 224, 208),
    "indigo": Color(75, 0, 130),
    "khaki": Color(240, 230, 140),
    "plum": Color(221, 160, 221),
    "gold": Color(255, 215, 0),
    "silver": Color(192, 192, 192),
    "periwinkle": Color(204, 204, 255),
    "lavender": Color(230, 230, 250),
    "orchid": Color(218, 112, 214),
    "wheat": Color(245, 222, 179),
}


def _build_table(layer: Layer, rainbow_shift: float) -> dict[str, ColorGenerator]:
    table: dict[str, ColorGenerator] = {
        name: Mono(color, layer) for name, color in COLOR_TABLE.items()
    }
    table["rainbow"] = Rainbow(RAINBOW_FREQUENCY, rainbow_shift, layer)
    table["chaos"] = Chaos(layer)
    return table


FOREGROUNDS = _build_table(FOREGROUND, RAINBOW_FG_SHIFT)
BACKGROUNDS = _build_table(BACKGROUND, RAINBOW_BG_SHIFT)


def resolve_color(spec: str, layer: Layer = FOREGROUND) -> ColorGenerator:
    """
    Resolve a color specifier to a generator.

    Args:
        spec: Registered color name (case-sensitive) or rgb literal.
        layer: "fg" or "bg".

    Returns:
        Generator rendering escapes for the requested layer.

    Raises:
        FormatError: If spec is neither a known name nor an rgb literal.
    """
    table = BACKGROUNDS if layer == BACKGROUND else FOREGROUNDS
    if spec in table:
        return table[spec]

    try:
        color = parse_rgb(spec)
    except FormatError:
        raise FormatError(
            f"unknown color {spec!r} (expected a color name or rgb(R, G, B))"
        ) from None
    return Mono(color, layer)


@dataclass(frozen=True)
class Preset:
    """Default foreground and background specifiers."""
    fg: str | None = None
    bg: str | None = None


PRESETS: dict[str, Preset] = {
    "default": Preset(),
    "dark": Preset(fg="white", bg="black"),
    "light": Preset(fg="black", bg="white"),
    "rainbow": Preset(fg="rainbow"),
    "custom": Preset(),
}


def get_preset(name: str) -> Preset:
    """Look up a preset by name, raising ConfigError if unknown."""
    try:
        return PRESETS[name]
    except KeyError:
        choices = ", ".join(PRESETS)
        raise ConfigError(f"unknown preset {name!r} (choose from {choices})") from None
