"""
Per-character color and style generators.

A generator maps a character index (0, 1, 2, ...) to an ANSI escape
fragment. The writer queries one foreground, one background and one
style generator for every character it emits.

Three kinds of color generator exist:
1. Mono: the same color for every index
2. Rainbow: sine waves per channel, phase-shifted by 120 degrees
3. Chaos: an independently random color per call
"""

import math
from dataclasses import dataclass, field
from typing import Literal

import numpy as np

from .color import (
    BLINK,
    BOLD,
    ITALIC,
    STRIKETHROUGH,
    UNDERLINE,
    Color,
    rgb_to_ansi_bg,
    rgb_to_ansi_fg,
)

Layer = Literal["fg", "bg"]
FOREGROUND: Layer = "fg"
BACKGROUND: Layer = "bg"

RAINBOW_FREQUENCY = 0.03
RAINBOW_FG_SHIFT = -1.0
RAINBOW_BG_SHIFT = 1.0

# Phase offsets of the red, green and blue channels (0, 120, 240 degrees)
_CHANNEL_PHASES = (0.0, 2 * math.pi / 3, 4 * math.pi / 3)

# Fixed emission order when several styles are active
STYLE_CODES = {
    "bold": BOLD,
    "italic": ITALIC,
    "underline": UNDERLINE,
    "blink": BLINK,
    "strikethrough": STRIKETHROUGH,
}


class Generator:
    """Base class: maps a character index to an escape fragment."""

    def __call__(self, index: int) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Constant(Generator):
    """Returns the same fragment for every index. Used for styles."""
    fragment: str = ""

    def __call__(self, index: int) -> str:
        return self.fragment


class ColorGenerator(Generator):
    """A generator producing a Color per index, rendered for its layer."""
    layer: Layer

    def color_at(self, index: int) -> Color:
        raise NotImplementedError

    def __call__(self, index: int) -> str:
        color = self.color_at(index)
        if self.layer == BACKGROUND:
            return rgb_to_ansi_bg(*color)
        return rgb_to_ansi_fg(*color)


@dataclass(frozen=True)
class Mono(ColorGenerator):
    """Constant color."""
    color: Color
    layer: Layer = FOREGROUND

    def color_at(self, index: int) -> Color:
        return self.color


def rainbow_channel(phase: float) -> int:
    """Map a phase angle to one channel value in [0, 255]."""
    return min(max(round(math.sin(phase) * 127 + 128), 0), 255)


@dataclass(frozen=True)
class Rainbow(ColorGenerator):
    """Smoothly cycling hue driven by the character index."""
    freq: float = RAINBOW_FREQUENCY
    shift: float = 0.0
    layer: Layer = FOREGROUND

    def color_at(self, index: int) -> Color:
        base = self.freq * index + self.shift
        return Color(*(rainbow_channel(base + offset) for offset in _CHANNEL_PHASES))


# Shared, unseeded source used when no generator is supplied
_default_rng = np.random.default_rng()


@dataclass(frozen=True)
class Chaos(ColorGenerator):
    """
    Uniformly random color for every call.

    The index is ignored, so two calls with the same index may differ.
    Pass a seeded numpy Generator as ``rng`` for reproducible output.
    """
    layer: Layer = FOREGROUND
    rng: np.random.Generator | None = field(default=None, compare=False, repr=False)

    def color_at(self, index: int) -> Color:
        rng = self.rng if self.rng is not None else _default_rng
        r, g, b = rng.integers(0, 256, size=3)
        return Color.truncated(r, g, b)


@dataclass(frozen=True)
class StyleFlags:
    """Which text styles are active."""
    bold: bool = False
    italic: bool = False
    underline: bool = False
    blink: bool = False
    strikethrough: bool = False

    def active(self) -> list[str]:
        """Names of the enabled styles, in emission order."""
        return [name for name in STYLE_CODES if getattr(self, name)]


def compose_style(flags: StyleFlags) -> Constant:
    """Combine the active styles into a single constant generator."""
    return Constant("".join(STYLE_CODES[name] for name in flags.active()))


NO_OP = Constant("")
