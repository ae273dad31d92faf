"""
ANSI color code utilities for colorized text output.

Supports 24-bit true color (works in modern terminals like ghostty, iTerm2, kitty).
"""

import re
from typing import NamedTuple

from .errors import FormatError

ESC = "\x1b"

# ANSI escape code to reset all formatting
ANSI_RESET = f"{ESC}[0m"

BOLD = f"{ESC}[1m"
ITALIC = f"{ESC}[3m"
UNDERLINE = f"{ESC}[4m"
BLINK = f"{ESC}[5m"
STRIKETHROUGH = f"{ESC}[9m"

# rgb(R, G, B), case-insensitive token, optional spaces after commas
_RGB_PATTERN = re.compile(r"[rR][gG][bB]\(([0-9]+), *([0-9]+), *([0-9]+)\)")


class Color(NamedTuple):
    """A 24-bit color, one byte per channel."""
    r: int
    g: int
    b: int

    @classmethod
    def truncated(cls, r: int, g: int, b: int) -> "Color":
        """Build a color keeping only the low 8 bits of each channel."""
        return cls(int(r) & 0xFF, int(g) & 0xFF, int(b) & 0xFF)


def rgb_to_ansi_fg(r: int, g: int, b: int) -> str:
    """
    Return ANSI escape code for 24-bit true color foreground.

    Args:
        r, g, b: Color components (0-255).

    Returns:
        ANSI escape sequence string.
    """
    return f"{ESC}[38;2;{r};{g};{b}m"


def rgb_to_ansi_bg(r: int, g: int, b: int) -> str:
    """
    Return ANSI escape code for 24-bit true color background.

    Args:
        r, g, b: Color components (0-255).

    Returns:
        ANSI escape sequence string.
    """
    return f"{ESC}[48;2;{r};{g};{b}m"


def parse_rgb(text: str) -> Color:
    """
    Parse an ``rgb(R, G, B)`` literal.

    Args:
        text: Literal such as "rgb(12, 34, 56)" or "RGB(0,0,0)".

    Returns:
        The parsed color.

    Raises:
        FormatError: If the text is not an rgb literal or a channel
            does not fit in 8 bits.
    """
    match = _RGB_PATTERN.fullmatch(text)
    if match is None:
        raise FormatError(f"invalid RGB format: {text!r}")

    channels = [int(group) for group in match.groups()]
    if any(value > 255 for value in channels):
        raise FormatError(f"RGB channel out of range in {text!r}")

    return Color(*channels)
