"""
Streaming colorizer.

Wraps a binary output stream and surrounds every byte written through it
with the escapes produced by a foreground, a background and a style
generator, followed by a reset.
"""

from bisect import bisect_right

from .color import ANSI_RESET
from .errors import SinkWriteError
from .generators import NO_OP, Generator

NEWLINE = ord("\n")
_RESET_BYTES = ANSI_RESET.encode("ascii")


class ColorWriter:
    """
    File-like writer that colorizes each byte before passing it on.

    The sink is borrowed: it is never opened or closed here. Newlines
    are written unchanged and do not advance the character index.
    Instances are not thread-safe; callers sharing one across threads
    must lock around write().
    """

    def __init__(self, sink):
        self._sink = sink
        self.foreground: Generator = NO_OP
        self.background: Generator = NO_OP
        self.style: Generator = NO_OP
        self._index = 0

    @property
    def index(self) -> int:
        """Number of non-newline bytes colorized so far."""
        return self._index

    def set_foreground(self, generator: Generator) -> "ColorWriter":
        self.foreground = generator
        return self

    def set_background(self, generator: Generator) -> "ColorWriter":
        self.background = generator
        return self

    def set_style(self, generator: Generator) -> "ColorWriter":
        """Replace the style generator. Build combined styles with compose_style()."""
        self.style = generator
        return self

    def write(self, data: bytes | str) -> int:
        """
        Colorize data and write it to the sink in a single call.

        Args:
            data: Bytes to colorize. A str is encoded as UTF-8 first and
                then treated byte by byte.

        Returns:
            Number of input bytes whose colorized form the sink accepted.
            A sink that returns None is assumed to have taken everything.

        Raises:
            SinkWriteError: If the sink raises OSError.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")

        buffer = bytearray()
        # Offset in buffer where each input byte's output ends
        ends = []

        for byte in data:
            if byte == NEWLINE:
                buffer.append(byte)
            else:
                i = self._index
                buffer += self.foreground(i).encode("utf-8")
                buffer += self.background(i).encode("utf-8")
                buffer += self.style(i).encode("utf-8")
                buffer.append(byte)
                buffer += _RESET_BYTES
                self._index += 1
            ends.append(len(buffer))

        try:
            reported = self._sink.write(bytes(buffer))
        except OSError as e:
            raise SinkWriteError(f"write to output failed: {e}") from e

        if reported is None or reported >= len(buffer):
            return len(data)
        return bisect_right(ends, reported)

    def flush(self) -> None:
        flush = getattr(self._sink, "flush", None)
        if flush is None:
            return
        try:
            flush()
        except OSError as e:
            raise SinkWriteError(f"flush of output failed: {e}") from e
