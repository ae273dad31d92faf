"""Exceptions raised by the colorizer."""


class ColorizerError(Exception):
    """Base class for all colorizer errors."""


class FormatError(ColorizerError, ValueError):
    """A color specifier is neither a known name nor a valid rgb literal."""


class ConfigError(ColorizerError):
    """Invalid preset or configuration file."""


class SinkWriteError(ColorizerError, OSError):
    """The underlying output stream failed during a write."""

    def __init__(self, message: str, written: int = 0):
        super().__init__(message)
        self.written = written
