from __future__ import annotations


class IconsetError(RuntimeError):
    """Base class for every error raised by the iconset build."""


class DecodeError(IconsetError):
    """A codepoint sequence (or the filename carrying it) could not be decoded.

    Recoverable: the collectors skip the offending item and keep going.
    """


class ReadError(IconsetError):
    """An input directory, file or feed could not be read."""


class TemplateError(IconsetError):
    """A template is missing or failed to render."""


class WriteError(IconsetError):
    """An output artifact could not be written."""


class AnalysisError(IconsetError):
    """The external analysis command could not be run or failed."""
