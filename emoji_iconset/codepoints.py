from __future__ import annotations

import re

from .errors import DecodeError

FILENAME_PREFIX = "emoji_u"
FILENAME_SUFFIX = ".svg"

MAX_CODEPOINT = 0x10FFFF

_HEX_GROUP_RE = re.compile(r"[0-9a-fA-F]+")


def _codepoint_to_char(group: str) -> str:
    if not _HEX_GROUP_RE.fullmatch(group):
        raise DecodeError(f"Invalid hex codepoint group {group!r}")
    value = int(group, 16)
    if value > MAX_CODEPOINT:
        raise DecodeError(f"Codepoint {group!r} is beyond U+10FFFF")
    if 0xD800 <= value <= 0xDFFF:
        raise DecodeError(f"Codepoint {group!r} is a surrogate")
    return chr(value)


def decode_sequence(sequence: str, separator: str) -> str:
    """
    Decode a separator-joined list of hex codepoints into text.

    "1f600" decodes to U+1F600; "0031_fe0f" with "_" decodes to U+0031 U+FE0F. Groups are
    concatenated as-is, so ZWJ and modifier sequences come out exactly as
    listed. Raises DecodeError on the first bad group.
    """
    if not separator:
        raise ValueError("separator must not be empty")
    return "".join(_codepoint_to_char(group) for group in str(sequence).split(separator))


def sequence_from_filename(name: str, *, prefix: str = FILENAME_PREFIX, suffix: str = FILENAME_SUFFIX) -> str:
    if not name.startswith(prefix) or not name.endswith(suffix) or len(name) <= len(prefix) + len(suffix):
        raise DecodeError(f"Filename {name!r} does not match {prefix}<codepoints>{suffix}")
    return name[len(prefix) : len(name) - len(suffix)]


def decode_filename(name: str, *, separator: str = "_") -> str:
    return decode_sequence(sequence_from_filename(name), separator)
