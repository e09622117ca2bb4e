from __future__ import annotations

import re

_WHITESPACE_NOISE_RE = re.compile(r"[\r\n\t]")
# Everything up to and including the first <svg ...> tag (XML prolog, doctype, comments).
_OPEN_TAG_RE = re.compile(r"\A.*?<svg\b[^>]*>")
_CLOSE_TAG = "</svg>"


def sanitize_svg(raw: str) -> str:
    """
    Flatten an SVG document to the markup inside its outer <svg> element.

    Only an <svg> wrapper is recognised, which is what every Noto emoji file
    has. Input without one keeps its leading markup.
    """
    code = _WHITESPACE_NOISE_RE.sub("", raw)
    code = _OPEN_TAG_RE.sub("", code, count=1)
    head, sep, tail = code.rpartition(_CLOSE_TAG)
    if sep:
        code = head + tail
    return code
