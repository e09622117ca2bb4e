"""
Pytest configuration and fixtures
"""
from pathlib import Path

import pytest

GRINNING_SVG = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 128 128">\n'
    '\t<circle cx="64" cy="64" r="60"/>\n'
    "</svg>\n"
)
KEYCAP_SVG = '<svg xmlns="http://www.w3.org/2000/svg">\n\t<path d="M0 0h128"/>\n</svg>'


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "ICONSET_SOURCE_DIR",
        "ICONSET_SOURCE_REPO",
        "ICONSET_OUTPUT_DIR",
        "ICONSET_TEMPLATE_DIR",
        "ICONSET_FEED_URL",
        "ICONSET_ANALYSIS_COMMAND",
        "ICONSET_REFRESH_SOURCE",
        "ICONSET_REFRESH_DICTIONARY",
        "ICONSET_RUN_ANALYSIS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """A minimal noto-emoji checkout with one malformed filename."""
    root = tmp_path / "noto-emoji"
    svg = root / "svg"
    svg.mkdir(parents=True)
    (svg / "emoji_u1f600.svg").write_text(GRINNING_SVG, encoding="utf-8")
    (svg / "emoji_u0031_fe0f.svg").write_text(KEYCAP_SVG, encoding="utf-8")
    (svg / "emoji_uXYZ.svg").write_text(KEYCAP_SVG, encoding="utf-8")
    (svg / "README.md").write_text("not an icon", encoding="utf-8")
    return root


@pytest.fixture
def feed_bytes() -> bytes:
    return (
        b'{"1f600": {"code_points": {"base": "1f600"}, "shortname": ":grinning:", "category": "people"},'
        b' "0031-fe0f": {"code_points": {"base": "0031-fe0f"}, "shortname": ":one:"},'
        b' "bad": {"code_points": {"base": "zz"}, "shortname": ":broken:"}}'
    )
