from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .render import TEMPLATES_DIR

DEFAULT_SOURCE_REPO = "https://github.com/googlei18n/noto-emoji"
DEFAULT_FEED_URL = "https://raw.githubusercontent.com/Ranks/emojione/master/emoji.json"
DEFAULT_ANALYSIS_COMMAND = "polymer analyze"


@dataclass(frozen=True)
class BuildConfig:
    source_dir: Path
    source_repo: str
    output_dir: Path
    template_dir: Path
    feed_url: str
    analysis_command: tuple[str, ...]
    refresh_source: bool = False
    refresh_dictionary: bool = False
    run_analysis: bool = False

    @property
    def svg_dir(self) -> Path:
        return self.source_dir / "svg"


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


def get_build_config(**overrides: Any) -> BuildConfig:
    """Build settings from ICONSET_* env vars; keyword overrides (CLI flags) win."""
    cfg = BuildConfig(
        source_dir=Path(_env_str("ICONSET_SOURCE_DIR", "noto-emoji")),
        source_repo=_env_str("ICONSET_SOURCE_REPO", DEFAULT_SOURCE_REPO),
        output_dir=Path(_env_str("ICONSET_OUTPUT_DIR", ".")),
        template_dir=Path(_env_str("ICONSET_TEMPLATE_DIR", str(TEMPLATES_DIR))),
        feed_url=_env_str("ICONSET_FEED_URL", DEFAULT_FEED_URL),
        analysis_command=tuple(shlex.split(_env_str("ICONSET_ANALYSIS_COMMAND", DEFAULT_ANALYSIS_COMMAND))),
        refresh_source=_env_flag("ICONSET_REFRESH_SOURCE"),
        refresh_dictionary=_env_flag("ICONSET_REFRESH_DICTIONARY"),
        run_analysis=_env_flag("ICONSET_RUN_ANALYSIS"),
    )
    updates = {k: v for k, v in overrides.items() if v is not None}
    for key in ("source_dir", "output_dir", "template_dir"):
        if key in updates:
            updates[key] = Path(updates[key])
    if isinstance(updates.get("analysis_command"), str):
        updates["analysis_command"] = tuple(shlex.split(updates["analysis_command"]))
    return replace(cfg, **updates)
