from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .collector import collect_records
from .config import BuildConfig
from .dictionary import build_dictionary, dictionary_json, parse_feed
from .models import CollectResult, DictionaryResult
from .render import DICTIONARY_TEMPLATE, ICONSET_TEMPLATE, artifact_path, render_artifact
from .sources import ensure_source, fetch_feed, iter_source_files, needs_build, run_analysis

logger = logging.getLogger(__name__)

ANALYSIS_FILENAME = "analysis.json"


@dataclass(frozen=True)
class IconsetBuild:
    path: Path
    result: CollectResult


@dataclass(frozen=True)
class DictionaryBuild:
    path: Path
    result: DictionaryResult


def write_iconset(cfg: BuildConfig) -> IconsetBuild:
    ensure_source(cfg.source_repo, cfg.source_dir, refresh=cfg.refresh_source)
    result = collect_records(iter_source_files(cfg.svg_dir))
    logger.info("Writing iconset...")
    path = render_artifact(ICONSET_TEMPLATE, result.records, template_dir=cfg.template_dir, output_dir=cfg.output_dir)
    return IconsetBuild(path=path, result=result)


def write_dictionary(cfg: BuildConfig, *, fetch: Callable[[str], bytes] | None = None) -> DictionaryBuild | None:
    """Fetch the feed and render the dictionary; None when it is already built and no refresh was asked."""
    path = artifact_path(DICTIONARY_TEMPLATE, cfg.output_dir)
    if not needs_build(path, cfg.refresh_dictionary):
        logger.info("%s already exists, skipping", path)
        return None

    logger.info("Writing emoji dictionary...")
    feed = parse_feed((fetch or fetch_feed)(cfg.feed_url))
    result = build_dictionary(feed)
    logger.info("Parsing emojis as JSON...")
    path = render_artifact(
        DICTIONARY_TEMPLATE,
        dictionary_json(result.entries),
        template_dir=cfg.template_dir,
        output_dir=cfg.output_dir,
    )
    return DictionaryBuild(path=path, result=result)


def write_analysis(cfg: BuildConfig, target: Path) -> Path:
    return run_analysis(cfg.analysis_command, target, cfg.output_dir / ANALYSIS_FILENAME)
