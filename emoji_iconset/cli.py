from __future__ import annotations

import argparse
import logging
import sys

from .config import get_build_config
from .errors import IconsetError
from .pipeline import write_analysis, write_dictionary, write_iconset


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Build the Noto emoji iconset and the emoji shortname dictionary")
    ap.add_argument("--source-dir", default=None, help="Checkout of the noto-emoji repository (default: noto-emoji)")
    ap.add_argument("--output-dir", default=None, help="Directory the rendered artifacts are written to")
    ap.add_argument("--template-dir", default=None, help="Directory holding the artifact templates")
    ap.add_argument("--feed-url", default=None, help="URL of the emoji.json feed")
    ap.add_argument(
        "--refresh-source",
        "--update-noto",
        dest="refresh_source",
        action="store_true",
        default=None,
        help="Re-clone the noto-emoji repository",
    )
    ap.add_argument(
        "--refresh-dictionary",
        "--update-dictionary",
        dest="refresh_dictionary",
        action="store_true",
        default=None,
        help="Rebuild the emoji dictionary even if it already exists",
    )
    ap.add_argument(
        "--run-analysis",
        "--analysis",
        dest="run_analysis",
        action="store_true",
        default=None,
        help="Run the analysis command on the iconset and write analysis.json",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Log every parsed element")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = get_build_config(
        source_dir=args.source_dir,
        output_dir=args.output_dir,
        template_dir=args.template_dir,
        feed_url=args.feed_url,
        refresh_source=args.refresh_source,
        refresh_dictionary=args.refresh_dictionary,
        run_analysis=args.run_analysis,
    )

    try:
        iconset = write_iconset(cfg)
        print(f"Wrote {iconset.path} ({len(iconset.result.records)} icons, {iconset.result.failed} skipped)")

        dictionary = write_dictionary(cfg)
        if dictionary is not None:
            print(
                f"Wrote {dictionary.path} ({len(dictionary.result.entries)} emojis, {dictionary.result.failed} skipped)"
            )

        if cfg.run_analysis:
            analysis = write_analysis(cfg, iconset.path)
            print(f"Wrote {analysis}")
    except IconsetError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
