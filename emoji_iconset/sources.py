# Collaborators around the pure pipeline: the upstream icon tree, the emoji
# feed and the external analysis command. Everything here touches disk,
# network or subprocesses; failures are fatal and raised as IconsetError.
from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Iterator, Sequence
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .codepoints import FILENAME_SUFFIX
from .errors import AnalysisError, ReadError, WriteError
from .render import atomic_output
from .models import SourceFile

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_SECONDS = 60


def needs_build(path: Path, refresh: bool) -> bool:
    return refresh or not path.exists()


def clone_source(repo_url: str, dest: Path) -> None:
    logger.info("Downloading %s into %s...", repo_url, dest)
    try:
        subprocess.run(
            ["git", "clone", "--depth", "1", repo_url, str(dest)],
            check=True,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        raise ReadError("git is not installed") from e
    except subprocess.CalledProcessError as e:
        raise ReadError(f"git clone {repo_url} failed: {(e.stderr or '').strip()[:400]}") from e
    logger.info("%s finished downloading", dest)


def ensure_source(repo_url: str, dest: Path, *, refresh: bool = False) -> bool:
    if needs_build(dest, refresh):
        if dest.exists():
            logger.info("Removing stale %s", dest)
            try:
                shutil.rmtree(dest)
            except OSError as e:
                raise WriteError(f"Could not remove {dest}: {e}") from e
        clone_source(repo_url, dest)
        return True
    return False


def list_source_files(svg_dir: Path, *, suffix: str = FILENAME_SUFFIX) -> list[Path]:
    if not svg_dir.is_dir():
        raise ReadError(f"Missing icon directory: {svg_dir}")
    try:
        return sorted((p for p in svg_dir.iterdir() if p.name.endswith(suffix) and p.is_file()), key=lambda p: p.name)
    except OSError as e:
        raise ReadError(f"Could not list {svg_dir}: {e}") from e


def read_source_file(path: Path) -> SourceFile:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Could not read {path}: {e}") from e
    return SourceFile(name=path.name, content=content)


def iter_source_files(svg_dir: Path) -> Iterator[SourceFile]:
    for path in list_source_files(svg_dir):
        yield read_source_file(path)


def fetch_feed(url: str, *, timeout: int = FETCH_TIMEOUT_SECONDS) -> bytes:
    req = Request(url, headers={"Accept": "application/json"}, method="GET")
    try:
        with urlopen(req, timeout=timeout) as resp:  # nosec - fixed build-time feed
            return resp.read()
    except HTTPError as e:
        raise ReadError(f"Emoji feed request failed: HTTP {e.code} {url}") from e
    except (URLError, OSError) as e:
        raise ReadError(f"Emoji feed request failed: {e}") from e


def run_analysis(command: Sequence[str], target: Path, out_path: Path) -> Path:
    """Run `command target` and store its stdout in out_path; a failed run keeps the previous file."""
    if not command:
        raise AnalysisError("Analysis command is empty")
    argv = [*command, str(target)]
    logger.info("Executing: %s > %s", " ".join(argv), out_path)
    with atomic_output(out_path) as out_file:
        try:
            subprocess.run(argv, stdout=out_file, stderr=subprocess.PIPE, check=True)
        except FileNotFoundError as e:
            raise AnalysisError(f"Analysis command not found: {argv[0]}") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
            raise AnalysisError(f"{' '.join(argv)} exited with {e.returncode}: {stderr[:400]}") from e
    logger.info("%s file created", out_path)
    return out_path
