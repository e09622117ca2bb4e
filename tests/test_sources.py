import io
import os
import stat
import subprocess
from pathlib import Path
from urllib.error import URLError

import pytest

from emoji_iconset import sources
from emoji_iconset.errors import AnalysisError, ReadError
from emoji_iconset.sources import (
    ensure_source,
    fetch_feed,
    iter_source_files,
    list_source_files,
    needs_build,
    run_analysis,
)


def test_needs_build(tmp_path: Path):
    target = tmp_path / "emoji-dictionary.html"
    assert needs_build(target, refresh=False)
    target.write_text("x", encoding="utf-8")
    assert not needs_build(target, refresh=False)
    assert needs_build(target, refresh=True)
    assert target.exists()


def test_listing_is_sorted_and_svg_only(source_dir: Path):
    names = [p.name for p in list_source_files(source_dir / "svg")]
    assert names == ["emoji_u0031_fe0f.svg", "emoji_u1f600.svg", "emoji_uXYZ.svg"]


def test_iter_source_files_reads_content(source_dir: Path):
    files = list(iter_source_files(source_dir / "svg"))
    assert files[0].name == "emoji_u0031_fe0f.svg"
    assert files[0].content.startswith("<svg")


def test_missing_directory_is_read_error(tmp_path: Path):
    with pytest.raises(ReadError):
        list_source_files(tmp_path / "missing")


def test_unreadable_file_is_read_error(tmp_path: Path):
    (tmp_path / "emoji_u1f600.svg").write_bytes(b"\xff\xfe\x00")
    with pytest.raises(ReadError):
        list(iter_source_files(tmp_path))


def test_ensure_source_skips_existing_checkout(source_dir: Path, monkeypatch):
    calls = []
    monkeypatch.setattr(sources, "clone_source", lambda repo, dest: calls.append((repo, dest)))
    assert ensure_source("https://example.invalid/noto-emoji", source_dir) is False
    assert calls == []


def test_ensure_source_refresh_removes_and_clones(source_dir: Path, monkeypatch):
    calls = []
    monkeypatch.setattr(sources, "clone_source", lambda repo, dest: calls.append((repo, dest)))
    assert ensure_source("https://example.invalid/noto-emoji", source_dir, refresh=True) is True
    assert calls == [("https://example.invalid/noto-emoji", source_dir)]
    assert not source_dir.exists()


def test_clone_failure_is_read_error(tmp_path: Path, monkeypatch):
    def fake_run(*args, **kwargs):
        raise subprocess.CalledProcessError(128, args[0], stderr="fatal: repository not found")

    monkeypatch.setattr(sources.subprocess, "run", fake_run)
    with pytest.raises(ReadError, match="repository not found"):
        sources.clone_source("https://example.invalid/x", tmp_path / "x")


class _FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def test_fetch_feed_returns_body(monkeypatch):
    monkeypatch.setattr(sources, "urlopen", lambda req, timeout: _FakeResponse(b"{}"))
    assert fetch_feed("https://example.invalid/emoji.json") == b"{}"


def test_fetch_feed_failure_is_read_error(monkeypatch):
    def fail(req, timeout):
        raise URLError("no route to host")

    monkeypatch.setattr(sources, "urlopen", fail)
    with pytest.raises(ReadError):
        fetch_feed("https://example.invalid/emoji.json")


def test_run_analysis_writes_stdout(tmp_path: Path, monkeypatch):
    seen = {}

    def fake_run(argv, stdout, stderr, check):
        seen["argv"] = argv
        stdout.write(b'{"elements": []}')
        return subprocess.CompletedProcess(argv, 0)

    monkeypatch.setattr(sources.subprocess, "run", fake_run)
    target = tmp_path / "noto-emoji-iconset.html"
    out = run_analysis(("polymer", "analyze"), target, tmp_path / "analysis.json")

    assert seen["argv"] == ["polymer", "analyze", str(target)]
    assert out.read_bytes() == b'{"elements": []}'


def test_run_analysis_missing_tool(tmp_path: Path, monkeypatch):
    def fake_run(argv, stdout, stderr, check):
        raise FileNotFoundError(argv[0])

    monkeypatch.setattr(sources.subprocess, "run", fake_run)
    with pytest.raises(AnalysisError, match="not found"):
        run_analysis(("polymer", "analyze"), tmp_path / "x.html", tmp_path / "analysis.json")


def test_run_analysis_empty_command(tmp_path: Path):
    with pytest.raises(AnalysisError):
        run_analysis((), tmp_path / "x.html", tmp_path / "analysis.json")


def test_failed_analysis_keeps_previous_output(tmp_path: Path, monkeypatch):
    out_path = tmp_path / "analysis.json"
    out_path.write_text('{"previous": true}', encoding="utf-8")

    def fake_run(argv, stdout, stderr, check):
        stdout.write(b'{"partial')
        raise subprocess.CalledProcessError(2, argv, stderr=b"analyzer crashed")

    monkeypatch.setattr(sources.subprocess, "run", fake_run)
    with pytest.raises(AnalysisError, match="exited with 2: analyzer crashed"):
        run_analysis(("polymer", "analyze"), tmp_path / "x.html", out_path)

    assert out_path.read_text(encoding="utf-8") == '{"previous": true}'
    assert [p.name for p in tmp_path.iterdir()] == ["analysis.json"]


def test_analysis_output_is_not_owner_only(tmp_path: Path, monkeypatch):
    def fake_run(argv, stdout, stderr, check):
        stdout.write(b"{}")
        return subprocess.CompletedProcess(argv, 0)

    monkeypatch.setattr(sources.subprocess, "run", fake_run)
    old = os.umask(0o022)
    try:
        out = run_analysis(("polymer", "analyze"), tmp_path / "x.html", tmp_path / "analysis.json")
    finally:
        os.umask(old)
    assert stat.S_IMODE(out.stat().st_mode) == 0o644
