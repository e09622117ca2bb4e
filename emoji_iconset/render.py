from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO, Iterator

import jinja2

from .errors import TemplateError, WriteError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

ICONSET_TEMPLATE = "noto-emoji-iconset.html"
DICTIONARY_TEMPLATE = "emoji-dictionary.html"


def artifact_path(template_name: str, output_dir: str | Path) -> Path:
    return Path(output_dir) / Path(template_name).name


def _environment(template_dir: str | Path) -> jinja2.Environment:
    # Icon markup and the dictionary blob are already in their final form.
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        autoescape=False,
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
    )


def render_template(template_name: str, data: Any, *, template_dir: str | Path = TEMPLATES_DIR) -> str:
    env = _environment(template_dir)
    try:
        template = env.get_template(template_name)
    except jinja2.TemplateNotFound as e:
        raise TemplateError(f"Template not found: {Path(template_dir) / template_name}") from e
    except jinja2.TemplateError as e:
        raise TemplateError(f"Template {template_name} failed to parse: {e}") from e

    try:
        return template.render(data=data)
    except Exception as e:  # noqa: BLE001
        raise TemplateError(f"Template {template_name} failed to render: {e}") from e


def _default_file_mode() -> int:
    # os.umask can only be read by setting it.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@contextmanager
def atomic_output(path: Path) -> Iterator[BinaryIO]:
    """
    Yield a binary file that replaces `path` only if the block completes.

    On any exception the temporary file is removed and an existing `path` is
    left untouched. The finished file gets the same mode a plain open() would.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    except OSError as e:
        raise WriteError(f"Could not create {path}: {e}") from e

    try:
        with os.fdopen(fd, "wb") as f:
            yield f
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    try:
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise WriteError(f"Could not write {path}: {e}") from e


def write_text_atomic(path: Path, text: str) -> None:
    with atomic_output(path) as f:
        try:
            f.write(text.encode("utf-8"))
        except OSError as e:
            raise WriteError(f"Could not write {path}: {e}") from e


def render_artifact(
    template_name: str,
    data: Any,
    *,
    template_dir: str | Path = TEMPLATES_DIR,
    output_dir: str | Path = ".",
) -> Path:
    """
    Render `template_name` with `data` and write it to output_dir/template_name.

    The whole document is rendered before the output file is touched, so a
    TemplateError never leaves a partial artifact behind.
    """
    text = render_template(template_name, data, template_dir=template_dir)
    out_path = artifact_path(template_name, output_dir)
    write_text_atomic(out_path, text)
    logger.info("%s file created", out_path)
    return out_path
