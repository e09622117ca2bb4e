from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from pydantic import ValidationError

from .codepoints import decode_sequence
from .errors import DecodeError, ReadError
from .models import DictionaryResult, FeedRecord, ItemFailure

logger = logging.getLogger(__name__)

FEED_SEPARATOR = "-"

# Escaped so the JSON blob can sit inside an HTML <script> element.
_HTML_UNSAFE = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"}


def parse_feed(data: bytes) -> dict[str, Any]:
    try:
        obj = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise ReadError(f"Emoji feed is not valid JSON: {e}") from e
    if not isinstance(obj, dict):
        raise ReadError("Emoji feed was not a JSON object")
    return obj


def _decode_record(key: str, record: Any) -> tuple[str, str]:
    if not isinstance(record, FeedRecord):
        record = FeedRecord.model_validate(record)
    return record.name_or(key), decode_sequence(record.code_points.base, FEED_SEPARATOR)


def _failure_reason(e: Exception) -> str:
    if isinstance(e, ValidationError):
        err = e.errors()[0]
        loc = ".".join(str(x) for x in err["loc"]) or "record"
        return f"{loc}: {err['msg']}"
    return str(e)


def build_dictionary(entries: Mapping[str, Any]) -> DictionaryResult:
    """
    Decode feed records into a shortname -> text mapping.

    `entries` is the feed as parsed, keyed by feed key. Each record is filed
    under its `shortname`, or under its key when it has none. A record that
    fails is skipped without touching entries already decoded, so a bad
    duplicate never erases a good one.
    """
    total = len(entries)
    logger.info("Parsing %d emojis...", total)

    out: dict[str, str] = {}
    failures: list[ItemFailure] = []
    for index, (key, record) in enumerate(entries.items(), start=1):
        try:
            shortname, text = _decode_record(key, record)
        except (DecodeError, ValidationError) as e:
            reason = _failure_reason(e)
            logger.warning("Error parsing element %d of %d (%s): %s", index, total, key, reason)
            failures.append(ItemFailure(index=index, name=key, reason=reason))
            continue
        out[shortname] = text
        logger.debug("Parsed element %d of %d", index, total)

    return DictionaryResult(entries=out, failures=failures, processed=total)


def dictionary_json(entries: Mapping[str, str]) -> str:
    payload = json.dumps(dict(entries), ensure_ascii=False, separators=(",", ":"), sort_keys=True)
    for ch, escaped in _HTML_UNSAFE.items():
        payload = payload.replace(ch, escaped)
    return payload
