from __future__ import annotations

import logging
from typing import Iterable

from .codepoints import decode_sequence, sequence_from_filename
from .errors import DecodeError
from .markup import sanitize_svg
from .models import CollectResult, IconRecord, ItemFailure, SourceFile

logger = logging.getLogger(__name__)

FILENAME_SEPARATOR = "_"


def icon_record_from_file(source: SourceFile) -> IconRecord:
    text = decode_sequence(sequence_from_filename(source.name), FILENAME_SEPARATOR)
    return IconRecord(text=text, markup=sanitize_svg(source.content))


def collect_records(files: Iterable[SourceFile]) -> CollectResult:
    """
    Turn a listing of icon files into IconRecords, in listing order.

    Files whose name does not decode are skipped and reported in
    `failures`; anything else (e.g. a ReadError from a lazy listing)
    propagates.
    """
    files = list(files)
    total = len(files)
    logger.info("Parsing %d elements...", total)

    records: list[IconRecord] = []
    failures: list[ItemFailure] = []
    for index, source in enumerate(files, start=1):
        try:
            record = icon_record_from_file(source)
        except DecodeError as e:
            logger.warning("Error parsing element %d of %d (%s): %s", index, total, source.name, e)
            failures.append(ItemFailure(index=index, name=source.name, reason=str(e)))
            continue
        records.append(record)
        logger.debug("Parsed element %d of %d", index, total)

    return CollectResult(records=records, failures=failures)
