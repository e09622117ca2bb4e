"""Noto emoji iconset and emoji dictionary builder."""

from .codepoints import decode_filename, decode_sequence, sequence_from_filename
from .collector import collect_records
from .dictionary import build_dictionary, dictionary_json, parse_feed
from .errors import AnalysisError, DecodeError, IconsetError, ReadError, TemplateError, WriteError
from .markup import sanitize_svg
from .models import CollectResult, DictionaryResult, FeedRecord, IconRecord, ItemFailure, SourceFile
from .render import render_artifact

__all__ = [
    "AnalysisError",
    "CollectResult",
    "DecodeError",
    "DictionaryResult",
    "FeedRecord",
    "IconRecord",
    "IconsetError",
    "ItemFailure",
    "ReadError",
    "SourceFile",
    "TemplateError",
    "WriteError",
    "build_dictionary",
    "collect_records",
    "decode_filename",
    "decode_sequence",
    "dictionary_json",
    "parse_feed",
    "render_artifact",
    "sanitize_svg",
    "sequence_from_filename",
]
