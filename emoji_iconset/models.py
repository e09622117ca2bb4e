from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class IconRecord:
    text: str
    markup: str


@dataclass(frozen=True)
class SourceFile:
    name: str
    content: str


@dataclass(frozen=True)
class ItemFailure:
    index: int
    name: str
    reason: str


@dataclass(frozen=True)
class CollectResult:
    records: list[IconRecord] = field(default_factory=list)
    failures: list[ItemFailure] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.records) + len(self.failures)

    @property
    def failed(self) -> int:
        return len(self.failures)


@dataclass(frozen=True)
class DictionaryResult:
    entries: dict[str, str] = field(default_factory=dict)
    failures: list[ItemFailure] = field(default_factory=list)
    # Items read from the feed; entries can be fewer when shortnames repeat.
    processed: int = 0

    @property
    def failed(self) -> int:
        return len(self.failures)


class CodePoints(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base: str = Field(..., min_length=1)


class FeedRecord(BaseModel):
    """One item of the emoji feed; only the fields the dictionary needs."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    code_points: CodePoints
    shortname: Any = None

    def name_or(self, key: str) -> str:
        if isinstance(self.shortname, str) and self.shortname.strip():
            return self.shortname.strip()
        return key
