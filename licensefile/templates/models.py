"""Data models for template scanning and grammar compilation."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LiteralSegment:
    """A run of template text copied verbatim."""

    text: str


@dataclass(frozen=True)
class TokenSegment:
    """A supported placeholder, e.g. ``{{&email}}``."""

    name: str
    raw: str
    start: int
    end: int


Segment = LiteralSegment | TokenSegment


@dataclass(frozen=True)
class UnsupportedPlaceholder:
    """A placeholder-like fragment that is kept as literal text."""

    kind: str
    text: str
    start: int
    end: int


@dataclass
class TemplateScan:
    """Template scanning output."""

    segments: list[Segment] = field(default_factory=list)
    fields: list[str] = field(default_factory=list)
    occurrences: list[TokenSegment] = field(default_factory=list)
    unsupported: list[UnsupportedPlaceholder] = field(default_factory=list)

    def duplicate_fields(self) -> list[str]:
        seen: set[str] = set()
        duplicates: list[str] = []
        for occurrence in self.occurrences:
            if occurrence.name in seen and occurrence.name not in duplicates:
                duplicates.append(occurrence.name)
            seen.add(occurrence.name)
        return duplicates


@dataclass(frozen=True)
class LiteralNode:
    """Grammar node matching its text verbatim."""

    text: str


@dataclass(frozen=True)
class CaptureNode:
    """Grammar node capturing a span of any characters, newlines included."""

    name: str
    lazy: bool = True


GrammarNode = LiteralNode | CaptureNode
