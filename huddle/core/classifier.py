"""Split a sent chat message into typed display segments."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Union

from huddle.config import ClassifierConfig
from huddle.core.emoji import EmojiMatch, EmojiTable

# Best-effort URL shape: optional scheme, optional www., dotted host with a
# 2-6 letter TLD, optional path/query. Not a URI validator.
_URL_RE = re.compile(
    r"(?:https?://.)?(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{2,256}\.[a-z]{2,6}\b"
    r"[-a-zA-Z0-9@:%_+.~#?&/=]*",
    re.ASCII,
)
_TRAILING_PUNCTUATION = ".,;:!?"


@dataclass(frozen=True)
class PlainText:
    text: str

    @property
    def source(self) -> str:
        return self.text


@dataclass(frozen=True)
class FormattedText:
    """Text to render with inline markdown, never raw HTML."""

    text: str

    @property
    def source(self) -> str:
        return self.text


@dataclass(frozen=True)
class Link:
    url: str

    @property
    def source(self) -> str:
        return self.url


@dataclass(frozen=True)
class Emoji:
    glyph: str
    source_text: str

    @property
    def source(self) -> str:
        return self.source_text


ContentSegment = Union[PlainText, FormattedText, Link, Emoji]


def find_links(text: str, trim_punctuation: bool = False) -> list[tuple[int, int]]:
    """Return ``(start, end)`` spans of URL-shaped substrings in ``text``."""
    spans: list[tuple[int, int]] = []
    for match in _URL_RE.finditer(text):
        start, end = match.span()
        if trim_punctuation:
            while end > start and text[end - 1] in _TRAILING_PUNCTUATION:
                end -= 1
            # Trimming can leave something that no longer looks like a URL
            if not _URL_RE.fullmatch(text, start, end):
                continue
        spans.append((start, end))
    return spans


class Classifier:
    """Holds a compiled emoji table; ``classify`` is pure and reentrant."""

    def __init__(
        self,
        table: EmojiTable | None = None,
        config: ClassifierConfig | None = None,
    ) -> None:
        self._config = config or ClassifierConfig()
        if table is None:
            table = EmojiTable.with_overrides(
                self._config.emoji, ascii_emoticons=self._config.ascii_emoticons
            )
        self._table = table

    @property
    def table(self) -> EmojiTable:
        return self._table

    def classify(self, raw: str) -> list[ContentSegment]:
        segments: list[ContentSegment] = []
        for token in self._table.tokenize(raw):
            if isinstance(token, EmojiMatch):
                segments.append(Emoji(glyph=token.glyph, source_text=token.source))
            else:
                segments.extend(self._split_text(token))
        return segments

    def _split_text(self, text: str) -> list[ContentSegment]:
        segments: list[ContentSegment] = []
        pos = 0
        for start, end in find_links(text, self._config.trim_link_punctuation):
            if start > pos:
                segments.append(FormattedText(text[pos:start]))
            segments.append(Link(text[start:end]))
            pos = end
        if pos < len(text):
            segments.append(FormattedText(text[pos:]))
        return segments


# Read-only after import
_DEFAULT_CLASSIFIER = Classifier()


def classify(
    raw: str,
    table: EmojiTable | None = None,
    config: ClassifierConfig | None = None,
) -> list[ContentSegment]:
    """Classify ``raw`` into emoji, link and text segments in original order."""
    if table is None and config is None:
        return _DEFAULT_CLASSIFIER.classify(raw)
    return Classifier(table, config).classify(raw)


def segments_text(segments: Iterable[ContentSegment]) -> str:
    """Rebuild the original message from its segments."""
    return "".join(segment.source for segment in segments)
