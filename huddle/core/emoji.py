"""Emoji shortcode table and tokenizer."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

DEFAULT_EMOJI: dict[str, str] = {
    # Named shortcodes, matched anywhere
    ":smile:": "😄",
    ":smiley:": "😃",
    ":grinning:": "😀",
    ":blush:": "😊",
    ":slightly_smiling_face:": "🙂",
    ":wink:": "😉",
    ":laughing:": "😆",
    ":joy:": "😂",
    ":innocent:": "😇",
    ":scream:": "😱",
    ":angry:": "😠",
    ":cry:": "😢",
    ":sleepy:": "😪",
    ":thinking:": "🤔",
    ":heart:": "❤️",
    ":+1:": "👍",
    ":-1:": "👎",
    ":wave:": "👋",
    ":clap:": "👏",
    ":ok_hand:": "👌",
    ":pray:": "🙏",
    ":tada:": "🎉",
    ":mag:": "🔍",
    ":coffee:": "☕",
    ":fire:": "🔥",
    # ASCII emoticons, matched only as whole words
    ":)": "🙂",
    ":-)": "🙂",
    ":(": "🙁",
    ":-(": "🙁",
    ":D": "😃",
    ":-D": "😃",
    ";)": "😉",
    ";-)": "😉",
    ":P": "😛",
    ":-P": "😛",
    ":*": "😘",
    ":O": "😮",
    ";(": "😢",
    "<3": "❤️",
}

_NAMED_RE = re.compile(r":[\w+-]+:")


@dataclass(frozen=True)
class EmojiMatch:
    glyph: str
    source: str


def is_named_shortcode(code: str) -> bool:
    return _NAMED_RE.fullmatch(code) is not None


class EmojiTable:
    """Compiled shortcode -> glyph lookup.

    Named codes like ``:tada:`` are recognised anywhere in the text. ASCII
    emoticons like ``:)`` only count when surrounded by whitespace or the
    ends of the string, so ``http://`` and ``f(x):)`` stay as text. The
    longest candidate wins at each position.
    """

    def __init__(
        self,
        mapping: Mapping[str, str] | None = None,
        ascii_emoticons: bool = True,
    ) -> None:
        table = dict(DEFAULT_EMOJI if mapping is None else mapping)
        if not ascii_emoticons:
            table = {code: glyph for code, glyph in table.items() if is_named_shortcode(code)}
        self._table = table
        self._pattern = self._compile(table)

    @classmethod
    def with_overrides(
        cls, extra: Mapping[str, str], ascii_emoticons: bool = True
    ) -> EmojiTable:
        return cls({**DEFAULT_EMOJI, **extra}, ascii_emoticons=ascii_emoticons)

    @staticmethod
    def _compile(table: Mapping[str, str]) -> re.Pattern[str] | None:
        if not table:
            return None
        alternatives = []
        for code in sorted(table, key=len, reverse=True):
            if is_named_shortcode(code):
                alternatives.append(re.escape(code))
            else:
                alternatives.append(rf"(?<!\S){re.escape(code)}(?!\S)")
        return re.compile("|".join(alternatives))

    def __contains__(self, code: object) -> bool:
        return code in self._table

    def __len__(self) -> int:
        return len(self._table)

    def glyph(self, code: str) -> str | None:
        return self._table.get(code)

    def tokenize(self, text: str) -> list[str | EmojiMatch]:
        """Split ``text`` into plain runs and emoji matches, in order."""
        if self._pattern is None or not text:
            return [text] if text else []

        tokens: list[str | EmojiMatch] = []
        pos = 0
        for match in self._pattern.finditer(text):
            if match.start() > pos:
                tokens.append(text[pos:match.start()])
            code = match.group(0)
            tokens.append(EmojiMatch(glyph=self._table[code], source=code))
            pos = match.end()
        if pos < len(text):
            tokens.append(text[pos:])
        return tokens
