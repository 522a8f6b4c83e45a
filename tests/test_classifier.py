"""Tests for message segment classification."""

import pytest
from huddle.config import ClassifierConfig
from huddle.core.classifier import (
    Classifier,
    Emoji,
    FormattedText,
    Link,
    classify,
    find_links,
    segments_text,
)
from huddle.core.emoji import EmojiTable


class TestClassify:
    def test_plain_message(self):
        assert classify("just *words*") == [FormattedText("just *words*")]

    def test_empty_message(self):
        assert classify("") == []

    def test_link_flanked_by_text(self):
        result = classify("see https://example.com/x now")
        assert result == [
            FormattedText("see "),
            Link("https://example.com/x"),
            FormattedText(" now"),
        ]

    def test_bare_domain_is_link(self):
        result = classify("go to www.example.org")
        assert result[-1] == Link("www.example.org")

    def test_query_string_kept(self):
        result = classify("https://example.com/search?q=a&b=c")
        assert result == [Link("https://example.com/search?q=a&b=c")]

    def test_trailing_period_kept_by_default(self):
        result = classify("visit example.com.")
        assert result == [FormattedText("visit "), Link("example.com.")]

    def test_trailing_period_trimmed_when_configured(self):
        config = ClassifierConfig(trim_link_punctuation=True)
        result = classify("visit example.com.", config=config)
        assert result == [
            FormattedText("visit "),
            Link("example.com"),
            FormattedText("."),
        ]

    def test_link_before_non_ascii_letter(self):
        result = classify("see example.comé now")
        assert Link("example.com") in result
        assert segments_text(result) == "see example.comé now"

    def test_emoji_shortcode(self):
        result = classify("nice :tada: work")
        assert result == [
            FormattedText("nice "),
            Emoji(glyph="🎉", source_text=":tada:"),
            FormattedText(" work"),
        ]

    def test_whitespace_between_emoji_is_formatted(self):
        result = classify(":fire: :fire:")
        assert result[1] == FormattedText(" ")
        assert isinstance(result[0], Emoji)
        assert isinstance(result[2], Emoji)

    def test_ascii_emoticon_needs_word_boundary(self):
        assert classify("hi :)") == [FormattedText("hi "), Emoji("🙂", ":)")]
        assert classify("f(x):)") == [FormattedText("f(x):)")]

    def test_mixed_order(self):
        result = classify(":wave: see example.com :)")
        kinds = [type(s) for s in result]
        assert kinds == [Emoji, FormattedText, Link, FormattedText, Emoji]

    def test_not_a_url(self):
        assert classify("hello world") == [FormattedText("hello world")]

    @pytest.mark.parametrize("raw", [
        "see https://example.com/x now",
        ":wave: hi :) bye <3",
        "a.b.c example.com, www.test.io! :tada::tada:",
        "   ",
        "**bold** `code` _em_ [x](http://example.com)",
        "line one\nline two :heart:",
    ])
    def test_lossless(self, raw):
        assert segments_text(classify(raw)) == raw

    def test_idempotent(self):
        raw = "ping @Ana about https://example.com/doc :+1:"
        assert classify(raw) == classify(raw)

    def test_no_empty_segments(self):
        for segment in classify(":fire:example.com:fire:"):
            assert segment.source


class TestClassifier:
    def test_default_matches_fresh_instance(self):
        raw = "hi :wave: see example.com. :)"
        assert classify(raw) == Classifier().classify(raw)

    def test_custom_table(self):
        classifier = Classifier(table=EmojiTable({":ship:": "🚢"}))
        assert classifier.classify(":ship: it :)") == [
            Emoji("🚢", ":ship:"),
            FormattedText(" it :)"),
        ]

    def test_config_extends_defaults(self):
        config = ClassifierConfig(emoji={":ship:": "🚢"})
        result = Classifier(config=config).classify(":ship: :tada:")
        assert [s.glyph for s in result if isinstance(s, Emoji)] == ["🚢", "🎉"]

    def test_ascii_emoticons_can_be_disabled(self):
        config = ClassifierConfig(ascii_emoticons=False)
        assert Classifier(config=config).classify("ok :)") == [FormattedText("ok :)")]


class TestFindLinks:
    def test_spans(self):
        text = "a example.com b"
        assert find_links(text) == [(2, 13)]

    def test_multiple(self):
        text = "ex.com and my.org"
        assert [text[s:e] for s, e in find_links(text)] == ["ex.com", "my.org"]

    def test_no_links(self):
        assert find_links("nothing here, really.") == []
