"""Tests for the command-line entry points."""

import pytest
from click.testing import CliRunner

from huddle.config import Settings
from huddle.core.classifier import Emoji, FormattedText, Link, PlainText
from huddle.main import ChatSession, cli, describe_recipient, describe_segment
from huddle.models import UNBOUND, Bound, Participant


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.delenv("HUDDLE_CONFIG", raising=False)
    monkeypatch.setenv("HUDDLE_CONFIG_DIR", str(tmp_path))


class TestDescribe:
    def test_segments(self):
        assert describe_segment(Link("example.com")) == "link example.com"
        assert describe_segment(Emoji("🎉", ":tada:")) == "emoji 🎉 (:tada:)"
        assert describe_segment(FormattedText("hi")) == "text 'hi'"
        assert describe_segment(PlainText(" ")) == "plain ' '"

    def test_recipient(self):
        assert describe_recipient(UNBOUND) == "everyone"
        assert describe_recipient(Bound.to(Participant("1", "Ana"))) == "private to Ana"


class TestChatSession:
    async def test_private_message(self):
        lines = []
        session = ChatSession(Settings(roster=["Ana", "Bruno"]), echo=lines.append)
        await session.run(["@Ana see example.com\n", "   \n"])

        assert "[private to Ana] see example.com" in lines
        assert "  link example.com" in lines
        assert "  recipient: private to Ana" in lines
        assert sum(1 for line in lines if line.startswith("[")) == 1

    async def test_suggestions_echoed(self):
        lines = []
        session = ChatSession(Settings(roster=["Ana", "Anabel"]), echo=lines.append)
        await session.run(["@Ana hi"])
        assert "  suggest @Ana" in lines
        assert "  suggest @Anabel" in lines


class TestCli:
    def test_classify(self):
        result = CliRunner().invoke(cli, ["classify", "hi :tada: example.com"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "text 'hi '",
            "emoji 🎉 (:tada:)",
            "text ' '",
            "link example.com",
        ]

    def test_session(self):
        result = CliRunner().invoke(
            cli, ["session", "--participant", "Ana"], input="@Ana hello\nall hands\n"
        )
        assert result.exit_code == 0
        assert "[private to Ana] hello" in result.output
        # Private mode sticks across messages
        assert "[private to Ana] all hands" in result.output
