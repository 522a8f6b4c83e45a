"""Huddle entry point: a terminal chat input wired through the event bus."""

from __future__ import annotations

import asyncio
from typing import Callable, Iterable

import click

from huddle.config import Settings, load_settings
from huddle.core.bus import DraftSubmitted, Event, EventBus, EventType, RecipientChanged
from huddle.core.classifier import (
    Classifier,
    ContentSegment,
    Emoji,
    FormattedText,
    Link,
    PlainText,
)
from huddle.core.composer import BusHost, MessageComposer
from huddle.core.roster import StaticRoster
from huddle.models import Bound, KeyEvent, RecipientBinding
from huddle.utils.logging import get_logger, setup_logging

log = get_logger(__name__)

PrintFn = Callable[[str], None]


def describe_segment(segment: ContentSegment) -> str:
    if isinstance(segment, Emoji):
        return f"emoji {segment.glyph} ({segment.source_text})"
    if isinstance(segment, Link):
        return f"link {segment.url}"
    if isinstance(segment, FormattedText):
        return f"text {segment.text!r}"
    if isinstance(segment, PlainText):
        return f"plain {segment.text!r}"
    raise TypeError(f"unknown segment: {segment!r}")


def describe_recipient(binding: RecipientBinding) -> str:
    if isinstance(binding, Bound):
        return f"private to {binding.participant.name}"
    return "everyone"


class ChatSession:
    """Feeds typed lines through a composer and echoes what gets delivered."""

    def __init__(self, settings: Settings, echo: PrintFn = click.echo) -> None:
        self.settings = settings
        self.bus = EventBus()
        self.roster = StaticRoster.from_names(settings.roster)
        self.composer = MessageComposer(
            self.roster, BusHost(self.bus), settings.composer
        )
        self.classifier = Classifier(config=settings.classifier)
        self._echo = echo

    async def start(self) -> None:
        log.info("session_starting", participants=len(self.roster))
        self.bus.subscribe(EventType.DRAFT_SUBMITTED, self._on_submitted)
        self.bus.subscribe(EventType.RECIPIENT_CHANGED, self._on_recipient)
        await self.bus.start()

    async def stop(self) -> None:
        await self.bus.stop()
        log.info("session_stopped")

    async def feed(self, line: str) -> None:
        """Type ``line`` into the composer and press Enter."""
        self.composer.on_edit(line)
        for suggestion in self.composer.suggestions:
            self._echo(f"  suggest {suggestion.display}")
        self.composer.on_submit_key(KeyEvent(is_enter=True))
        await self.bus.drain()

    async def run(self, lines: Iterable[str]) -> None:
        await self.start()
        try:
            for line in lines:
                await self.feed(line.rstrip("\n"))
        finally:
            await self.stop()

    async def _on_submitted(self, event: Event) -> None:
        if not isinstance(event, DraftSubmitted) or event.message is None:
            return
        message = event.message
        self._echo(f"[{describe_recipient(message.recipient)}] {message.text}")
        for segment in self.classifier.classify(message.text):
            self._echo(f"  {describe_segment(segment)}")

    async def _on_recipient(self, event: Event) -> None:
        if isinstance(event, RecipientChanged):
            self._echo(f"  recipient: {describe_recipient(event.binding)}")


def _configure(config_path: str | None, log_level: str | None) -> Settings:
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    return settings


@click.group()
def cli() -> None:
    """Huddle chat draft tools."""


@cli.command()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option(
    "--participant", "participants", multiple=True,
    help="Roster name (repeatable, added after names from config)",
)
def session(config_path: str | None, log_level: str | None, participants: tuple[str, ...]) -> None:
    """Compose messages line by line; each line is sent with Enter."""
    settings = _configure(config_path, log_level)
    settings.roster = [*settings.roster, *participants]
    stdin = click.get_text_stream("stdin")
    asyncio.run(ChatSession(settings).run(stdin))


@cli.command("classify")
@click.argument("text")
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
def classify_cmd(text: str, config_path: str | None) -> None:
    """Print the display segments of TEXT."""
    settings = _configure(config_path, None)
    for segment in Classifier(config=settings.classifier).classify(text):
        click.echo(describe_segment(segment))


if __name__ == "__main__":
    cli()
