"""Draft buffer that drives mention resolution and hands messages to the host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from huddle.config import ComposerConfig
from huddle.core.bus import DraftSubmitted, EventBus, FocusRequested, RecipientChanged
from huddle.core.mentions import MentionResolver
from huddle.core.roster import ParticipantIndex
from huddle.models import (
    UNBOUND,
    Bound,
    KeyEvent,
    RecipientBinding,
    SubmittedMessage,
    Suggestion,
)
from huddle.utils.logging import get_logger

log = get_logger(__name__)


class ComposerHost(Protocol):
    def deliver(self, text: str, recipient: RecipientBinding) -> None: ...

    def set_recipient(self, binding: RecipientBinding) -> None: ...

    def request_focus(self) -> None: ...


def _noop(*_args: object) -> None:
    return None


@dataclass
class CallbackHost:
    """Host built from plain callables; unset hooks do nothing."""

    on_deliver: Callable[[str, RecipientBinding], None] = _noop
    on_recipient: Callable[[RecipientBinding], None] = _noop
    on_focus: Callable[[], None] = _noop

    def deliver(self, text: str, recipient: RecipientBinding) -> None:
        self.on_deliver(text, recipient)

    def set_recipient(self, binding: RecipientBinding) -> None:
        self.on_recipient(binding)

    def request_focus(self) -> None:
        self.on_focus()


class BusHost:
    """Host that publishes composer output as bus events."""

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus

    def deliver(self, text: str, recipient: RecipientBinding) -> None:
        self._bus.publish_nowait(
            DraftSubmitted(message=SubmittedMessage(text=text, recipient=recipient))
        )

    def set_recipient(self, binding: RecipientBinding) -> None:
        self._bus.publish_nowait(RecipientChanged(binding=binding))

    def request_focus(self) -> None:
        self._bus.publish_nowait(FocusRequested())


def strip_mention_tag(text: str, binding: RecipientBinding) -> str:
    """Remove the first ``"<tag> "`` from ``text`` when a recipient is bound."""
    if not isinstance(binding, Bound):
        return text
    marker = f"{binding.tag} "
    if marker not in text:
        return text
    return text.replace(marker, "", 1)


class MessageComposer:
    """Owns the draft and the recipient binding for one chat input."""

    def __init__(
        self,
        roster: ParticipantIndex,
        host: ComposerHost,
        config: ComposerConfig | None = None,
    ) -> None:
        self._resolver = MentionResolver(roster)
        self._host = host
        self._config = config or ComposerConfig()
        self._draft = ""
        self._binding: RecipientBinding = UNBOUND
        self._suggestions: tuple[Suggestion, ...] = ()
        self._mention_active = False
        self._smileys_panel_open = False

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def binding(self) -> RecipientBinding:
        return self._binding

    @property
    def suggestions(self) -> tuple[Suggestion, ...]:
        return self._suggestions

    @property
    def mention_active(self) -> bool:
        return self._mention_active

    @property
    def smileys_panel_open(self) -> bool:
        return self._smileys_panel_open

    @property
    def is_populated(self) -> bool:
        return bool(self._draft.strip())

    def on_edit(self, text: str) -> None:
        self._draft = text
        result = self._resolver.resolve(text)
        self._mention_active = result.active
        self._suggestions = result.suggestions
        if result.binding is not None:
            self._set_binding(result.binding)

    def on_submit(self) -> SubmittedMessage | None:
        trimmed = self._draft.strip()
        if not trimmed:
            return None

        message = SubmittedMessage(
            text=strip_mention_tag(trimmed, self._binding),
            recipient=self._binding,
        )
        self._host.deliver(message.text, message.recipient)
        log.info(
            "draft_submitted",
            chars=len(message.text),
            private=message.recipient.is_bound,
        )

        # Binding stays: private mode is sticky until retargeted or cleared
        self._draft = ""
        self._suggestions = ()
        self._mention_active = False
        self._focus()
        return message

    def on_submit_click(self) -> SubmittedMessage | None:
        return self.on_submit()

    def on_submit_key(self, event: KeyEvent) -> bool:
        """Handle a key press; True means the host must drop the newline."""
        if event.is_enter and not event.shift_held:
            self.on_submit()
            return True
        return False

    def on_smiley_selected(self, smiley_text: str) -> None:
        self._draft = f"{self._draft} {smiley_text}"
        self._smileys_panel_open = False
        self._focus()

    def toggle_smileys_panel(self) -> bool:
        self._smileys_panel_open = not self._smileys_panel_open
        self._focus()
        return self._smileys_panel_open

    def clear_recipient(self) -> None:
        self._set_binding(UNBOUND)

    def _set_binding(self, binding: RecipientBinding) -> None:
        if binding == self._binding:
            return
        self._binding = binding
        if isinstance(binding, Bound):
            log.debug("recipient_bound", participant_id=binding.participant.id)
        else:
            log.debug("recipient_cleared")
        self._host.set_recipient(binding)

    def _focus(self) -> None:
        if not self._config.restore_focus:
            return
        try:
            self._host.request_focus()
        except Exception:
            log.exception("focus_request_failed")
