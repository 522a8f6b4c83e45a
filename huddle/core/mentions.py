"""Leading @mention detection and private-recipient resolution."""

from __future__ import annotations

from dataclasses import dataclass

from huddle.core.roster import ParticipantIndex, find_by_name, search
from huddle.models import (
    MENTION_TRIGGER,
    UNBOUND,
    Bound,
    RecipientBinding,
    Suggestion,
)
from huddle.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class MentionResolution:
    active: bool = False
    token: str = ""
    suggestions: tuple[Suggestion, ...] = ()
    # None leaves the caller's current binding as it is
    binding: RecipientBinding | None = None


_INACTIVE = MentionResolution()


def extract_token(draft: str) -> str | None:
    """Return the word after a leading ``@``, or None if there is no mention."""
    if not draft.startswith(MENTION_TRIGGER):
        return None
    return draft[len(MENTION_TRIGGER):].split(" ", 1)[0]


def resolve_mention(draft: str, roster: ParticipantIndex) -> MentionResolution:
    """Derive suggestions and binding for ``draft`` from scratch.

    Mentions are only recognised at the very start of the draft. A bare
    ``@`` keeps mention mode on without searching. Suggestions (substring)
    and binding (exact name) are computed independently of each other.
    """
    token = extract_token(draft)
    if token is None:
        return _INACTIVE
    if not token:
        return MentionResolution(active=True)
    if not token.strip():
        return _INACTIVE

    participants = roster.all()
    suggestions = tuple(
        Suggestion(display=p.mention, participant=p) for p in search(participants, token)
    )
    match = find_by_name(participants, token)
    binding: RecipientBinding = Bound.to(match) if match is not None else UNBOUND
    return MentionResolution(
        active=True, token=token, suggestions=suggestions, binding=binding
    )


class MentionResolver:
    def __init__(self, roster: ParticipantIndex) -> None:
        self._roster = roster

    @property
    def roster(self) -> ParticipantIndex:
        return self._roster

    def resolve(self, draft: str) -> MentionResolution:
        result = resolve_mention(draft, self._roster)
        if result.token:
            if isinstance(result.binding, Bound):
                log.debug(
                    "mention_resolved",
                    token=result.token,
                    participant_id=result.binding.participant.id,
                    suggestions=len(result.suggestions),
                )
            else:
                log.debug(
                    "mention_unresolved",
                    token=result.token,
                    suggestions=len(result.suggestions),
                )
        return result
