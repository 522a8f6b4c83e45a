"""Typed models shared by the roster, resolver and composer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

MENTION_TRIGGER = "@"


@dataclass(frozen=True)
class Participant:
    id: str
    name: str

    @property
    def mention(self) -> str:
        return f"{MENTION_TRIGGER}{self.name}"


@dataclass(frozen=True)
class Unbound:
    """No private recipient; messages go to everyone."""

    @property
    def is_bound(self) -> bool:
        return False


@dataclass(frozen=True)
class Bound:
    """Private recipient resolved from the draft's leading mention."""

    participant: Participant
    tag: str

    @property
    def is_bound(self) -> bool:
        return True

    @classmethod
    def to(cls, participant: Participant) -> Bound:
        return cls(participant=participant, tag=participant.mention)


RecipientBinding = Union[Unbound, Bound]

UNBOUND = Unbound()


@dataclass(frozen=True)
class Suggestion:
    display: str
    participant: Participant


@dataclass(frozen=True)
class KeyEvent:
    is_enter: bool
    shift_held: bool = False


@dataclass(frozen=True)
class SubmittedMessage:
    text: str
    recipient: RecipientBinding
