"""Read-only participant roster consumed by the mention resolver."""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from huddle.models import Participant
from huddle.utils.logging import get_logger

log = get_logger(__name__)


class ParticipantIndex(Protocol):
    def all(self) -> Sequence[Participant]: ...


class StaticRoster:
    """In-memory roster kept in join order."""

    def __init__(self, participants: Iterable[Participant] = ()) -> None:
        self._participants: list[Participant] = list(participants)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> StaticRoster:
        return cls(Participant(id=f"p{i}", name=name) for i, name in enumerate(names, 1))

    def all(self) -> Sequence[Participant]:
        return tuple(self._participants)

    def add(self, participant: Participant) -> None:
        self._participants.append(participant)
        log.debug("participant_joined", participant_id=participant.id)

    def remove(self, participant_id: str) -> bool:
        before = len(self._participants)
        self._participants = [p for p in self._participants if p.id != participant_id]
        removed = len(self._participants) < before
        if removed:
            log.debug("participant_left", participant_id=participant_id)
        return removed

    def __len__(self) -> int:
        return len(self._participants)


def find_by_name(participants: Sequence[Participant], name: str) -> Participant | None:
    """First participant whose name equals ``name`` exactly, in roster order."""
    for participant in participants:
        if participant.name == name:
            return participant
    return None


def search(participants: Sequence[Participant], fragment: str) -> list[Participant]:
    """Participants whose name contains ``fragment`` (case-sensitive)."""
    return [p for p in participants if fragment in p.name]
