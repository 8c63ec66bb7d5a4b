"""In-memory voting event emitter stub.

Records every emitted event in order so tests and local runs can
inspect exactly what the engine announced.

WARNING: This stub is for development/testing only.
"""

from __future__ import annotations

from dataclasses import dataclass

from structlog import get_logger

from stakevote.application.ports.voting_event_emitter import (
    VotingEventEmitterProtocol,
)
from stakevote.domain.events.voting import VotingEventPayload

logger = get_logger(__name__)


@dataclass(frozen=True)
class EmittedEvent:
    """One recorded emission."""

    event_type: str
    payload: VotingEventPayload


class InMemoryVotingEventEmitter(VotingEventEmitterProtocol):
    """Event emitter that keeps emitted events in memory.

    Can be configured to simulate a failing transport.

    Attributes:
        should_fail: If True, emit records nothing and returns False.

    Example:
        emitter = InMemoryVotingEventEmitter()
        emitter.should_fail = True
        # operations still commit, but no event is recorded
    """

    def __init__(self) -> None:
        """Initialize with no recorded events."""
        self._events: list[EmittedEvent] = []
        self.should_fail: bool = False

    async def emit(self, event_type: str, payload: VotingEventPayload) -> bool:
        """Record the event and log it.

        Returns:
            True if recorded, False if should_fail is set.
        """
        if self.should_fail:
            return False

        self._events.append(EmittedEvent(event_type=event_type, payload=payload))
        logger.info("Voting event emitted", event_type=event_type, **payload.to_dict())
        return True

    @property
    def events(self) -> list[EmittedEvent]:
        """All recorded events, oldest first (copy)."""
        return list(self._events)

    def events_of_type(self, event_type: str) -> list[VotingEventPayload]:
        """Payloads of every recorded event with ``event_type``."""
        return [e.payload for e in self._events if e.event_type == event_type]

    @property
    def last(self) -> EmittedEvent | None:
        """Most recent event, or None if nothing was emitted."""
        return self._events[-1] if self._events else None

    def clear(self) -> None:
        """Clear all recorded events (for test cleanup)."""
        self._events.clear()
