"""Voting Event Emitter port.

This module defines the protocol for publishing the notifications the
engine produces after each committed state change.

Emission Rules:
1. EMIT ONCE - exactly one event per successful operation
2. EMIT LAST - the event is emitted only after state is fully applied
3. NEVER ON FAILURE - a rejected operation emits nothing
4. FAIL GRACEFULLY - emission never raises; a failed emission is reported
   by returning False and logged by the caller, and the committed state
   change stands
"""

from __future__ import annotations

from typing import Protocol

from stakevote.domain.events.voting import VotingEventPayload


class VotingEventEmitterProtocol(Protocol):
    """Protocol for voting event emission.

    Implementations:
    - InMemoryVotingEventEmitter: records events in order (development/testing)

    Example:
        await emitter.emit(
            VOTE_CAST_EVENT_TYPE,
            VoteCastPayload(choice=True, computed_weight=5494, ...),
        )
    """

    async def emit(self, event_type: str, payload: VotingEventPayload) -> bool:
        """Publish a voting event.

        Implementations must not raise. Transport errors are caught and
        reported through the return value.

        Args:
            event_type: One of the *_EVENT_TYPE constants.
            payload: The matching payload dataclass.

        Returns:
            True if the event was published, False otherwise.
            False does NOT indicate that the operation failed.
        """
        ...
