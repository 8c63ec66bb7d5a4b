"""Infrastructure stubs for development and testing.

This module provides in-memory implementations of the external
collaborators the engine consumes.

Available stubs:
- InMemoryBalanceLedger: Fixed-supply ledger with transfer failure injection
- SingleAuthorityGate: One designated identity may open rounds
- InMemoryVotingEventEmitter: Records emitted events in order

WARNING: These stubs are NOT for production use.
"""

from stakevote.infrastructure.stubs.access_gate_stub import SingleAuthorityGate
from stakevote.infrastructure.stubs.balance_ledger_stub import InMemoryBalanceLedger
from stakevote.infrastructure.stubs.voting_event_emitter_stub import (
    EmittedEvent,
    InMemoryVotingEventEmitter,
)

__all__: list[str] = [
    "EmittedEvent",
    "InMemoryBalanceLedger",
    "InMemoryVotingEventEmitter",
    "SingleAuthorityGate",
]
