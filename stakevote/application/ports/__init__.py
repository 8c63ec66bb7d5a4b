"""Application ports for StakeVote.

Interfaces to the external collaborators the engine consumes:
- BalanceLedgerProtocol: balance queries and transfers
- AccessGateProtocol: authority check for round creation
- TimeAuthorityProtocol: injected clock
- VotingEventEmitterProtocol: notification sink
"""

from stakevote.application.ports.access_gate import AccessGateProtocol
from stakevote.application.ports.balance_ledger import BalanceLedgerProtocol
from stakevote.application.ports.time_authority import TimeAuthorityProtocol
from stakevote.application.ports.voting_event_emitter import (
    VotingEventEmitterProtocol,
)

__all__: list[str] = [
    "AccessGateProtocol",
    "BalanceLedgerProtocol",
    "TimeAuthorityProtocol",
    "VotingEventEmitterProtocol",
]
