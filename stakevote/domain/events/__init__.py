"""Domain events for StakeVote.

Payloads emitted after every committed state change.
"""

from stakevote.domain.events.voting import (
    ROUND_OPENED_EVENT_TYPE,
    VOTE_CAST_EVENT_TYPE,
    WITHDRAWAL_MADE_EVENT_TYPE,
    RoundOpenedPayload,
    VoteCastPayload,
    VotingEventPayload,
    WithdrawalMadePayload,
)

__all__: list[str] = [
    "ROUND_OPENED_EVENT_TYPE",
    "VOTE_CAST_EVENT_TYPE",
    "WITHDRAWAL_MADE_EVENT_TYPE",
    "RoundOpenedPayload",
    "VoteCastPayload",
    "VotingEventPayload",
    "WithdrawalMadePayload",
]
