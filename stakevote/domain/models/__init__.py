"""Domain models for StakeVote.

Rounds, ballots and weighted tallies, plus the in-memory stores that
own them.
"""

from stakevote.domain.models.ballot import (
    BallotBook,
    ClaimState,
    TallySnapshot,
    VoterBallot,
)
from stakevote.domain.models.round import (
    NO_ROUND_ID,
    RoundRegistry,
    RoundWindow,
)

__all__: list[str] = [
    "BallotBook",
    "ClaimState",
    "NO_ROUND_ID",
    "RoundRegistry",
    "RoundWindow",
    "TallySnapshot",
    "VoterBallot",
]
