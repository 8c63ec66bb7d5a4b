"""
Domain layer - Pure voting rules for StakeVote.

This layer contains:
- Domain models (rounds, ballots, tallies and their stores)
- Domain events (round.opened, vote.cast, withdrawal.made)
- Domain services (weight dampening, withdrawal classification)
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or config.
Only stdlib and typing imports are allowed.
"""

from stakevote.domain.exceptions import StakeVoteError

__all__: list[str] = ["StakeVoteError"]
