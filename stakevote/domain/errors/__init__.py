"""Domain errors for StakeVote.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from StakeVoteError.
"""

from stakevote.domain.errors.voting import (
    AuthorizationError,
    ConfigurationError,
    ConfigurationErrorReason,
    EmptyClaimError,
    ResourceError,
    ResourceErrorReason,
    StateError,
    StateErrorReason,
    VotingError,
)

__all__: list[str] = [
    "AuthorizationError",
    "ConfigurationError",
    "ConfigurationErrorReason",
    "EmptyClaimError",
    "ResourceError",
    "ResourceErrorReason",
    "StateError",
    "StateErrorReason",
    "VotingError",
]
