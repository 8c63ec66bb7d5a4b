"""Base exception classes for the StakeVote domain layer."""


class StakeVoteError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    This enables consistent error handling across the application.

    Subclasses live in stakevote.domain.errors:
    - AuthorizationError
    - ConfigurationError
    - StateError
    - ResourceError
    - EmptyClaimError
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
