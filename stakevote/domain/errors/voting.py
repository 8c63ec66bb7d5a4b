"""Voting engine domain errors.

This module provides the error taxonomy for round management, ballot
casting and withdrawal. Every error carries machine-checkable fields
(a reason enum plus the identifiers involved) rather than relying on
the message text.

Error Guarantees:
- All errors are raised synchronously, before any state is mutated
- None of them are retried by the engine; callers resubmit once the
  violated condition is corrected
"""

from __future__ import annotations

from enum import Enum

from stakevote.domain.exceptions import StakeVoteError
from stakevote.domain.models.ballot import ClaimState


class VotingError(StakeVoteError):
    """Base error for all voting engine operations."""

    pass


class AuthorizationError(VotingError):
    """Raised when a non-authority caller invokes a privileged operation.

    Attributes:
        caller_id: Identity that attempted the operation.
        operation: Name of the privileged operation.
    """

    def __init__(self, caller_id: str, operation: str = "open_round") -> None:
        """Initialize the error.

        Args:
            caller_id: Identity that attempted the operation.
            operation: Name of the privileged operation.
        """
        self.caller_id = caller_id
        self.operation = operation
        super().__init__(f"Caller {caller_id} is not authorized to {operation}")


class ConfigurationErrorReason(Enum):
    """Why a round window was rejected."""

    ZERO_TIME = "zero_time"
    START_NOT_IN_FUTURE = "start_not_in_future"
    START_NOT_BEFORE_END = "start_not_before_end"
    PREVIOUS_ROUND_LIVE = "previous_round_live"


_CONFIGURATION_MESSAGES: dict[ConfigurationErrorReason, str] = {
    ConfigurationErrorReason.ZERO_TIME: "round start and end times cannot be zero",
    ConfigurationErrorReason.START_NOT_IN_FUTURE: "round start time has already passed",
    ConfigurationErrorReason.START_NOT_BEFORE_END: (
        "round start time must be before its end time"
    ),
    ConfigurationErrorReason.PREVIOUS_ROUND_LIVE: (
        "previous round is still ongoing and must end first"
    ),
}


class ConfigurationError(VotingError):
    """Raised when a round window is invalid or cannot be opened yet.

    Attributes:
        reason: Machine-checkable rejection reason.
        start_time: Requested start time.
        end_time: Requested end time.
        now: Clock reading the request was evaluated against.
    """

    def __init__(
        self,
        reason: ConfigurationErrorReason,
        start_time: int,
        end_time: int,
        now: int,
    ) -> None:
        """Initialize the error.

        Args:
            reason: Machine-checkable rejection reason.
            start_time: Requested start time.
            end_time: Requested end time.
            now: Clock reading the request was evaluated against.
        """
        self.reason = reason
        self.start_time = start_time
        self.end_time = end_time
        self.now = now
        super().__init__(
            f"{_CONFIGURATION_MESSAGES[reason]} "
            f"(start={start_time}, end={end_time}, now={now})"
        )


class StateErrorReason(Enum):
    """Which state rule blocked the operation."""

    ROUND_CLOSED = "round closed"
    CONFLICTING_CHOICE = "conflicting choice"
    ELECTION_NOT_FINISHED = "election not finished"


class StateError(VotingError):
    """Raised when the round or ballot state does not allow the operation.

    Covers voting while the round is closed, trying to flip a locked
    ballot, and withdrawing inside the blackout window before round end.

    Attributes:
        reason: Machine-checkable rejection reason.
        round_id: Round the operation targeted.
        voter_id: Voter involved, if any.
    """

    def __init__(
        self,
        reason: StateErrorReason,
        round_id: int,
        voter_id: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            reason: Machine-checkable rejection reason.
            round_id: Round the operation targeted.
            voter_id: Voter involved, if any.
        """
        self.reason = reason
        self.round_id = round_id
        self.voter_id = voter_id
        super().__init__(f"{reason.value} (round={round_id})")


class ResourceErrorReason(Enum):
    """Why balance could not be moved."""

    INSUFFICIENT_BALANCE = "insufficient balance"
    TRANSFER_FAILED = "transfer failed"


class ResourceError(VotingError):
    """Raised when the balance ledger cannot cover or complete a move.

    Attributes:
        reason: Machine-checkable rejection reason.
        voter_id: Identity whose balance was involved.
        requested: Amount that was requested.
        available: Balance reported by the ledger, when known.
    """

    def __init__(
        self,
        reason: ResourceErrorReason,
        voter_id: str,
        requested: int,
        available: int | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            reason: Machine-checkable rejection reason.
            voter_id: Identity whose balance was involved.
            requested: Amount that was requested.
            available: Balance reported by the ledger, when known.
        """
        self.reason = reason
        self.voter_id = voter_id
        self.requested = requested
        self.available = available
        detail = f"requested={requested}"
        if available is not None:
            detail += f", available={available}"
        super().__init__(f"{reason.value} for {voter_id} ({detail})")


class EmptyClaimError(VotingError):
    """Raised when a withdrawal finds nothing locked.

    Covers both "never voted" and "already withdrawn"; ``claim_state``
    tells them apart for callers that care.

    Attributes:
        round_id: Round the withdrawal targeted.
        voter_id: Voter who requested the withdrawal.
        claim_state: NO_BALLOT or WITHDRAWN.
    """

    def __init__(
        self,
        round_id: int,
        voter_id: str,
        claim_state: ClaimState = ClaimState.NO_BALLOT,
    ) -> None:
        """Initialize the error.

        Args:
            round_id: Round the withdrawal targeted.
            voter_id: Voter who requested the withdrawal.
            claim_state: NO_BALLOT or WITHDRAWN.
        """
        self.round_id = round_id
        self.voter_id = voter_id
        self.claim_state = claim_state
        super().__init__(
            f"Nothing to withdraw for {voter_id} in round {round_id} "
            f"({claim_state.value})"
        )
