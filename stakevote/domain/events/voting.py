"""Voting lifecycle event payloads.

This module defines the payloads emitted by the engine after each
successful state change. Exactly one event is emitted per committed
operation; failed operations emit nothing.

Events:
- round.opened: a new round window was created
- vote.cast: balance was locked behind a choice
- withdrawal.made: locked balance was returned to its voter
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Event type constants following lowercase.dot.notation convention
ROUND_OPENED_EVENT_TYPE: str = "round.opened"
VOTE_CAST_EVENT_TYPE: str = "vote.cast"
WITHDRAWAL_MADE_EVENT_TYPE: str = "withdrawal.made"


@dataclass(frozen=True, eq=True)
class RoundOpenedPayload:
    """Payload for round.opened events.

    Attributes:
        start_time: Inclusive start of voting.
        end_time: Exclusive end of voting.
        round_id: Id allocated to the new round.
        description: Free-text description of the round.
    """

    start_time: int
    end_time: int
    round_id: int
    description: str

    def __post_init__(self) -> None:
        """Validate payload fields.

        Raises:
            ValueError: If the round id is not positive or the window is reversed.
        """
        if self.round_id <= 0:
            raise ValueError(f"round_id must be positive, got {self.round_id}")
        if self.end_time <= self.start_time:
            raise ValueError(
                f"end_time ({self.end_time}) must be greater than "
                f"start_time ({self.start_time})"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert payload to dict for serialization."""
        return {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "round_id": self.round_id,
            "description": self.description,
        }


@dataclass(frozen=True, eq=True)
class VoteCastPayload:
    """Payload for vote.cast events.

    ``computed_weight`` is the dampened influence of this cast alone,
    not the voter's accumulated weight.

    Attributes:
        choice: Side that was backed.
        computed_weight: Weight this cast added to the tally.
        round_id: Round the vote was cast in.
        voter_id: Voter who cast.
        amount: Balance units locked by this cast.
    """

    choice: bool
    computed_weight: int
    round_id: int
    voter_id: str
    amount: int

    def __post_init__(self) -> None:
        """Validate payload fields.

        Raises:
            ValueError: If the amount is not positive or the weight is negative.
        """
        if self.amount <= 0:
            raise ValueError(f"amount must be positive, got {self.amount}")
        if self.computed_weight < 0:
            raise ValueError(
                f"computed_weight must be >= 0, got {self.computed_weight}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert payload to dict for serialization."""
        return {
            "choice": self.choice,
            "computed_weight": self.computed_weight,
            "round_id": self.round_id,
            "voter_id": self.voter_id,
            "amount": self.amount,
        }


@dataclass(frozen=True, eq=True)
class WithdrawalMadePayload:
    """Payload for withdrawal.made events.

    Attributes:
        voter_id: Voter the balance was returned to.
        amount: Balance units released from custody.
        round_id: Round the balance had been locked in.
        early_unwind: True when the withdrawal also reversed a live tally.
    """

    voter_id: str
    amount: int
    round_id: int
    early_unwind: bool = False

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError(f"amount must be positive, got {self.amount}")

    def to_dict(self) -> dict[str, Any]:
        """Convert payload to dict for serialization."""
        return {
            "voter_id": self.voter_id,
            "amount": self.amount,
            "round_id": self.round_id,
            "early_unwind": self.early_unwind,
        }


VotingEventPayload = RoundOpenedPayload | VoteCastPayload | WithdrawalMadePayload
