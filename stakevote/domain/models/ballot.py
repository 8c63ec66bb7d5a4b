"""Voter ballot and weighted tally domain models.

A ballot records, per (round, voter), the side the voter took and how
much balance they have locked behind it. The weighted tally aggregates
dampened influence per (round, choice).

Ballot Constraints:
- While locked_amount > 0 the recorded choice cannot change; the only way
  to switch sides is to withdraw first (driving the amount to 0)
- Repeated same-choice casts accumulate locked_amount
- Withdrawal zeroes a ballot, it never deletes it
- The tally is a true running sum of every contribution, across casts
  and voters; only live-round unwinds subtract from it
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class ClaimState(Enum):
    """Withdrawal state of a (round, voter) pair.

    Values:
        NO_BALLOT: Voter never cast in this round.
        LOCKED: Voter has balance locked in this round.
        WITHDRAWN: Voter cast, then withdrew everything.
    """

    NO_BALLOT = "no_ballot"
    LOCKED = "locked"
    WITHDRAWN = "withdrawn"


@dataclass(frozen=True, eq=True)
class VoterBallot:
    """A voter's ballot for a single round.

    Attributes:
        round_id: The round this ballot belongs to.
        voter_id: Ledger identity of the voter.
        choice: Side taken, or None once the ballot has been withdrawn.
        locked_amount: Balance units currently held in custody.
        weight_contributed: Sum of the weights this voter's casts added
            to the tally of ``choice``.
    """

    round_id: int
    voter_id: str
    choice: bool | None
    locked_amount: int
    weight_contributed: int = 0

    def __post_init__(self) -> None:
        """Validate ballot fields.

        Raises:
            ValueError: If amounts are negative or a locked ballot has no choice.
        """
        if self.locked_amount < 0:
            raise ValueError(f"locked_amount must be >= 0, got {self.locked_amount}")
        if self.weight_contributed < 0:
            raise ValueError(
                f"weight_contributed must be >= 0, got {self.weight_contributed}"
            )
        if self.locked_amount > 0 and self.choice is None:
            raise ValueError("A ballot with a locked amount must record a choice")

    @property
    def is_locked(self) -> bool:
        """True while balance is held in custody for this ballot."""
        return self.locked_amount > 0

    @property
    def claim_state(self) -> ClaimState:
        """Derive the withdrawal state from the locked amount."""
        return ClaimState.LOCKED if self.is_locked else ClaimState.WITHDRAWN

    def conflicts_with(self, choice: bool) -> bool:
        """Check whether casting ``choice`` would flip a locked ballot."""
        return self.is_locked and self.choice != choice


@dataclass(frozen=True, eq=True)
class TallySnapshot:
    """Weighted results of a round at a point in time.

    Attributes:
        round_id: The round reported on.
        yes_weight: Aggregate influence behind ``True``.
        no_weight: Aggregate influence behind ``False``.
        is_final: True once the round has ended and the tally is frozen.
    """

    round_id: int
    yes_weight: int
    no_weight: int
    is_final: bool

    @property
    def total_weight(self) -> int:
        return self.yes_weight + self.no_weight

    @property
    def leading_choice(self) -> bool | None:
        """The choice ahead on weight, or None on a tie."""
        if self.yes_weight == self.no_weight:
            return None
        return self.yes_weight > self.no_weight


class BallotBook:
    """In-memory store of ballots and weighted tallies.

    Owned exclusively by one engine and shared by the ballot ledger and
    the withdrawal controller. Records are addressed by round id and
    voter identity; there is no raw iteration.
    """

    def __init__(self) -> None:
        """Initialize empty ballot and tally storage."""
        self._ballots: dict[tuple[int, str], VoterBallot] = {}
        self._tallies: dict[tuple[int, bool], int] = {}

    def get(self, round_id: int, voter_id: str) -> VoterBallot | None:
        """Return the ballot for (round, voter), or None if never cast."""
        return self._ballots.get((round_id, voter_id))

    def locked_amount(self, round_id: int, voter_id: str) -> int:
        """Return the balance a voter currently has locked in a round."""
        ballot = self.get(round_id, voter_id)
        return ballot.locked_amount if ballot is not None else 0

    def claim_state(self, round_id: int, voter_id: str) -> ClaimState:
        """Return the withdrawal state of (round, voter)."""
        ballot = self.get(round_id, voter_id)
        if ballot is None:
            return ClaimState.NO_BALLOT
        return ballot.claim_state

    def tally(self, round_id: int, choice: bool) -> int:
        """Return the aggregate weight behind ``choice`` in a round."""
        return self._tallies.get((round_id, choice), 0)

    def record_cast(
        self,
        round_id: int,
        voter_id: str,
        choice: bool,
        amount: int,
        weight: int,
    ) -> VoterBallot:
        """Apply a cast: accumulate the lock and add its weight to the tally.

        The caller is responsible for having rejected conflicting casts.

        Args:
            round_id: Round being voted in.
            voter_id: Voter casting.
            choice: Side being backed.
            amount: Balance units newly locked.
            weight: Dampened influence of this cast.

        Returns:
            The updated ballot.
        """
        existing = self.get(round_id, voter_id)
        if existing is None or not existing.is_locked:
            ballot = VoterBallot(
                round_id=round_id,
                voter_id=voter_id,
                choice=choice,
                locked_amount=amount,
                weight_contributed=weight,
            )
        else:
            ballot = replace(
                existing,
                locked_amount=existing.locked_amount + amount,
                weight_contributed=existing.weight_contributed + weight,
            )
        self._ballots[(round_id, voter_id)] = ballot
        self._tallies[(round_id, choice)] = self.tally(round_id, choice) + weight
        return ballot

    def clear(
        self, round_id: int, voter_id: str, *, reverse_tally: bool
    ) -> VoterBallot:
        """Zero a locked ballot, optionally reversing its tally contribution.

        Args:
            round_id: Round of the ballot.
            voter_id: Owner of the ballot.
            reverse_tally: Subtract the ballot's contribution from the live tally.

        Returns:
            The ballot as it was before being cleared.

        Raises:
            KeyError: If there is no ballot for (round, voter).
        """
        previous = self._ballots[(round_id, voter_id)]
        if reverse_tally and previous.choice is not None:
            key = (round_id, previous.choice)
            self._tallies[key] = self.tally(round_id, previous.choice) - (
                previous.weight_contributed
            )
        self._ballots[(round_id, voter_id)] = replace(
            previous, choice=None, locked_amount=0, weight_contributed=0
        )
        return previous
