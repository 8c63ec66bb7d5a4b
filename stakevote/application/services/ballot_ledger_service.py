"""Ballot ledger service.

Records each participant's per-round choice and locked amount, and keeps
the weighted tally current as votes are cast.

Cast Rules (checked in order):
1. The current round must be open (StateError "round closed")
2. The ledger must report balance >= amount (ResourceError "insufficient balance")
3. A locked ballot cannot switch sides (StateError "conflicting choice")

On success, atomically:
- the amount is moved into custody (a refused transfer aborts everything
  with ResourceError "transfer failed")
- the voter's locked amount grows by the amount
- the tally for the chosen side grows by the cast's weight
- a vote.cast event is emitted; a failed emission is logged and the
  cast stands
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from stakevote.application.services.base import LoggingMixin
from stakevote.domain.errors import (
    ResourceError,
    ResourceErrorReason,
    StateError,
    StateErrorReason,
)
from stakevote.domain.events import VOTE_CAST_EVENT_TYPE, VoteCastPayload
from stakevote.domain.models.ballot import (
    BallotBook,
    ClaimState,
    TallySnapshot,
    VoterBallot,
)
from stakevote.domain.services.weight_engine import compute_weight

if TYPE_CHECKING:
    from stakevote.application.ports.time_authority import TimeAuthorityProtocol
    from stakevote.application.ports.voting_event_emitter import (
        VotingEventEmitterProtocol,
    )
    from stakevote.application.services.custody_gateway import CustodyGateway
    from stakevote.application.services.round_manager_service import (
        RoundManagerService,
    )


class BallotLedgerService(LoggingMixin):
    """Service for casting votes and reading ballots and tallies.

    Example:
        >>> ledger = BallotLedgerService(
        ...     round_manager=round_manager,
        ...     ballot_book=BallotBook(),
        ...     custody=custody_gateway,
        ...     time_authority=clock,
        ...     event_emitter=emitter,
        ... )
        >>> ballot = await ledger.cast_vote("alice", choice=True, amount=100)
        >>> ballot.locked_amount
        100
    """

    def __init__(
        self,
        round_manager: RoundManagerService,
        ballot_book: BallotBook,
        custody: CustodyGateway,
        time_authority: TimeAuthorityProtocol,
        event_emitter: VotingEventEmitterProtocol,
        write_lock: asyncio.Lock | None = None,
    ) -> None:
        """Initialize the ballot ledger.

        Args:
            round_manager: Gate for "is voting open now".
            ballot_book: Ballot and tally store, owned by the engine.
            custody: Gateway to the balance ledger.
            time_authority: Injected clock.
            event_emitter: Sink for vote.cast events.
            write_lock: Single-writer lock shared with the other services.
        """
        self._round_manager = round_manager
        self._book = ballot_book
        self._custody = custody
        self._time = time_authority
        self._event_emitter = event_emitter
        self._write_lock = write_lock if write_lock is not None else asyncio.Lock()
        self._init_logger()

    async def cast_vote(
        self,
        caller_id: str,
        choice: bool,
        amount: int,
        now: int | None = None,
    ) -> VoterBallot:
        """Lock ``amount`` behind ``choice`` in the current round.

        Args:
            caller_id: Voter casting the ballot.
            choice: Side being backed.
            amount: Positive balance units to lock.
            now: Optional clock override; defaults to the time authority.

        Returns:
            The voter's ballot after this cast.

        Raises:
            ValueError: choice is not a bool or amount is not positive.
            StateError: Round closed, or the cast conflicts with a locked choice.
            ResourceError: Balance too low, or the custody transfer failed.
        """
        if not isinstance(choice, bool):
            raise ValueError(f"choice must be a bool, got {type(choice).__name__}")
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValueError(f"amount must be a positive integer, got {amount!r}")

        log = self._log_operation(
            "cast_vote", voter_id=caller_id, choice=choice, amount=amount
        )

        async with self._write_lock:
            now = self._time.now() if now is None else now
            round_id = self._round_manager.current_window().round_id

            if not self._round_manager.is_open(now):
                log.warning("Vote rejected - round closed", round_id=round_id, now=now)
                raise StateError(
                    StateErrorReason.ROUND_CLOSED, round_id=round_id, voter_id=caller_id
                )

            balance = await self._custody.balance_of(caller_id)
            if balance < amount:
                log.warning("Vote rejected - insufficient balance", balance=balance)
                raise ResourceError(
                    ResourceErrorReason.INSUFFICIENT_BALANCE,
                    voter_id=caller_id,
                    requested=amount,
                    available=balance,
                )

            existing = self._book.get(round_id, caller_id)
            if existing is not None and existing.conflicts_with(choice):
                log.warning(
                    "Vote rejected - conflicting choice",
                    round_id=round_id,
                    locked_choice=existing.choice,
                )
                raise StateError(
                    StateErrorReason.CONFLICTING_CHOICE,
                    round_id=round_id,
                    voter_id=caller_id,
                )

            weight = compute_weight(amount)

            # Custody first: a refused transfer must leave the book untouched
            await self._custody.lock(caller_id, amount)

            ballot = self._book.record_cast(
                round_id, caller_id, choice, amount, weight
            )

            emitted = await self._event_emitter.emit(
                VOTE_CAST_EVENT_TYPE,
                VoteCastPayload(
                    choice=choice,
                    computed_weight=weight,
                    round_id=round_id,
                    voter_id=caller_id,
                    amount=amount,
                ),
            )
            if not emitted:
                log.warning("Event emission failed", event_type=VOTE_CAST_EVENT_TYPE)

        log.info(
            "Vote cast",
            round_id=round_id,
            weight=weight,
            locked_amount=ballot.locked_amount,
        )
        return ballot

    def locked_amount(self, round_id: int, voter_id: str) -> int:
        """Return the balance ``voter_id`` has locked in ``round_id``."""
        return self._book.locked_amount(round_id, voter_id)

    def tally(self, round_id: int, choice: bool) -> int:
        """Return the weighted tally behind ``choice`` in ``round_id``."""
        return self._book.tally(round_id, choice)

    def claim_state(self, round_id: int, voter_id: str) -> ClaimState:
        """Return whether the voter never voted, is locked, or has withdrawn."""
        return self._book.claim_state(round_id, voter_id)

    def get_ballot(self, round_id: int, voter_id: str) -> VoterBallot | None:
        return self._book.get(round_id, voter_id)

    def tally_snapshot(self, round_id: int, now: int | None = None) -> TallySnapshot:
        """Report both sides of a round's tally.

        Args:
            round_id: Round to report on.
            now: Optional clock override; defaults to the time authority.

        Returns:
            TallySnapshot, marked final once the round has ended.
        """
        return TallySnapshot(
            round_id=round_id,
            yes_weight=self._book.tally(round_id, True),
            no_weight=self._book.tally(round_id, False),
            is_final=self._round_manager.has_ended(round_id, now),
        )
