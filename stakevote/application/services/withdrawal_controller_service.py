"""Withdrawal controller service.

Governs reclaiming locked balance. Per (round, voter) the states are:

    NO_BALLOT --cast--> LOCKED --withdraw--> WITHDRAWN --cast--> LOCKED

Withdrawal Paths:
1. Early unwind (current round, now < end - early window): requires a
   locked amount; reverses the voter's tally contribution, zeroes the
   ballot and returns the full amount.
2. Blackout (current round, end - early window <= now < end): always
   rejected with StateError "election not finished".
3. Settled (past round, or current round has ended): requires a locked
   amount; zeroes the ballot and returns the amount. The tally is frozen
   and left untouched.

"Never voted" and "already withdrawn" both surface as EmptyClaimError.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from stakevote.application.services.base import LoggingMixin
from stakevote.config.voting_config import DEFAULT_VOTING_CONFIG, VotingConfig
from stakevote.domain.errors import EmptyClaimError, StateError, StateErrorReason
from stakevote.domain.events import WITHDRAWAL_MADE_EVENT_TYPE, WithdrawalMadePayload
from stakevote.domain.models.ballot import BallotBook
from stakevote.domain.services.withdrawal_policy import (
    WithdrawalPath,
    classify_withdrawal,
)

if TYPE_CHECKING:
    from stakevote.application.ports.time_authority import TimeAuthorityProtocol
    from stakevote.application.ports.voting_event_emitter import (
        VotingEventEmitterProtocol,
    )
    from stakevote.application.services.custody_gateway import CustodyGateway
    from stakevote.application.services.round_manager_service import (
        RoundManagerService,
    )


class WithdrawalControllerService(LoggingMixin):
    """Service for returning locked balance to voters.

    Example:
        >>> controller = WithdrawalControllerService(
        ...     round_manager=round_manager,
        ...     ballot_book=book,
        ...     custody=custody_gateway,
        ...     time_authority=clock,
        ...     event_emitter=emitter,
        ... )
        >>> await controller.request_withdrawal(round_id=1, caller_id="alice")
        5000000
    """

    def __init__(
        self,
        round_manager: RoundManagerService,
        ballot_book: BallotBook,
        custody: CustodyGateway,
        time_authority: TimeAuthorityProtocol,
        event_emitter: VotingEventEmitterProtocol,
        config: VotingConfig = DEFAULT_VOTING_CONFIG,
        write_lock: asyncio.Lock | None = None,
    ) -> None:
        """Initialize the withdrawal controller.

        Args:
            round_manager: Source of the current round window.
            ballot_book: Ballot and tally store, owned by the engine.
            custody: Gateway to the balance ledger.
            time_authority: Injected clock.
            event_emitter: Sink for withdrawal.made events.
            config: Supplies the early withdrawal window.
            write_lock: Single-writer lock shared with the other services.
        """
        self._round_manager = round_manager
        self._book = ballot_book
        self._custody = custody
        self._time = time_authority
        self._event_emitter = event_emitter
        self._config = config
        self._write_lock = write_lock if write_lock is not None else asyncio.Lock()
        self._init_logger()

    async def request_withdrawal(
        self,
        round_id: int,
        caller_id: str,
        now: int | None = None,
    ) -> int:
        """Return the caller's locked balance for ``round_id``.

        Args:
            round_id: Round the balance was locked in.
            caller_id: Voter reclaiming their balance.
            now: Optional clock override; defaults to the time authority.

        Returns:
            The amount returned from custody.

        Raises:
            StateError: Request falls inside the blackout before round end.
            EmptyClaimError: Nothing is locked for (round, caller).
            ResourceError: The custody ledger refused the return transfer.
        """
        log = self._log_operation(
            "request_withdrawal", round_id=round_id, voter_id=caller_id
        )

        async with self._write_lock:
            now = self._time.now() if now is None else now
            path = classify_withdrawal(
                round_id,
                self._round_manager.current_window(),
                now,
                self._config.early_withdrawal_window_seconds,
            )
            log = log.bind(path=path.value, now=now)

            if path is WithdrawalPath.BLACKOUT:
                log.warning("Withdrawal rejected - inside blackout window")
                raise StateError(
                    StateErrorReason.ELECTION_NOT_FINISHED,
                    round_id=round_id,
                    voter_id=caller_id,
                )

            ballot = self._book.get(round_id, caller_id)
            if ballot is None or not ballot.is_locked:
                claim_state = self._book.claim_state(round_id, caller_id)
                log.warning(
                    "Withdrawal rejected - nothing locked",
                    claim_state=claim_state.value,
                )
                raise EmptyClaimError(round_id, caller_id, claim_state)

            amount = ballot.locked_amount
            early_unwind = path is WithdrawalPath.EARLY_UNWIND

            # Custody first: a refused transfer must leave the book untouched
            await self._custody.release(caller_id, amount)

            self._book.clear(round_id, caller_id, reverse_tally=early_unwind)

            emitted = await self._event_emitter.emit(
                WITHDRAWAL_MADE_EVENT_TYPE,
                WithdrawalMadePayload(
                    voter_id=caller_id,
                    amount=amount,
                    round_id=round_id,
                    early_unwind=early_unwind,
                ),
            )
            if not emitted:
                log.warning(
                    "Event emission failed", event_type=WITHDRAWAL_MADE_EVENT_TYPE
                )

        log.info("Withdrawal made", amount=amount, early_unwind=early_unwind)
        return amount
