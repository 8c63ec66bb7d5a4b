"""Voting engine facade.

Composes the round manager, custody gateway, ballot ledger and
withdrawal controller around stores and a write lock that belong to
this engine alone.

Serialization Guarantees:
- open_round, cast_vote and request_withdrawal share one asyncio.Lock,
  so no operation can observe another's partial effects
- Each call either commits fully (state mutated, exactly one event) or
  aborts with no state mutated and no event emitted
- Nothing runs in the background and nothing is retried
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from stakevote.application.observability.correlation import (
    generate_correlation_id,
    set_correlation_id,
)
from stakevote.application.services.ballot_ledger_service import BallotLedgerService
from stakevote.application.services.custody_gateway import CustodyGateway
from stakevote.application.services.round_manager_service import RoundManagerService
from stakevote.application.services.withdrawal_controller_service import (
    WithdrawalControllerService,
)
from stakevote.config.voting_config import DEFAULT_VOTING_CONFIG, VotingConfig
from stakevote.domain.models.ballot import (
    BallotBook,
    ClaimState,
    TallySnapshot,
    VoterBallot,
)
from stakevote.domain.models.round import RoundRegistry, RoundWindow
from stakevote.domain.services.weight_engine import compute_weight

if TYPE_CHECKING:
    from stakevote.application.ports.access_gate import AccessGateProtocol
    from stakevote.application.ports.balance_ledger import BalanceLedgerProtocol
    from stakevote.application.ports.time_authority import TimeAuthorityProtocol
    from stakevote.application.ports.voting_event_emitter import (
        VotingEventEmitterProtocol,
    )


class VotingEngine:
    """Single entry point for the round, ballot and withdrawal lifecycle.

    Example:
        >>> engine = VotingEngine(
        ...     ledger=InMemoryBalanceLedger(owner_id="owner", initial_supply=10**10),
        ...     access_gate=SingleAuthorityGate("owner"),
        ...     time_authority=SystemTimeAuthority(),
        ...     event_emitter=InMemoryVotingEventEmitter(),
        ... )
        >>> now = engine.now()
        >>> await engine.open_round(now + 10, now + 86400, "Fee schedule", "owner")
    """

    def __init__(
        self,
        ledger: BalanceLedgerProtocol,
        access_gate: AccessGateProtocol,
        time_authority: TimeAuthorityProtocol,
        event_emitter: VotingEventEmitterProtocol,
        config: VotingConfig = DEFAULT_VOTING_CONFIG,
    ) -> None:
        """Wire the services together.

        Args:
            ledger: External balance ledger.
            access_gate: Authority check for round creation.
            time_authority: Injected clock.
            event_emitter: Sink for all voting events.
            config: Round and withdrawal policy.
        """
        self._time = time_authority
        self._config = config
        self._write_lock = asyncio.Lock()

        registry = RoundRegistry()
        book = BallotBook()

        self._custody = CustodyGateway(
            ledger=ledger, custody_account_id=config.custody_account_id
        )
        self._rounds = RoundManagerService(
            registry=registry,
            access_gate=access_gate,
            time_authority=time_authority,
            event_emitter=event_emitter,
            config=config,
            write_lock=self._write_lock,
        )
        self._ballots = BallotLedgerService(
            round_manager=self._rounds,
            ballot_book=book,
            custody=self._custody,
            time_authority=time_authority,
            event_emitter=event_emitter,
            write_lock=self._write_lock,
        )
        self._withdrawals = WithdrawalControllerService(
            round_manager=self._rounds,
            ballot_book=book,
            custody=self._custody,
            time_authority=time_authority,
            event_emitter=event_emitter,
            config=config,
            write_lock=self._write_lock,
        )

    @property
    def config(self) -> VotingConfig:
        return self._config

    @property
    def custody(self) -> CustodyGateway:
        return self._custody

    def now(self) -> int:
        """Current reading of the injected clock."""
        return self._time.now()

    # =========================================================================
    # State-changing operations
    # =========================================================================

    async def open_round(
        self,
        start_time: int,
        end_time: int,
        description: str,
        caller_id: str,
    ) -> RoundWindow:
        """Open the next round. See RoundManagerService.open_round."""
        set_correlation_id(generate_correlation_id())
        return await self._rounds.open_round(
            start_time, end_time, description, caller_id
        )

    async def cast_vote(
        self,
        caller_id: str,
        choice: bool,
        amount: int,
        now: int | None = None,
    ) -> VoterBallot:
        """Lock balance behind a choice. See BallotLedgerService.cast_vote."""
        set_correlation_id(generate_correlation_id())
        return await self._ballots.cast_vote(caller_id, choice, amount, now=now)

    async def request_withdrawal(
        self,
        round_id: int,
        caller_id: str,
        now: int | None = None,
    ) -> int:
        """Reclaim locked balance. See WithdrawalControllerService."""
        set_correlation_id(generate_correlation_id())
        return await self._withdrawals.request_withdrawal(round_id, caller_id, now=now)

    # =========================================================================
    # Read-only queries
    # =========================================================================

    def is_open(self, now: int | None = None) -> bool:
        return self._rounds.is_open(now)

    def current_window(self) -> RoundWindow:
        return self._rounds.current_window()

    def get_round(self, round_id: int) -> RoundWindow | None:
        return self._rounds.get_round(round_id)

    def locked_amount(self, round_id: int, voter_id: str) -> int:
        return self._ballots.locked_amount(round_id, voter_id)

    def tally(self, round_id: int, choice: bool) -> int:
        return self._ballots.tally(round_id, choice)

    def tally_snapshot(self, round_id: int, now: int | None = None) -> TallySnapshot:
        return self._ballots.tally_snapshot(round_id, now)

    def claim_state(self, round_id: int, voter_id: str) -> ClaimState:
        return self._ballots.claim_state(round_id, voter_id)

    def get_ballot(self, round_id: int, voter_id: str) -> VoterBallot | None:
        return self._ballots.get_ballot(round_id, voter_id)

    @staticmethod
    def weight(amount: int) -> int:
        """Dampened influence of ``amount``. See compute_weight."""
        return compute_weight(amount)
