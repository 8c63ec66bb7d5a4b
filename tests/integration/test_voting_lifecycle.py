"""Integration tests for the full voting lifecycle.

Drives VotingEngine end to end over the in-memory ledger, access gate
and event emitter: open a round, fund and cast, cross the blackout,
settle, and open the next round.
"""

import pytest

from stakevote.application.services import VotingEngine
from stakevote.domain.errors import (
    ConfigurationError,
    EmptyClaimError,
    ResourceError,
    ResourceErrorReason,
    StateError,
    StateErrorReason,
)
from stakevote.domain.events import (
    ROUND_OPENED_EVENT_TYPE,
    VOTE_CAST_EVENT_TYPE,
    WITHDRAWAL_MADE_EVENT_TYPE,
    WithdrawalMadePayload,
)
from stakevote.domain.models.ballot import ClaimState
from stakevote.infrastructure.stubs import (
    InMemoryBalanceLedger,
    InMemoryVotingEventEmitter,
)
from tests.helpers import FakeTimeAuthority
from tests.helpers.identities import (
    ALICE,
    BOB,
    INITIAL_SUPPLY,
    LARGE_STAKE,
    ONE_DAY,
    ONE_HOUR,
    OWNER,
    PATRICK,
)

pytestmark = pytest.mark.integration

VOTER_BALANCE = 10_000_000
CUSTODY = "test:custody"


@pytest.fixture
async def funded(ledger: InMemoryBalanceLedger) -> InMemoryBalanceLedger:
    """ALICE and BOB hold 10_000_000 each; PATRICK holds 100."""
    await ledger.transfer(OWNER, ALICE, VOTER_BALANCE)
    await ledger.transfer(OWNER, BOB, VOTER_BALANCE)
    await ledger.transfer(OWNER, PATRICK, 100)
    return ledger


class TestSingleRound:
    """One round from opening to settlement."""

    @pytest.mark.asyncio
    async def test_cast_then_settle_after_round(
        self,
        engine: VotingEngine,
        funded: InMemoryBalanceLedger,
        fake_time_authority: FakeTimeAuthority,
        event_emitter: InMemoryVotingEventEmitter,
    ) -> None:
        t0 = fake_time_authority.now()
        window = await engine.open_round(t0 + 10, t0 + ONE_DAY, "Fee schedule", OWNER)

        await engine.cast_vote(ALICE, True, LARGE_STAKE, now=t0 + ONE_HOUR)

        assert engine.tally(window.round_id, True) == 5_494
        assert await funded.balance_of(ALICE) == VOTER_BALANCE - LARGE_STAKE

        amount = await engine.request_withdrawal(
            window.round_id, ALICE, now=t0 + 86_500
        )

        assert amount == LARGE_STAKE
        assert engine.locked_amount(window.round_id, ALICE) == 0
        assert await funded.balance_of(ALICE) == VOTER_BALANCE
        assert await funded.balance_of(CUSTODY) == 0
        assert engine.tally(window.round_id, True) == 5_494
        assert event_emitter.last is not None
        assert event_emitter.last.event_type == WITHDRAWAL_MADE_EVENT_TYPE
        assert event_emitter.last.payload == WithdrawalMadePayload(
            voter_id=ALICE, amount=LARGE_STAKE, round_id=1, early_unwind=False
        )
        assert [e.event_type for e in event_emitter.events] == [
            ROUND_OPENED_EVENT_TYPE,
            VOTE_CAST_EVENT_TYPE,
            WITHDRAWAL_MADE_EVENT_TYPE,
        ]

        snapshot = engine.tally_snapshot(window.round_id, now=t0 + 86_500)
        assert snapshot.is_final
        assert snapshot.leading_choice is True

    @pytest.mark.asyncio
    async def test_window_boundaries(
        self, engine: VotingEngine, fake_time_authority: FakeTimeAuthority
    ) -> None:
        t0 = fake_time_authority.now()
        window = await engine.open_round(t0 + 10, t0 + ONE_DAY, "x", OWNER)

        assert not engine.is_open(window.start_time - 1)
        assert engine.is_open(window.start_time)
        assert not engine.is_open(window.end_time)

    @pytest.mark.asyncio
    async def test_tally_sums_across_voters(
        self,
        engine: VotingEngine,
        funded: InMemoryBalanceLedger,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        t0 = fake_time_authority.now()
        await engine.open_round(t0 + 10, t0 + ONE_DAY, "x", OWNER)
        fake_time_authority.advance(ONE_HOUR)

        await engine.cast_vote(ALICE, True, LARGE_STAKE)
        await engine.cast_vote(BOB, True, 50_000)
        await engine.cast_vote(PATRICK, False, 100)

        assert engine.tally(1, True) == 5_494 + 5_000
        assert engine.tally(1, False) == 100

    @pytest.mark.asyncio
    async def test_accumulating_casts(
        self,
        engine: VotingEngine,
        funded: InMemoryBalanceLedger,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        t0 = fake_time_authority.now()
        await engine.open_round(t0 + 10, t0 + ONE_DAY, "x", OWNER)
        fake_time_authority.advance(ONE_HOUR)

        await engine.cast_vote(PATRICK, True, 50)
        await engine.cast_vote(PATRICK, True, 50)

        assert engine.locked_amount(1, PATRICK) == 100
        assert await funded.balance_of(PATRICK) == 0


class TestFailureAtomicity:
    """Failed operations leave every store exactly as it was."""

    @pytest.mark.asyncio
    async def test_insufficient_balance_after_prior_cast(
        self,
        engine: VotingEngine,
        funded: InMemoryBalanceLedger,
        fake_time_authority: FakeTimeAuthority,
        event_emitter: InMemoryVotingEventEmitter,
    ) -> None:
        t0 = fake_time_authority.now()
        await engine.open_round(t0 + 10, t0 + ONE_DAY, "x", OWNER)
        fake_time_authority.advance(ONE_HOUR)
        await engine.cast_vote(PATRICK, True, 60)
        events_before = len(event_emitter.events)

        with pytest.raises(ResourceError) as exc_info:
            await engine.cast_vote(PATRICK, True, 41)

        assert exc_info.value.reason is ResourceErrorReason.INSUFFICIENT_BALANCE
        assert engine.locked_amount(1, PATRICK) == 60
        assert engine.tally(1, True) == 60
        assert await funded.balance_of(PATRICK) == 40
        assert len(event_emitter.events) == events_before

    @pytest.mark.asyncio
    async def test_refused_release_keeps_claim(
        self,
        engine: VotingEngine,
        funded: InMemoryBalanceLedger,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        t0 = fake_time_authority.now()
        window = await engine.open_round(t0 + 10, t0 + ONE_DAY, "x", OWNER)
        fake_time_authority.advance(ONE_HOUR)
        await engine.cast_vote(PATRICK, True, 100)
        fake_time_authority.set_time(window.end_time)
        funded.fail_next_transfers()

        with pytest.raises(ResourceError):
            await engine.request_withdrawal(1, PATRICK)

        assert engine.claim_state(1, PATRICK) is ClaimState.LOCKED
        assert await engine.request_withdrawal(1, PATRICK) == 100


class TestWithdrawalTiming:
    """Early unwind, blackout and settlement across the round's life."""

    @pytest.mark.asyncio
    async def test_full_timeline(
        self,
        engine: VotingEngine,
        funded: InMemoryBalanceLedger,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        t0 = fake_time_authority.now()
        window = await engine.open_round(t0 + 10, t0 + ONE_DAY, "x", OWNER)
        fake_time_authority.advance(ONE_HOUR)
        await engine.cast_vote(ALICE, True, LARGE_STAKE)
        await engine.cast_vote(BOB, False, 50_000)

        # Early unwind wipes ALICE's contribution
        await engine.request_withdrawal(1, ALICE)
        assert engine.tally(1, True) == 0

        # Thirty minutes before the end nothing may leave
        with pytest.raises(StateError) as exc_info:
            await engine.request_withdrawal(1, BOB, now=window.end_time - 30 * 60)
        assert exc_info.value.reason is StateErrorReason.ELECTION_NOT_FINISHED

        # After the end the tally is frozen and BOB settles
        assert await engine.request_withdrawal(1, BOB, now=window.end_time) == 50_000
        assert engine.tally(1, False) == 5_000
        assert await funded.balance_of(BOB) == VOTER_BALANCE

        with pytest.raises(EmptyClaimError):
            await engine.request_withdrawal(1, BOB, now=window.end_time)
        assert engine.locked_amount(1, BOB) == 0


class TestMultipleRounds:
    """Round succession and settling past rounds."""

    @pytest.mark.asyncio
    async def test_withdraw_from_past_round_after_next_opens(
        self,
        engine: VotingEngine,
        funded: InMemoryBalanceLedger,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        t0 = fake_time_authority.now()
        first = await engine.open_round(t0 + 10, t0 + ONE_DAY, "first", OWNER)
        fake_time_authority.advance(ONE_HOUR)
        await engine.cast_vote(ALICE, True, LARGE_STAKE)

        with pytest.raises(ConfigurationError):
            await engine.open_round(t0 + 2 * ONE_DAY, t0 + 3 * ONE_DAY, "early", OWNER)

        fake_time_authority.set_time(first.end_time + 1)
        second = await engine.open_round(
            t0 + 2 * ONE_DAY, t0 + 3 * ONE_DAY, "second", OWNER
        )
        assert second.round_id == 2
        assert engine.current_window() == second

        fake_time_authority.set_time(second.start_time + ONE_HOUR)
        amount = await engine.request_withdrawal(first.round_id, ALICE)

        assert amount == LARGE_STAKE
        assert engine.tally(first.round_id, True) == 5_494
        assert await funded.balance_of(ALICE) == VOTER_BALANCE

    @pytest.mark.asyncio
    async def test_rounds_track_ballots_independently(
        self,
        engine: VotingEngine,
        funded: InMemoryBalanceLedger,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        t0 = fake_time_authority.now()
        first = await engine.open_round(t0 + 10, t0 + ONE_DAY, "first", OWNER)
        fake_time_authority.advance(ONE_HOUR)
        await engine.cast_vote(PATRICK, True, 40)

        fake_time_authority.set_time(first.end_time)
        await engine.open_round(first.end_time + 10, first.end_time + ONE_DAY, "second", OWNER)
        fake_time_authority.advance(ONE_HOUR)
        await engine.cast_vote(PATRICK, False, 60)

        assert engine.tally(1, True) == 40
        assert engine.tally(2, False) == 60
        assert engine.locked_amount(1, PATRICK) == 40
        assert engine.locked_amount(2, PATRICK) == 60
        assert await funded.balance_of(CUSTODY) == 100
        assert await funded.balance_of(OWNER) == INITIAL_SUPPLY - 2 * VOTER_BALANCE - 100
