"""
Pytest configuration and shared fixtures for StakeVote tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Time is always injected through FakeTimeAuthority, never the host clock
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

import pytest

from stakevote.application.services import VotingEngine
from stakevote.config import TEST_VOTING_CONFIG
from stakevote.infrastructure.stubs import (
    InMemoryBalanceLedger,
    InMemoryVotingEventEmitter,
    SingleAuthorityGate,
)
from tests.helpers import FakeTimeAuthority
from tests.helpers.identities import INITIAL_SUPPLY, OWNER


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from stakevote import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Frozen, manually advanced clock."""
    return FakeTimeAuthority()


@pytest.fixture
def ledger() -> InMemoryBalanceLedger:
    """Ledger with the whole supply minted to OWNER."""
    return InMemoryBalanceLedger(owner_id=OWNER, initial_supply=INITIAL_SUPPLY)


@pytest.fixture
def access_gate() -> SingleAuthorityGate:
    return SingleAuthorityGate(OWNER)


@pytest.fixture
def event_emitter() -> InMemoryVotingEventEmitter:
    return InMemoryVotingEventEmitter()


@pytest.fixture
def engine(
    ledger: InMemoryBalanceLedger,
    access_gate: SingleAuthorityGate,
    fake_time_authority: FakeTimeAuthority,
    event_emitter: InMemoryVotingEventEmitter,
) -> VotingEngine:
    """Engine over in-memory collaborators with the test policy."""
    return VotingEngine(
        ledger=ledger,
        access_gate=access_gate,
        time_authority=fake_time_authority,
        event_emitter=event_emitter,
        config=TEST_VOTING_CONFIG,
    )
