"""Test helpers for StakeVote tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    identities: Shared voter identities, supply and durations

Usage:
    from tests.helpers import FakeTimeAuthority
    from tests.helpers.identities import ALICE, OWNER
"""

from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = ["FakeTimeAuthority"]
