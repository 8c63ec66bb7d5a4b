"""Tests for the FakeTimeAuthority test helper.

These tests validate the helper itself so that the round window and
blackout tests built on it can rely on deterministic time.
"""

from datetime import timedelta

import pytest

from stakevote.application.ports.time_authority import TimeAuthorityProtocol
from stakevote.infrastructure.adapters import SystemTimeAuthority
from tests.helpers.fake_time_authority import DEFAULT_FROZEN_AT, FakeTimeAuthority


class TestFakeTimeAuthority:
    def test_implements_protocol(self) -> None:
        assert isinstance(FakeTimeAuthority(), TimeAuthorityProtocol)

    def test_default_frozen_time(self) -> None:
        assert FakeTimeAuthority().now() == DEFAULT_FROZEN_AT

    def test_time_does_not_move_on_its_own(self) -> None:
        fake_time = FakeTimeAuthority(frozen_at=1_000)
        assert fake_time.now() == fake_time.now() == 1_000

    def test_advance_seconds(self) -> None:
        fake_time = FakeTimeAuthority(frozen_at=1_000)
        fake_time.advance(10)
        assert fake_time.now() == 1_010

    def test_advance_delta_takes_precedence(self) -> None:
        fake_time = FakeTimeAuthority(frozen_at=0)
        fake_time.advance(5, delta=timedelta(hours=1))
        assert fake_time.now() == 3_600

    def test_advance_requires_argument(self) -> None:
        with pytest.raises(ValueError, match="Must provide"):
            FakeTimeAuthority().advance()

    def test_advance_backwards_rejected(self) -> None:
        with pytest.raises(ValueError, match="backwards"):
            FakeTimeAuthority().advance(-1)

    def test_set_time(self) -> None:
        fake_time = FakeTimeAuthority()
        fake_time.set_time(42)
        assert fake_time.now() == 42
        assert repr(fake_time) == "FakeTimeAuthority(current_time=42)"


class TestSystemTimeAuthority:
    def test_returns_epoch_seconds(self) -> None:
        now = SystemTimeAuthority().now()
        assert isinstance(now, int)
        assert now > DEFAULT_FROZEN_AT - 10 * 365 * 24 * 3600
