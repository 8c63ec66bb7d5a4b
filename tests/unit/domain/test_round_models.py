"""Unit tests for round window and registry models.

Tests verify that:
- is_open is true iff start <= now < end
- Reversed windows are rejected
- The registry allocates monotonically increasing ids and keeps history
"""

import pytest

from stakevote.domain import models
from stakevote.domain.models.round import NO_ROUND_ID, RoundRegistry, RoundWindow


class TestRoundWindow:
    """Tests for RoundWindow."""

    def test_is_open_inside_window(self) -> None:
        window = RoundWindow(round_id=1, start_time=100, end_time=200)
        assert window.is_open(100)
        assert window.is_open(150)
        assert window.is_open(199)

    def test_is_closed_outside_window(self) -> None:
        window = RoundWindow(round_id=1, start_time=100, end_time=200)
        assert not window.is_open(99)
        assert not window.is_open(200)

    def test_has_ended_at_end_time(self) -> None:
        window = RoundWindow(round_id=1, start_time=100, end_time=200)
        assert not window.has_ended(199)
        assert window.has_ended(200)

    def test_reversed_window_rejected(self) -> None:
        with pytest.raises(ValueError, match="end_time"):
            RoundWindow(round_id=1, start_time=200, end_time=200)

    def test_negative_round_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="round_id"):
            RoundWindow(round_id=-1, start_time=1, end_time=2)

    def test_empty_window(self) -> None:
        window = RoundWindow.empty()
        assert window.round_id == NO_ROUND_ID
        assert not window.exists
        assert not window.is_open(0)
        assert window.has_ended(0)

    def test_as_tuple_order(self) -> None:
        window = RoundWindow(round_id=3, start_time=10, end_time=20, description="d")
        assert window.as_tuple() == (10, 20, 3, "d")

    def test_is_immutable(self) -> None:
        window = RoundWindow(round_id=1, start_time=10, end_time=20)
        with pytest.raises(AttributeError):
            window.end_time = 30  # type: ignore[misc]


class TestRoundRegistry:
    """Tests for RoundRegistry."""

    def test_starts_with_no_round(self) -> None:
        registry = RoundRegistry()
        assert registry.current_id == 0
        assert registry.current == RoundWindow.empty()
        assert len(registry) == 0

    def test_append_allocates_next_id(self) -> None:
        registry = RoundRegistry()
        first = registry.append(10, 20, "first")
        second = registry.append(30, 40, "second")

        assert first.round_id == 1
        assert second.round_id == 2
        assert registry.current == second

    def test_past_rounds_remain_queryable(self) -> None:
        registry = RoundRegistry()
        first = registry.append(10, 20, "first")
        registry.append(30, 40, "second")

        assert registry.get(1) == first
        assert registry.get(99) is None
        assert len(registry) == 2


class TestModelExports:
    """Tests for the public model names."""

    def test_round_window_is_the_only_round_type(self) -> None:
        assert "RoundWindow" in models.__all__
        assert "Round" not in models.__all__
        assert not hasattr(models, "Round")
