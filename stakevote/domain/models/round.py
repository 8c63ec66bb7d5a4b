"""Voting round domain models.

A round is one voting cycle with its own time window and its own,
independently tracked tallies. Rounds are identified by a monotonically
increasing counter: the registry starts at 0 (no round yet) and each
successful creation allocates the next id, so the first real round is 1.

Round Constraints:
- end_time > start_time for every created round
- "Open" means start_time <= now < end_time
- A round is never mutated in place, only superseded by the next one
- Records of past rounds remain queryable indefinitely
"""

from __future__ import annotations

from dataclasses import dataclass

# Round id reported before any round has been created
NO_ROUND_ID: int = 0


@dataclass(frozen=True, eq=True)
class RoundWindow:
    """Time window and identity of a round.

    Attributes:
        round_id: Round identifier (0 means no round has been opened yet).
        start_time: Inclusive start of voting, in epoch seconds.
        end_time: Exclusive end of voting, in epoch seconds.
        description: Free-text description of what is being voted on.
    """

    round_id: int
    start_time: int
    end_time: int
    description: str = ""

    def __post_init__(self) -> None:
        """Validate the window shape.

        Raises:
            ValueError: If the round id is negative or the window is reversed.
        """
        if self.round_id < 0:
            raise ValueError(f"round_id must be >= 0, got {self.round_id}")
        if self.round_id != NO_ROUND_ID and self.end_time <= self.start_time:
            raise ValueError(
                f"end_time ({self.end_time}) must be greater than "
                f"start_time ({self.start_time})"
            )

    @classmethod
    def empty(cls) -> RoundWindow:
        """Return the placeholder window used before any round exists."""
        return cls(round_id=NO_ROUND_ID, start_time=0, end_time=0, description="")

    @property
    def exists(self) -> bool:
        """True once this window belongs to a created round."""
        return self.round_id != NO_ROUND_ID

    def is_open(self, now: int) -> bool:
        """Check whether voting is open at ``now``.

        Args:
            now: Current time in epoch seconds.

        Returns:
            True iff start_time <= now < end_time.
        """
        return self.start_time <= now < self.end_time

    def has_ended(self, now: int) -> bool:
        """Check whether the window has fully passed at ``now``."""
        return now >= self.end_time

    def as_tuple(self) -> tuple[int, int, int, str]:
        """Return (start, end, round_id, description)."""
        return (self.start_time, self.end_time, self.round_id, self.description)


class RoundRegistry:
    """In-memory store of every round ever opened.

    Owned exclusively by one engine. The only mutation is ``append``,
    which allocates the next round id; existing records are never
    replaced.
    """

    def __init__(self) -> None:
        """Initialize an empty registry (current round id 0)."""
        self._rounds: dict[int, RoundWindow] = {}
        self._current_id: int = NO_ROUND_ID

    @property
    def current_id(self) -> int:
        """Id of the most recently opened round (0 if none)."""
        return self._current_id

    @property
    def current(self) -> RoundWindow:
        """Window of the most recently opened round, or the empty window."""
        if self._current_id == NO_ROUND_ID:
            return RoundWindow.empty()
        return self._rounds[self._current_id]

    def get(self, round_id: int) -> RoundWindow | None:
        """Look up a round by id.

        Args:
            round_id: The round to look up.

        Returns:
            The round window, or None if no such round was ever opened.
        """
        return self._rounds.get(round_id)

    def append(self, start_time: int, end_time: int, description: str) -> RoundWindow:
        """Create the next round and make it current.

        Args:
            start_time: Inclusive start of voting.
            end_time: Exclusive end of voting.
            description: Free-text description.

        Returns:
            The newly created round.
        """
        window = RoundWindow(
            round_id=self._current_id + 1,
            start_time=start_time,
            end_time=end_time,
            description=description,
        )
        self._rounds[window.round_id] = window
        self._current_id = window.round_id
        return window

    def __len__(self) -> int:
        return len(self._rounds)
