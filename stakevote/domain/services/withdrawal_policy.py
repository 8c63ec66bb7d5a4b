"""Withdrawal path classification domain service.

Decides which of the three withdrawal paths applies to a request, based
only on round identity and timing. Whether anything is actually locked
is checked afterwards by the withdrawal controller.

Withdrawal Paths:
- EARLY_UNWIND: target is the current round and now < end - early_window.
  Balance is returned and the voter's tally contribution is reversed.
- BLACKOUT: target is the current round and end - early_window <= now < end.
  No withdrawal is permitted.
- SETTLED: target is a past round, or the current round has ended.
  Balance is returned; the frozen tally is left untouched.
"""

from __future__ import annotations

from enum import Enum

from stakevote.domain.models.round import RoundWindow


class WithdrawalPath(Enum):
    """Which withdrawal rule applies to a request."""

    EARLY_UNWIND = "early_unwind"
    BLACKOUT = "blackout"
    SETTLED = "settled"


def classify_withdrawal(
    round_id: int,
    current: RoundWindow,
    now: int,
    early_window_seconds: int,
) -> WithdrawalPath:
    """Classify a withdrawal request.

    Args:
        round_id: Round the voter wants to withdraw from.
        current: Window of the current round.
        now: Clock reading in epoch seconds.
        early_window_seconds: Length of the blackout before round end.

    Returns:
        The withdrawal path to follow.
    """
    if round_id != current.round_id or not current.exists:
        return WithdrawalPath.SETTLED

    blackout_start = current.end_time - early_window_seconds
    if now < blackout_start:
        return WithdrawalPath.EARLY_UNWIND
    if now < current.end_time:
        return WithdrawalPath.BLACKOUT
    return WithdrawalPath.SETTLED
