"""Vote weight dampening domain service.

This module maps a locked amount to the influence it carries in a tally.
Large stakes are divided down so that a single large holder cannot
dominate a round outright.

Weight Tiers (integer division, evaluated from the highest threshold down):
- amount > 1,000,000:           amount // 910
- 100,000 < amount < 1,000,000: amount // 90
- 1,500 <= amount <= 100,000:   amount // 10
- amount < 1,500:               amount (no dampening)

An amount of exactly 1,000,000 falls between the two upper bands and is
treated as belonging to the /90 band.
"""

from __future__ import annotations

from dataclasses import dataclass

# Thresholds between weight bands
SMALL_STAKE_THRESHOLD: int = 1_500
MEDIUM_STAKE_CEILING: int = 100_000
LARGE_STAKE_CEILING: int = 1_000_000


@dataclass(frozen=True)
class WeightTier:
    """One dampening band.

    Attributes:
        exclusive_floor: The band applies to amounts strictly above this.
        divisor: Integer divisor applied to amounts in the band.
    """

    exclusive_floor: int
    divisor: int


# Ordered highest floor first; the first matching tier wins.
WEIGHT_TIERS: tuple[WeightTier, ...] = (
    WeightTier(exclusive_floor=LARGE_STAKE_CEILING, divisor=910),
    WeightTier(exclusive_floor=MEDIUM_STAKE_CEILING, divisor=90),
    WeightTier(exclusive_floor=SMALL_STAKE_THRESHOLD - 1, divisor=10),
)


def compute_weight(amount: int) -> int:
    """Return the dampened influence of a locked amount.

    Pure and deterministic. Tiers are scanned from the highest floor
    downward and the first match wins.

    Args:
        amount: Non-negative balance units.

    Returns:
        Influence value used in the weighted tally.

    Raises:
        ValueError: If amount is negative.

    Example:
        >>> compute_weight(1499)
        1499
        >>> compute_weight(5_000_000)
        5494
    """
    if amount < 0:
        raise ValueError(f"amount must be >= 0, got {amount}")

    for tier in WEIGHT_TIERS:
        if amount > tier.exclusive_floor:
            return amount // tier.divisor
    return amount
