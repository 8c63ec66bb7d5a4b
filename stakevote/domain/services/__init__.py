"""Domain services for StakeVote.

Pure rule functions with no I/O and no state:
- compute_weight: locked amount -> dampened influence
- classify_withdrawal: request timing -> withdrawal path
"""

from stakevote.domain.services.weight_engine import (
    WEIGHT_TIERS,
    WeightTier,
    compute_weight,
)
from stakevote.domain.services.withdrawal_policy import (
    WithdrawalPath,
    classify_withdrawal,
)

__all__: list[str] = [
    "WEIGHT_TIERS",
    "WeightTier",
    "WithdrawalPath",
    "classify_withdrawal",
    "compute_weight",
]
