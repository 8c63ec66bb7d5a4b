"""Voting engine configuration.

This module defines the round and withdrawal policy knobs with
environment variable overrides for deployment tuning.

Policy Constraints:
- Withdrawal is blocked during the final early_withdrawal_window_seconds
  of the live round (30 minutes default)
- By default a new round cannot be opened while the previous one is live
- Locked balance is held by the custody ledger identity

Environment Variables:
- EARLY_WITHDRAWAL_WINDOW_SECONDS: Blackout before round end (default: 1800, min: 0, max: 86400)
- REQUIRE_PREVIOUS_ROUND_ENDED: Refuse overlapping rounds (default: true)
- CUSTODY_ACCOUNT_ID: Ledger identity holding locked balance (default: stakevote:custody)
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Accepts 1/0, true/false, yes/no, on/off (case-insensitive).
    """
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# =============================================================================
# Withdrawal Blackout Configuration
# =============================================================================

# Default blackout before round end (30 minutes)
DEFAULT_EARLY_WITHDRAWAL_WINDOW_SECONDS = 30 * 60

# No blackout at all (testing only)
MIN_EARLY_WITHDRAWAL_WINDOW_SECONDS = 0

# Blackout can never exceed one day
MAX_EARLY_WITHDRAWAL_WINDOW_SECONDS = 24 * 60 * 60

# =============================================================================
# Custody Configuration
# =============================================================================

DEFAULT_CUSTODY_ACCOUNT_ID = "stakevote:custody"


@dataclass(frozen=True)
class VotingConfig:
    """Configuration for round creation and withdrawal policy.

    All values can be overridden via environment variables.

    Attributes:
        early_withdrawal_window_seconds: Blackout before the live round ends.
            Default: 1800 (30 minutes). Minimum: 0. Maximum: 86400.
        require_previous_round_ended: Reject open_round while the current
            round is still live. Default: True.
        custody_account_id: Ledger identity that holds locked balance.
    """

    early_withdrawal_window_seconds: int = DEFAULT_EARLY_WITHDRAWAL_WINDOW_SECONDS
    require_previous_round_ended: bool = True
    custody_account_id: str = DEFAULT_CUSTODY_ACCOUNT_ID

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not (
            MIN_EARLY_WITHDRAWAL_WINDOW_SECONDS
            <= self.early_withdrawal_window_seconds
            <= MAX_EARLY_WITHDRAWAL_WINDOW_SECONDS
        ):
            raise ValueError(
                "early_withdrawal_window_seconds must be between "
                f"{MIN_EARLY_WITHDRAWAL_WINDOW_SECONDS} and "
                f"{MAX_EARLY_WITHDRAWAL_WINDOW_SECONDS}, "
                f"got {self.early_withdrawal_window_seconds}"
            )
        if not self.custody_account_id:
            raise ValueError("custody_account_id must not be empty")

    @classmethod
    def from_environment(cls) -> VotingConfig:
        """Create config from environment variables with defaults.

        Environment Variables:
            EARLY_WITHDRAWAL_WINDOW_SECONDS: Blackout in seconds (default: 1800)
            REQUIRE_PREVIOUS_ROUND_ENDED: Refuse overlapping rounds (default: true)
            CUSTODY_ACCOUNT_ID: Custody ledger identity (default: stakevote:custody)

        Returns:
            VotingConfig with values from environment or defaults.
        """
        window = _get_int_env(
            "EARLY_WITHDRAWAL_WINDOW_SECONDS",
            DEFAULT_EARLY_WITHDRAWAL_WINDOW_SECONDS,
        )
        # Clamp to valid range
        window = max(
            MIN_EARLY_WITHDRAWAL_WINDOW_SECONDS,
            min(window, MAX_EARLY_WITHDRAWAL_WINDOW_SECONDS),
        )

        require_ended = _get_bool_env("REQUIRE_PREVIOUS_ROUND_ENDED", True)

        custody = (
            os.environ.get("CUSTODY_ACCOUNT_ID", "").strip()
            or DEFAULT_CUSTODY_ACCOUNT_ID
        )

        return cls(
            early_withdrawal_window_seconds=window,
            require_previous_round_ended=require_ended,
            custody_account_id=custody,
        )


# Pre-defined configurations for common use cases

# Default production config
DEFAULT_VOTING_CONFIG = VotingConfig()

# Testing config: same policy, dedicated custody identity
TEST_VOTING_CONFIG = VotingConfig(custody_account_id="test:custody")

# Allows a new round to supersede one that is still live
PERMISSIVE_ROUND_POLICY_CONFIG = VotingConfig(require_previous_round_ended=False)
