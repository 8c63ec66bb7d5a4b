"""Configuration module for StakeVote.

Available Configurations:
- VotingConfig: Withdrawal blackout, round creation policy, custody identity
"""

from stakevote.config.voting_config import (
    DEFAULT_VOTING_CONFIG,
    PERMISSIVE_ROUND_POLICY_CONFIG,
    TEST_VOTING_CONFIG,
    VotingConfig,
)

__all__ = [
    "VotingConfig",
    "DEFAULT_VOTING_CONFIG",
    "TEST_VOTING_CONFIG",
    "PERMISSIVE_ROUND_POLICY_CONFIG",
]
