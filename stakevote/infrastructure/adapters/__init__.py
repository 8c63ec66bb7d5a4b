"""Production adapters for StakeVote ports."""

from stakevote.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)

__all__: list[str] = ["SystemTimeAuthority"]
