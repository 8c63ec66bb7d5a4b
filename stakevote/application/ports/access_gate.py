"""Access Gate port - single-authority check for privileged operations.

Consulted only by round creation. Modelled as an injected capability
rather than an ownership base class.
"""

from typing import Protocol


class AccessGateProtocol(Protocol):
    """Protocol for the access gate.

    Implementations:
    - SingleAuthorityGate: one designated authority identity
    """

    async def is_authority(self, caller_id: str) -> bool:
        """Check whether ``caller_id`` may perform privileged operations.

        Args:
            caller_id: Identity making the call.

        Returns:
            True if the caller is the designated authority.
        """
        ...
