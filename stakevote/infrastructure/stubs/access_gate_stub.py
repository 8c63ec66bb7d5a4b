"""Single-authority access gate stub.

One identity, fixed at construction, may open rounds. Everybody else
is refused.
"""

from __future__ import annotations

from stakevote.application.ports.access_gate import AccessGateProtocol


class SingleAuthorityGate(AccessGateProtocol):
    """Access gate with exactly one designated authority."""

    def __init__(self, authority_id: str) -> None:
        """Initialize the gate.

        Args:
            authority_id: The only identity allowed to open rounds.

        Raises:
            ValueError: If authority_id is empty.
        """
        if not authority_id:
            raise ValueError("authority_id must not be empty")
        self._authority_id = authority_id

    @property
    def authority(self) -> str:
        """The designated authority identity."""
        return self._authority_id

    async def is_authority(self, caller_id: str) -> bool:
        return caller_id == self._authority_id
