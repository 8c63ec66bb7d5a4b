"""Custody gateway - boundary to the external balance ledger.

Moves balance into and out of the custody identity on behalf of the
ballot ledger and the withdrawal controller. The gateway holds no
balance state of its own: every answer comes from the ledger at call
time.

Failure Semantics:
- A refused transfer raises ResourceError(TRANSFER_FAILED)
- The gateway never retries; callers abort their enclosing operation
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from stakevote.application.services.base import LoggingMixin
from stakevote.domain.errors import ResourceError, ResourceErrorReason

if TYPE_CHECKING:
    from stakevote.application.ports.balance_ledger import BalanceLedgerProtocol


class CustodyGateway(LoggingMixin):
    """Adapter between the voting services and the balance ledger.

    Example:
        >>> gateway = CustodyGateway(ledger=ledger, custody_account_id="custody")
        >>> await gateway.lock("alice", 100)     # alice -> custody
        >>> await gateway.release("alice", 100)  # custody -> alice
    """

    def __init__(
        self,
        ledger: BalanceLedgerProtocol,
        custody_account_id: str,
    ) -> None:
        """Initialize the gateway.

        Args:
            ledger: The external balance ledger.
            custody_account_id: Ledger identity that holds locked balance.
        """
        self._ledger = ledger
        self._custody_account_id = custody_account_id
        self._init_logger()

    @property
    def custody_account_id(self) -> str:
        return self._custody_account_id

    async def balance_of(self, identity: str) -> int:
        """Return the ledger balance of ``identity``."""
        return await self._ledger.balance_of(identity)

    async def custody_balance(self) -> int:
        """Return the balance currently held in custody."""
        return await self._ledger.balance_of(self._custody_account_id)

    async def lock(self, voter_id: str, amount: int) -> None:
        """Move ``amount`` from the voter into custody.

        Raises:
            ResourceError: If the ledger refuses the transfer.
        """
        await self._move(
            "lock",
            sender=voter_id,
            recipient=self._custody_account_id,
            voter_id=voter_id,
            amount=amount,
        )

    async def release(self, voter_id: str, amount: int) -> None:
        """Return ``amount`` from custody to the voter.

        Raises:
            ResourceError: If the ledger refuses the transfer.
        """
        await self._move(
            "release",
            sender=self._custody_account_id,
            recipient=voter_id,
            voter_id=voter_id,
            amount=amount,
        )

    async def _move(
        self,
        operation: str,
        *,
        sender: str,
        recipient: str,
        voter_id: str,
        amount: int,
    ) -> None:
        log = self._log_operation(operation, voter_id=voter_id, amount=amount)

        if not await self._ledger.transfer(sender, recipient, amount):
            log.warning("Custody transfer refused by ledger")
            raise ResourceError(
                ResourceErrorReason.TRANSFER_FAILED,
                voter_id=voter_id,
                requested=amount,
            )

        log.debug("Custody transfer committed", sender=sender, recipient=recipient)
