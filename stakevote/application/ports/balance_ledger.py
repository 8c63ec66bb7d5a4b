"""Balance Ledger port - the external fungible balance ledger.

The ledger exclusively owns balance amounts. The engine never keeps a
copy of balance state; it asks the ledger at call time and moves
balance through transfers. Custody is itself an ordinary ledger
identity.
"""

from typing import Protocol


class BalanceLedgerProtocol(Protocol):
    """Protocol for the external balance ledger.

    Implementations:
    - InMemoryBalanceLedger: fixed-supply in-memory ledger (development/testing)
    """

    async def balance_of(self, identity: str) -> int:
        """Return the balance held by ``identity``.

        Args:
            identity: Ledger identity to query.

        Returns:
            Non-negative balance units (0 for unknown identities).
        """
        ...

    async def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        """Move ``amount`` from ``sender`` to ``recipient``.

        Args:
            sender: Identity to debit.
            recipient: Identity to credit.
            amount: Positive balance units to move.

        Returns:
            True if the transfer committed, False if the ledger refused it.
            A refused transfer leaves both balances unchanged.
        """
        ...
