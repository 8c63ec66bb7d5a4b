"""In-memory balance ledger stub.

A fixed-supply fungible ledger: the whole supply is minted to the
deploying identity at construction and only moves by transfer after
that. Custody is an ordinary identity on this ledger.

WARNING: This stub is for development/testing only.
"""

from __future__ import annotations

import asyncio

from stakevote.application.ports.balance_ledger import BalanceLedgerProtocol


class InMemoryBalanceLedger(BalanceLedgerProtocol):
    """In-memory implementation of BalanceLedgerProtocol.

    Failure Injection:
    - fail_next_transfers(n): the next n transfers are refused (return False)
      without moving any balance

    Attributes:
        owner_id: Identity the initial supply was minted to.
        total_supply: Fixed number of balance units in existence.
    """

    def __init__(self, owner_id: str, initial_supply: int) -> None:
        """Mint ``initial_supply`` to ``owner_id``.

        Args:
            owner_id: Deploying identity.
            initial_supply: Units to mint (fixed for the ledger's lifetime).

        Raises:
            ValueError: If initial_supply is negative.
        """
        if initial_supply < 0:
            raise ValueError(f"initial_supply must be >= 0, got {initial_supply}")
        self._owner_id = owner_id
        self._total_supply = initial_supply
        self._balances: dict[str, int] = {owner_id: initial_supply}
        self._refuse_remaining = 0
        self._transfer_count = 0
        self._lock = asyncio.Lock()

    @property
    def owner_id(self) -> str:
        return self._owner_id

    @property
    def total_supply(self) -> int:
        return self._total_supply

    @property
    def transfer_count(self) -> int:
        """Number of transfers that committed."""
        return self._transfer_count

    async def balance_of(self, identity: str) -> int:
        """Return the balance of ``identity`` (0 if never credited)."""
        return self._balances.get(identity, 0)

    async def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        """Move balance between identities.

        Returns:
            True if committed; False if refused (insufficient balance,
            non-positive amount, or injected failure).
        """
        async with self._lock:
            if self._refuse_remaining > 0:
                self._refuse_remaining -= 1
                return False
            if amount <= 0 or self._balances.get(sender, 0) < amount:
                return False
            self._balances[sender] -= amount
            self._balances[recipient] = self._balances.get(recipient, 0) + amount
            self._transfer_count += 1
            return True

    def fail_next_transfers(self, count: int = 1) -> None:
        """Refuse the next ``count`` transfers (for failure-path tests)."""
        self._refuse_remaining = count
