"""Shared identities and amounts for voting tests."""

OWNER = "owner"
ALICE = "alice"
BOB = "bob"
PATRICK = "patrick"

# Fixed mint at deployment
INITIAL_SUPPLY = 10_000_000_000

ONE_HOUR = 60 * 60
ONE_DAY = 24 * ONE_HOUR

# Stake used by the end-to-end scenarios; weight is 5_000_000 // 910
LARGE_STAKE = 5_000_000
