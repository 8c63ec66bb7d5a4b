"""
Application layer - Use cases for StakeVote.

This layer contains:
- Ports: interfaces to the balance ledger, access gate, clock and event sink
- Services: round manager, custody gateway, ballot ledger, withdrawal
  controller, and the VotingEngine facade composing them

This layer may import from domain/ and config/ only.
"""
