"""
StakeVote - Balance-Backed Governance Voting Engine

Round-based voting in which influence is backed by custodied balance:
participants lock balance to cast a vote, large holdings are dampened
before they reach the tally, and locked balance is returned according
to a withdrawal policy tied to round timing.

Engine Truths:
- A round is only ever superseded, never mutated in place
- A locked ballot cannot flip sides without first being withdrawn
- Every state change is all-or-nothing and emits exactly one event
- Tallies of ended rounds are frozen
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
