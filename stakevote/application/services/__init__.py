"""Application services for StakeVote.

- RoundManagerService: round creation policy and "is voting open"
- CustodyGateway: moves balance into and out of custody
- BallotLedgerService: vote casting, ballots and weighted tallies
- WithdrawalControllerService: early unwind, blackout and settled withdrawals
- VotingEngine: facade wiring the above behind one write lock
"""

from stakevote.application.services.ballot_ledger_service import BallotLedgerService
from stakevote.application.services.custody_gateway import CustodyGateway
from stakevote.application.services.round_manager_service import RoundManagerService
from stakevote.application.services.voting_engine import VotingEngine
from stakevote.application.services.withdrawal_controller_service import (
    WithdrawalControllerService,
)

__all__: list[str] = [
    "BallotLedgerService",
    "CustodyGateway",
    "RoundManagerService",
    "VotingEngine",
    "WithdrawalControllerService",
]
