#!/usr/bin/env python3
"""StakeVote - Simulated Voting Round.

Deploys an engine over the in-memory ledger with a fixed mint, opens one
round, casts the requested votes, then walks the timeline past the round
end and withdraws every locked balance. Useful for checking weight
dampening and withdrawal behavior end to end without a real ledger.

Usage:
    python scripts/run_voting_round.py [options]

Options:
    --owner NAME         Identity receiving the mint and opening the round (default: owner)
    --supply N           Units minted at deployment (default: 10000000000)
    --vote V:CHOICE:N    Voter V locks N units behind yes/no (repeatable)
    --duration SEC       Round length in seconds (default: 86400)
    --description TEXT   Round description
    --dev                Human-readable console logs instead of JSON
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import structlog
from dotenv import load_dotenv

from stakevote.application.services import VotingEngine
from stakevote.config import VotingConfig
from stakevote.domain.errors import VotingError
from stakevote.infrastructure.adapters import SystemTimeAuthority
from stakevote.infrastructure.observability import configure_structlog
from stakevote.infrastructure.stubs import (
    InMemoryBalanceLedger,
    InMemoryVotingEventEmitter,
    SingleAuthorityGate,
)

# Load environment variables
load_dotenv()

DEFAULT_SUPPLY = 10_000_000_000
DEFAULT_DURATION_SECONDS = 24 * 60 * 60


def parse_vote(raw: str) -> tuple[str, bool, int]:
    """Parse a VOTER:yes|no:AMOUNT argument."""
    try:
        voter, choice, amount = raw.split(":")
        normalized = choice.strip().lower()
        if normalized not in {"yes", "no", "true", "false"}:
            raise ValueError(choice)
        return voter, normalized in {"yes", "true"}, int(amount)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"Invalid vote '{raw}', expected VOTER:yes|no:AMOUNT"
        ) from e


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run a simulated StakeVote round against an in-memory ledger",
    )
    parser.add_argument("--owner", default="owner")
    parser.add_argument("--supply", type=int, default=DEFAULT_SUPPLY)
    parser.add_argument(
        "--vote",
        dest="votes",
        type=parse_vote,
        action="append",
        default=[],
        help="VOTER:yes|no:AMOUNT (repeatable)",
    )
    parser.add_argument("--duration", type=int, default=DEFAULT_DURATION_SECONDS)
    parser.add_argument("--description", default="Simulated governance round")
    parser.add_argument("--dev", action="store_true", help="Console log output")
    return parser.parse_args()


async def run(args: argparse.Namespace) -> int:
    """Run the simulated round.

    Returns:
        Process exit code.
    """
    log = structlog.get_logger().bind(service="run_voting_round", component="script")
    config = VotingConfig.from_environment()

    ledger = InMemoryBalanceLedger(owner_id=args.owner, initial_supply=args.supply)
    emitter = InMemoryVotingEventEmitter()
    engine = VotingEngine(
        ledger=ledger,
        access_gate=SingleAuthorityGate(args.owner),
        time_authority=SystemTimeAuthority(),
        event_emitter=emitter,
        config=config,
    )

    # Fund voters from the mint so they have something to lock
    for voter, _, amount in args.votes:
        if voter != args.owner:
            await ledger.transfer(args.owner, voter, amount)

    now = engine.now()
    start, end = now + 10, now + args.duration
    window = await engine.open_round(start, end, args.description, args.owner)
    print(f"Round {window.round_id} open [{start}, {end}): {window.description}")

    cast_at = start + min(3600, (end - start) // 2)
    exit_code = 0
    for voter, choice, amount in args.votes:
        try:
            await engine.cast_vote(voter, choice, amount, now=cast_at)
            side = "yes" if choice else "no"
            print(f"  {voter:<12} {side:<3} {amount:>14,} -> weight {engine.weight(amount):,}")
        except VotingError as e:
            log.warning("Vote rejected", voter_id=voter, error=str(e))
            print(f"  {voter:<12} rejected: {e}")
            exit_code = 1

    snapshot = engine.tally_snapshot(window.round_id, now=end)
    print(f"Tally: yes={snapshot.yes_weight:,} no={snapshot.no_weight:,}")

    settle_at = end + 100
    for voter in {v for v, _, _ in args.votes}:
        if engine.locked_amount(window.round_id, voter) > 0:
            returned = await engine.request_withdrawal(
                window.round_id, voter, now=settle_at
            )
            balance = await ledger.balance_of(voter)
            print(f"  {voter:<12} withdrew {returned:,} (balance {balance:,})")

    print(f"Custody balance after settlement: {await engine.custody.custody_balance():,}")
    print(f"Events emitted: {len(emitter.events)}")
    return exit_code


def main() -> int:
    """Main entry point."""
    args = parse_args()
    configure_structlog(environment="development" if args.dev else "production")
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
