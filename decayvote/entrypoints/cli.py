"""Command-line entrypoint.

Casts a comma-separated list of votes into a fresh consensus window, pacing
the casts so decay has something to act on, then prints the decision.

    decayvote --votes A,B,A --decay linear
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from decayvote import __version__
from decayvote.config.params import ConsensusParams
from decayvote.engine.clock import ManualClock, system_clock
from decayvote.engine.factory import DECAY_STRATEGIES, ESCALATOR_STRATEGIES, build_consensus
from decayvote.engine.types import ConfigurationError
from decayvote.shared.logging import setup_events_logger, setup_logging

logger = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 20
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_votes(raw: str) -> List[str]:
    """Split a comma-separated vote list, dropping blank entries."""
    return [v.strip() for v in raw.split(",") if v.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="decayvote",
        description="Time-decayed consensus over a window of votes",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--votes", required=True, help="Comma-separated vote values")
    parser.add_argument(
        "-d",
        "--decay",
        choices=sorted(DECAY_STRATEGIES),
        default=None,
        help="Decay strategy (default: exp)",
    )
    parser.add_argument(
        "--escalator",
        choices=sorted(ESCALATOR_STRATEGIES),
        default=None,
        help="Threshold escalator (default: linear)",
    )
    parser.add_argument("--window", type=float, default=None, help="Window duration in seconds (default: 300)")
    parser.add_argument("--base", type=float, default=None, help="Initial winning share (default: 0.51)")
    parser.add_argument("--slope", type=float, default=None, help="Share change per second (default: 0)")
    parser.add_argument("--cap", type=float, default=None, help="Maximum winning share (default: 1)")
    parser.add_argument("--floor", type=float, default=None, help="Minimum winning share (default: 0)")
    parser.add_argument("--min-weight", type=float, default=None, help="Floor on each vote's weight (default: 0.1)")
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=DEFAULT_DELAY_MS,
        help=f"Pause between casts in milliseconds (default: {DEFAULT_DELAY_MS})",
    )
    parser.add_argument(
        "--simulate",
        action="store_true",
        help="Advance a simulated clock between casts instead of sleeping",
    )
    parser.add_argument("--verbose", action="store_true", help="Print per-value weights and shares")
    parser.add_argument("--events-dir", default=None, help="Directory for events.log")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    return parser


def resolve_params(args: argparse.Namespace) -> ConsensusParams:
    """Merge environment configuration with command-line overrides."""
    return ConsensusParams.from_env().with_overrides({
        "decay": {"kind": args.decay},
        "escalator": {
            "kind": args.escalator,
            "base": args.base,
            "slope": args.slope,
            "cap": args.cap,
            "floor": args.floor,
        },
        "window": {"duration_seconds": args.window},
        "aggregator": {"min_weight": args.min_weight},
    })


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI. Returns the process exit code."""
    # Load .env if not in test mode
    if os.environ.get("DECAYVOTE_TEST_MODE") != "true":
        load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.delay_ms < 0:
        parser.error("--delay-ms must be >= 0")

    votes = parse_votes(args.votes)
    if not votes:
        parser.error("--votes must contain at least one value")

    try:
        params = resolve_params(args)
        clock = ManualClock(start=time.time()) if args.simulate else system_clock
        consensus = build_consensus(params, clock=clock)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logger.info(
        "Casting %d votes (decay=%s, escalator=%s, window=%ss)",
        len(votes),
        params.decay.kind,
        params.escalator.kind,
        params.window.duration_seconds,
    )

    delay = args.delay_ms / 1000.0
    for i, value in enumerate(votes):
        consensus.cast(value)
        if i < len(votes) - 1 and delay > 0:
            if args.simulate:
                clock.advance(delay)
            else:
                time.sleep(delay)

    snapshot = consensus.snapshot()

    if args.verbose:
        print(f"Votes: {snapshot.vote_count}  Threshold: {snapshot.threshold:.4f}")
        for value, weight in snapshot.weights.items():
            print(f"  {value}: weight={weight:.4f} share={snapshot.shares[value]:.4f}")

    if snapshot.winner is not None:
        print(f"Consensus: {snapshot.winner}")
    else:
        print("No consensus reached")

    if args.events_dir:
        events = setup_events_logger(args.events_dir)
        events.event(
            "decision winner=%s votes=%d threshold=%.4f total_weight=%.4f",
            snapshot.winner,
            snapshot.vote_count,
            snapshot.threshold,
            snapshot.total_weight,
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
