#!/usr/bin/env python3
"""
Replay a burst of requests from one client through an admission registry.

Reproduces the classic scenario of a single client firing more requests than
its per-window budget allows, and prints how many were admitted, dropped, or
ignored as unknown.
"""

import argparse
import json
import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from admission.adapters.rate_limit.factory import create_rate_limiter  # noqa: E402
from admission.core.clients import parse_client_ids  # noqa: E402
from admission.core.config import settings  # noqa: E402
from admission.core.errors import InvalidConfigurationError  # noqa: E402
from admission.core.logging import configure_logging  # noqa: E402
from admission.services.registry import AdmissionRegistry  # noqa: E402
from admission.services.replay import replay_requests  # noqa: E402


def positive_int(value: str) -> int:
    """argparse type accepting integers >= 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    cfg = settings.admission
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--client", help="Client id sending the burst (default: first configured)")
    parser.add_argument("--count", type=positive_int, default=300, help="Number of requests to send")
    parser.add_argument("--capacity", type=positive_int, default=cfg.capacity, help="Bucket capacity")
    parser.add_argument(
        "--window-ms",
        type=positive_int,
        default=cfg.window_millis,
        help="Full-refill window in milliseconds",
    )
    parser.add_argument(
        "--clients", default=cfg.client_ids, help="Comma-separated recognized client ids"
    )
    parser.add_argument("--algorithm", default=cfg.algorithm, help="Rate limiting algorithm")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging()

    client_ids = sorted(parse_client_ids(args.clients))
    if not client_ids and not args.client:
        print("No client ids configured", file=sys.stderr)
        return 2

    try:
        template = create_rate_limiter(
            args.algorithm,
            capacity=args.capacity,
            window_millis=args.window_ms,
        )
    except InvalidConfigurationError as exc:
        parser.error(exc.message)
    registry = AdmissionRegistry(client_ids, template)

    sender = args.client or client_ids[0]
    summary = replay_requests(registry, [sender] * args.count)
    print(json.dumps(summary.as_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
