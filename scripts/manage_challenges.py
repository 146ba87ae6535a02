"""CLI script to materialise or prune the shared challenge pools."""
from __future__ import annotations

import argparse

from ecoscan.tasks.challenges import materialise_daily_challenges, prune_old_challenges


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Manage daily challenge pools",
    )
    parser.add_argument(
        "--date",
        type=str,
        help="Day to materialise in YYYY-MM-DD format (default: today)",
    )
    parser.add_argument(
        "--prune",
        action="store_true",
        help="Delete pools older than the retention window instead",
    )
    parser.add_argument(
        "--retention-days",
        type=int,
        help="Override CHALLENGE_RETENTION_DAYS when pruning",
    )
    parser.add_argument(
        "--async",
        action="store_true",
        dest="use_async",
        help="Queue task asynchronously instead of running immediately",
    )

    args = parser.parse_args()

    if args.prune:
        print("Pruning old challenge pools...")
        if args.use_async:
            task = prune_old_challenges.apply_async(args=(args.retention_days,))
            print(f"Task queued: {task.id}")
        else:
            result = prune_old_challenges.run(args.retention_days)
            print(f"Result: {result}")
    else:
        print(f"Materialising challenge pool for {args.date or 'today'}")
        if args.use_async:
            task = materialise_daily_challenges.apply_async(args=(args.date,))
            print(f"Task queued: {task.id}")
        else:
            result = materialise_daily_challenges.run(args.date)
            print(f"Result: {result}")


if __name__ == "__main__":
    main()
