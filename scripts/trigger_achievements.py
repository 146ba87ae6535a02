"""CLI script to manually re-check achievements."""
from __future__ import annotations

import argparse

from ecoscan.tasks.achievements import check_all_achievements, check_user_achievements


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Re-evaluate achievement rules against recorded history",
    )
    parser.add_argument(
        "--username",
        type=str,
        help="Check achievements for a single user only",
    )
    parser.add_argument(
        "--async",
        action="store_true",
        dest="use_async",
        help="Queue task asynchronously instead of running immediately",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Check achievements for every user with recorded classifications",
    )

    args = parser.parse_args()

    if args.all:
        print("Checking achievements for all users...")
        if args.use_async:
            task = check_all_achievements.apply_async()
            print(f"Task queued: {task.id}")
        else:
            result = check_all_achievements.run()
            print(f"Result: {result}")
    elif args.username:
        print(f"Checking achievements for {args.username}")
        if args.use_async:
            task = check_user_achievements.apply_async(args=(args.username,))
            print(f"Task queued: {task.id}")
        else:
            result = check_user_achievements.run(args.username)
            print(f"Result: {result}")
    else:
        parser.error("Specify --username or --all")


if __name__ == "__main__":
    main()
