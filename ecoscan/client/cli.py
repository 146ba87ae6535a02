"""Command line front end for the EcoScan client."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

import httpx

from ecoscan.client.api import ApiError, EcoScanClient
from ecoscan.client.session import EcoScanSession
from ecoscan.config import settings
from ecoscan.core import guide
from ecoscan.utils.exceptions import EcoScanError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecoscan",
        description="Classify waste, earn points and climb the leaderboard",
    )
    parser.add_argument("--api-url", default=settings.API_BASE_URL, help="Backend base URL")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Do not contact the backend; record against the local cache only",
    )
    parser.add_argument(
        "--cache",
        type=Path,
        default=settings.LOCAL_CACHE_PATH,
        help="Path of the local cache file",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    classify = sub.add_parser("classify", help="Classify an image file")
    classify.add_argument("image", type=Path)

    sub.add_parser("profile", help="Show points, level and achievements")

    board = sub.add_parser("leaderboard", help="Show the top players")
    board.add_argument("--limit", type=int, default=None)

    sub.add_parser("challenges", help="List today's challenges")

    complete = sub.add_parser("complete", help="Complete a challenge")
    complete.add_argument("challenge_id", type=int)

    sub.add_parser("history", help="Show classification history")

    guide_cmd = sub.add_parser("guide", help="Search the disposal guide")
    guide_cmd.add_argument("search", nargs="?", default=None)

    feedback = sub.add_parser("feedback", help="Send feedback")
    feedback.add_argument("text")

    username = sub.add_parser("username", help="Save your username")
    username.add_argument("name")

    sub.add_parser("sync", help="Push the local total to the leaderboard")
    sub.add_parser("tutorial", help="Show the tutorial")
    return parser


def _run(args: argparse.Namespace, session: EcoScanSession) -> None:
    api = session.api
    if args.command == "classify":
        outcome = session.classify(args.image.read_bytes())
        record = outcome.record
        print(f"{record.waste_type}: {record.action} in the {record.disposal} (+{record.points} points)")
        print(f"Total: {outcome.total_points} ({outcome.level})")
        for name in outcome.new_achievements:
            print(f"Achievement unlocked: {name}")
        if outcome.daily_bonus:
            print(f"Daily challenge completed! +{outcome.daily_bonus} points")
    elif args.command == "profile":
        print(f"Username: {session.username or '(not set)'}")
        print(f"Points: {session.points} ({session.level})")
        achievements = session.store.unlocked_achievements(session.username)
        print(f"Achievements: {', '.join(achievements) if achievements else 'none yet'}")
    elif args.command == "leaderboard":
        for entry in _online(api).leaderboard(args.limit):
            print(f"{entry['rank']}. {entry['username']} {entry['points']} pts")
        if session.username:
            rank = _online(api).rank(session.username)["rank"]
            print(f"Your rank: {rank if rank is not None else 'unranked'}")
    elif args.command == "challenges":
        for item in _online(api).challenges(session.username or None):
            mark = "x" if item["completed"] else " "
            print(f"[{mark}] {item['id']}: {item['description']} ({item['points']} pts)")
    elif args.command == "complete":
        print(f"Challenge completed! +{session.complete_challenge(args.challenge_id)} points")
    elif args.command == "history":
        for record in session.refresh_history():
            print(f"{record.timestamp:%Y-%m-%d %H:%M} {record.waste_type} ({record.action}) +{record.points}")
    elif args.command == "guide":
        for entry in guide.search(args.search):
            print(f"{entry.type}: {entry.instructions}")
    elif args.command == "feedback":
        print(_online(api).feedback(args.text, session.username or None)["message"])
    elif args.command == "username":
        print(f"Username saved: {session.save_username(args.name)}")
    elif args.command == "sync":
        session.sync()
        print("Leaderboard updated.")
    elif args.command == "tutorial":
        for index, step in enumerate(guide.TUTORIAL_STEPS, start=1):
            print(f"{index}. {step}")


def _online(api: Optional[EcoScanClient]) -> EcoScanClient:
    if api is None:
        raise EcoScanError("This command needs the backend; drop --offline.")
    return api


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    api = None if args.offline else EcoScanClient(args.api_url)
    session = EcoScanSession.open(args.cache, api=api)
    try:
        _run(args, session)
    except (ApiError, EcoScanError) as exc:
        parser.exit(1, f"Error: {exc.message}\n")
    except httpx.TransportError as exc:
        parser.exit(1, f"Error: backend unreachable ({exc})\n")
    finally:
        session.close()
    return 0
