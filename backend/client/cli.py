"""
Trak command line client.

Usage:
    trak login alex.morgan
    trak log cycle --days 3 --distance 8
    trak stats
    trak leaderboard --limit 5
    trak redeem 1
"""

import argparse
import asyncio
import getpass
import logging
import sys
from pathlib import Path
from typing import Optional

import httpx

from modules.commutes.models import CommuteType

from . import display
from .api import TrakApi
from .cache import QueryCache
from .config import ClientSettings, get_client_settings
from .errors import TrakClientError, extract_error_message
from .hints import FileHintStore
from .mutations import TrakMutations
from .notifications import ConsoleNotifier
from .queries import TrakQueries
from .session import Session, current_session, session_scope

logger = logging.getLogger(__name__)

DEFAULT_HINT_FILE = Path.home() / ".trak" / "session.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trak", description="Track sustainable commuting")
    parser.add_argument("--api", type=str, help="API base URL (default: TRAK_API_BASE_URL)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Log in")
    login.add_argument("username", help="Username or email")
    login.add_argument("--password", help="Prompted for when omitted")

    commands.add_parser("logout", help="Log out")
    commands.add_parser("whoami", help="Show the current user and stats")

    log = commands.add_parser("log", help="Log this week's commute")
    log.add_argument("mode", choices=[t.value for t in CommuteType])
    log.add_argument("--days", type=int, required=True, help="Days this week (0-7)")
    log.add_argument("--distance", type=float, default=0, help="One-day distance in km")

    commands.add_parser("commutes", help="Show this week's commutes")
    commands.add_parser("history", help="Show all commutes and the mode breakdown")
    commands.add_parser("stats", help="Show points, streak and CO2 saved")

    leaderboard = commands.add_parser("leaderboard", help="Show the company leaderboard")
    leaderboard.add_argument("--limit", type=int, default=10)

    commands.add_parser("challenges", help="List challenges and your progress")
    join = commands.add_parser("join", help="Join a challenge")
    join.add_argument("challenge_id", type=int)

    commands.add_parser("rewards", help="List rewards")
    redeem = commands.add_parser("redeem", help="Redeem a reward")
    redeem.add_argument("reward_id", type=int)
    commands.add_parser("redemptions", help="Show redeemed rewards")

    return parser


async def run_command(args: argparse.Namespace, queries: TrakQueries, mutations: TrakMutations) -> int:
    session = current_session()

    if args.command == "login":
        password = args.password or getpass.getpass("Password: ")
        user = await session.login(args.username, password)
        display.console.print(f"Logged in as [bold]{user.name}[/bold]")
        return 0

    if args.command == "logout":
        await session.logout()
        display.console.print("Logged out")
        return 0

    user = await session.start()
    if user is None:
        display.console.print("[red]Not logged in.[/red] Run `trak login <username>` first.")
        return 1

    if args.command == "whoami":
        display.render_profile(user, await queries.user_stats(user.id))
    elif args.command == "log":
        await mutations.log_commute(user.id, CommuteType(args.mode), args.days, args.distance)
        display.render_commutes(await queries.current_week_commutes(user.id), "This week")
    elif args.command == "commutes":
        display.render_commutes(await queries.current_week_commutes(user.id), "This week")
    elif args.command == "history":
        display.render_commutes(await queries.commute_logs(user.id))
        display.render_breakdown(await queries.commute_breakdown(user.id))
    elif args.command == "stats":
        profile = await queries.user_profile(user.id)
        display.render_profile(profile, await queries.user_stats(user.id))
    elif args.command == "leaderboard":
        display.render_leaderboard(await queries.leaderboard(user.id, args.limit), user.id)
    elif args.command == "challenges":
        challenges, joined = await asyncio.gather(
            queries.challenges(user.id),
            queries.user_challenges(user.id),
        )
        display.render_challenges(challenges, joined)
    elif args.command == "join":
        await mutations.join_challenge(user.id, args.challenge_id)
    elif args.command == "rewards":
        profile = await queries.user_profile(user.id)
        display.render_rewards(await queries.rewards(user.id), profile.points_total)
    elif args.command == "redeem":
        await mutations.redeem_reward(user.id, args.reward_id)
    elif args.command == "redemptions":
        display.render_redemptions(await queries.user_redemptions(user.id))
    return 0


async def run(args: argparse.Namespace, settings: ClientSettings) -> int:
    hints = FileHintStore(settings.hint_file or DEFAULT_HINT_FILE)
    cache = QueryCache(stale_time=settings.stale_time_seconds)

    async with TrakApi(settings, hints) as api:
        session = Session(api, cache, hints)
        queries = TrakQueries(api, cache)
        mutations = TrakMutations(api, cache, ConsoleNotifier(display.console))
        with session_scope(session):
            return await run_command(args, queries, mutations)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = get_client_settings()
    if args.api:
        settings = settings.model_copy(update={"api_base_url": args.api})

    try:
        return asyncio.run(run(args, settings))
    except (TrakClientError, httpx.HTTPError) as e:
        # Mutation failures were already shown as toasts
        if args.command not in ("log", "join", "redeem"):
            display.console.print(f"[red]Error:[/red] {extract_error_message(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
