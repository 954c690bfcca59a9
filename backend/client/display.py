"""Rich terminal rendering for the Trak CLI."""

from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.table import Table

from modules.challenges.models import Challenge, UserChallenge
from modules.challenges.progress import get_challenge_progress, get_days_remaining
from modules.commutes.models import CommuteBreakdown, CommuteLog
from modules.leaderboard.models import LeaderboardEntry, UserStats
from modules.leaderboard.ranking import find_user_rank, next_rank_tier, rank_tier_for
from modules.rewards.models import Reward, UserRedemption
from modules.users.models import PublicUser

console = Console()


def format_commute_type(value: str) -> str:
    """Format a commute type for display.

    Example: "public_transport" -> "Public Transport"
    """
    return value.replace("_", " ").title()


def render_profile(user: PublicUser, stats: Optional[UserStats] = None) -> None:
    tier = rank_tier_for(user.points_total)
    console.print(f"[bold]{user.name}[/bold] ({user.username}, {user.role.value})")
    console.print(f"Points: {user.points_total}  Tier: {tier.name}")
    upcoming = next_rank_tier(user.points_total)
    if upcoming.name != tier.name:
        console.print(f"{upcoming.min_points - user.points_total} points to {upcoming.name}")
    if stats is not None:
        console.print(
            f"Streak: {stats.streak} weeks  CO2 saved: {stats.co2_saved} kg  "
            f"Challenges completed: {stats.completed_challenges}"
        )


def render_commutes(logs: list[CommuteLog], title: str = "Commutes") -> None:
    table = Table(title=title)
    table.add_column("Week of")
    table.add_column("Mode")
    table.add_column("Days", justify="right")
    table.add_column("Distance (km)", justify="right")
    table.add_column("CO2 saved (kg)", justify="right")
    for log in logs:
        table.add_row(
            log.week_start.isoformat(),
            format_commute_type(log.commute_type.value),
            str(log.days_logged),
            f"{log.distance_km:g}",
            str(log.co2_saved_kg),
        )
    console.print(table)


def render_breakdown(breakdown: CommuteBreakdown) -> None:
    table = Table(title=f"Commute breakdown ({breakdown.total_days} days)")
    table.add_column("Mode")
    table.add_column("Days", justify="right")
    table.add_column("Share", justify="right")
    for item in breakdown.breakdown:
        table.add_row(format_commute_type(item.type.value), str(item.days), f"{item.percentage}%")
    console.print(table)


def render_leaderboard(entries: list[LeaderboardEntry], user_id: int) -> None:
    table = Table(title="Leaderboard")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Points", justify="right")
    table.add_column("Streak", justify="right")
    for position, entry in enumerate(entries, start=1):
        style = "bold green" if entry.id == user_id else None
        table.add_row(
            str(position), entry.name, str(entry.points_total), str(entry.streak_count),
            style=style,
        )
    console.print(table)

    rank = find_user_rank(entries, user_id)
    if rank == -1:
        console.print("You are not in the top of the leaderboard yet.")
    else:
        console.print(f"Your rank: #{rank}")


def render_challenges(
    challenges: list[Challenge],
    joined: list[UserChallenge],
    now: Optional[datetime] = None,
) -> None:
    progress_by_id = {uc.challenge.id: uc.participant for uc in joined}
    table = Table(title="Challenges")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Goal")
    table.add_column("Reward", justify="right")
    table.add_column("Days left", justify="right")
    table.add_column("Progress", justify="right")
    for challenge in challenges:
        participant = progress_by_id.get(challenge.id)
        if participant is None:
            progress = "-"
        elif participant.completed:
            progress = "done"
        else:
            progress = f"{get_challenge_progress(challenge, participant.progress):.0f}%"
        table.add_row(
            str(challenge.id),
            challenge.title,
            f"{challenge.goal_value} {challenge.goal_type.value}",
            str(challenge.points_reward),
            str(get_days_remaining(challenge.end_date, now)),
            progress,
        )
    console.print(table)


def render_rewards(rewards: list[Reward], points: Optional[int] = None) -> None:
    table = Table(title="Rewards")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Cost", justify="right")
    table.add_column("Limit", justify="right")
    for reward in rewards:
        affordable = points is None or points >= reward.cost_points
        table.add_row(
            str(reward.id),
            reward.title,
            str(reward.cost_points),
            "-" if reward.quantity_limit is None else str(reward.quantity_limit),
            style=None if affordable else "dim",
        )
    console.print(table)


def render_redemptions(redemptions: list[UserRedemption]) -> None:
    table = Table(title="Redemptions")
    table.add_column("Date")
    table.add_column("Reward")
    table.add_column("Cost", justify="right")
    for item in redemptions:
        table.add_row(
            item.redemption.redeemed_at.strftime("%Y-%m-%d"),
            item.reward.title,
            str(item.reward.cost_points),
        )
    console.print(table)
