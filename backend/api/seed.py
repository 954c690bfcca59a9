"""
Demo data for development.

Seeds one company's worth of users, commutes, challenges and rewards
through the services, so it works against either storage backend.
All demo accounts use the password "password123".
"""

import logging
from datetime import datetime, timedelta

from modules.challenges.models import CreateChallengeRequest, GoalType
from modules.commutes.calculator import week_start_for
from modules.commutes.models import CommuteType, LogCommuteRequest
from modules.rewards.models import CreateRewardRequest
from modules.users.models import RegisterRequest
from shared.models import AuthenticatedUser, UserRole

from .dependencies import ServiceContainer

logger = logging.getLogger(__name__)

DEMO_COMPANY_ID = 1
DEMO_PASSWORD = "password123"

# username, display name, starting points
DEMO_MEMBERS = [
    ("alex.morgan", "Alex Morgan", 0),
    ("daniel", "Daniel", 1250),
    ("emma", "Emma", 980),
    ("robert", "Robert", 855),
    ("sarah.johnson", "Sarah Johnson", 840),
    ("mark.thompson", "Mark Thompson", 785),
]


async def seed_demo_data(container: ServiceContainer) -> None:
    """Populate an empty store. Does nothing if the demo admin exists."""
    users = container.users
    if container.user_store.get_user_by_username("admin") is not None:
        logger.debug("Demo data already present")
        return

    admin_user = await users.register(
        RegisterRequest(
            username="admin",
            email="admin@ecocorp.com",
            name="Eco Corp Admin",
            password=DEMO_PASSWORD,
            company_id=DEMO_COMPANY_ID,
        ),
        role=UserRole.ADMIN,
    )
    admin = AuthenticatedUser(
        id=admin_user.id,
        username=admin_user.username,
        role=admin_user.role,
        company_id=admin_user.company_id,
    )

    members = {}
    for username, name, points in DEMO_MEMBERS:
        member = await users.register(RegisterRequest(
            username=username,
            email=f"{username.split('.')[0]}@ecocorp.com",
            name=name,
            password=DEMO_PASSWORD,
            company_id=DEMO_COMPANY_ID,
        ))
        if points:
            await users.award_points(member.id, "Starting balance", points)
        members[username] = member

    now = datetime.now().astimezone()
    bike_week = await container.challenges.create_challenge(admin, CreateChallengeRequest(
        title="Bike to Work Week",
        description="Cycle at least 3 days this week",
        start_date=now,
        end_date=now + timedelta(days=7),
        points_reward=50,
        goal_type=GoalType.DAYS,
        goal_value=3,
        commute_type=CommuteType.CYCLE,
    ))
    green_month = await container.challenges.create_challenge(admin, CreateChallengeRequest(
        title="Green Commute Month",
        description="Use sustainable transportation 15 days this month",
        start_date=now,
        end_date=now + timedelta(days=30),
        points_reward=100,
        goal_type=GoalType.DAYS,
        goal_value=15,
    ))

    alex = members["alex.morgan"]
    await container.challenges.join_challenge(alex.id, bike_week.id)
    await container.challenges.join_challenge(alex.id, green_month.id)

    week_start = week_start_for(now)
    for commute_type, days, distance in (
        (CommuteType.CYCLE, 3, 8),
        (CommuteType.PUBLIC_TRANSPORT, 1, 12),
        (CommuteType.REMOTE_WORK, 1, 0),
    ):
        await container.commutes.log_commute(alex.id, LogCommuteRequest(
            commute_type=commute_type,
            days_logged=days,
            distance_km=distance,
            week_start=week_start,
        ))

    for title, description, cost, limit in (
        ("Free Coffee Voucher", "Redeem a free coffee at the office cafe", 200, 50),
        ("Free Lunch Voucher", "Enjoy a free lunch at any of our partner restaurants", 500, 20),
        ("Half-Day Off", "Take a half-day off, on us!", 1000, 10),
    ):
        await container.rewards.create_reward(admin, CreateRewardRequest(
            title=title,
            description=description,
            cost_points=cost,
            quantity_limit=limit,
        ))

    logger.info(f"Seeded demo data: {len(members) + 1} users, 2 challenges, 3 rewards")
