"""Seed a demo user with a run of journal and mood entries.

Usage:
    flask seed-demo                         # demo@moodjournal.io, last 14 days
    flask seed-demo --email me@moodjournal.io --days 30
"""

from __future__ import annotations

from datetime import date, timedelta

import click
from flask.cli import with_appcontext

from moodjournal.core.auth.password import hash_password
from moodjournal.core.users.models import User
from moodjournal.domains.journal.services import journal_service
from moodjournal.domains.mood.models.mood_entry import MOOD_PALETTE
from moodjournal.domains.mood.services import mood_service
from moodjournal.extensions import db

DEMO_EMAIL = "demo@moodjournal.io"
DEMO_PASSWORD = "demo12345"

_TAGS = ("work", "family", "health, sleep", "reading", "")


def seed_demo_user(email: str = DEMO_EMAIL) -> User:
    user = User.query.filter_by(email=email.lower()).first()
    if not user:
        user = User(
            email=email.lower(),
            full_name="Demo User",
            password_hash=hash_password(DEMO_PASSWORD),
        )
        db.session.add(user)
        db.session.commit()
    return user


def seed_entries(user_id: int, days: int, today: date | None = None) -> tuple[int, int]:
    """Fill the last ``days`` days; dates that already have data are left alone."""
    today = today or date.today()
    journal_created = 0
    moods_created = 0
    for offset in range(days):
        day = today - timedelta(days=offset)
        if not journal_service.find_entry_for_date(user_id, day):
            journal_service.create_entry(
                user_id,
                entry_date=day,
                title=f"Notes for {day.strftime('%A')}",
                content=f"Demo entry written on {day.isoformat()}.",
                tags=_TAGS[offset % len(_TAGS)],
            )
            journal_created += 1
        if not mood_service.find_entry_for_date(user_id, day):
            mood_service.save_entry(
                user_id,
                entry_date=day,
                mood=MOOD_PALETTE[offset % len(MOOD_PALETTE)],
                intensity=(offset % 10) + 1,
            )
            moods_created += 1
    return journal_created, moods_created


@click.command("seed-demo")
@click.option("--email", "-e", default=DEMO_EMAIL, show_default=True, help="Demo account email")
@click.option("--days", "-d", type=click.IntRange(1, 365), default=14, show_default=True, help="Days of history")
@with_appcontext
def seed_demo_command(email: str, days: int):
    """Create a demo account with recent journal and mood history."""
    user = seed_demo_user(email)
    journal_created, moods_created = seed_entries(user.id, days)
    click.echo(f"Seeded {user.email}: {journal_created} journal entries, {moods_created} mood entries")


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(seed_demo_command)
