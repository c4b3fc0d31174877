"""
Seed a demo club admin account for each club (or one club with --club)

Usage:
  python scripts/seed_club_admin.py --club GDSC --password SecurePass123
"""

import sys
import argparse
import asyncio
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from clubhub.database import database, connect_db, disconnect_db
from clubhub.errors import PolicyRejection
from clubhub.schemas.common import ClubName, UserRole
from clubhub.schemas.user import RegisterRequest
from clubhub.services.user_service import user_service


def admin_email(club: ClubName) -> str:
    return f"{club.value.lower().replace(' ', '')}.admin@clubhub.app"


async def seed_club_admins(clubs, password: str):
    await connect_db()

    try:
        for club in clubs:
            email = admin_email(club)
            existing = await database.fetch_one(
                "SELECT id FROM users WHERE email = :email",
                {"email": email}
            )
            if existing:
                print(f"Club admin already exists: {email}")
                continue

            try:
                await user_service.register(RegisterRequest(
                    name=f"{club.value} Administrator",
                    email=email,
                    password=password,
                    role=UserRole.CLUB_ADMIN,
                    club_name=club,
                ))
            except PolicyRejection as exc:
                print(f"Skipped {email}: {exc.message}")
                continue

            print(f"Created club admin for {club.value}")
            print(f"   Email: {email}")
            print(f"   Password: {password}")
    finally:
        await disconnect_db()


def main():
    parser = argparse.ArgumentParser(description="Seed demo club admin accounts")
    parser.add_argument("--club", choices=[c.value for c in ClubName], help="Only seed this club")
    parser.add_argument("--password", default="SecurePass123")
    args = parser.parse_args()

    clubs = [ClubName(args.club)] if args.club else list(ClubName)
    asyncio.run(seed_club_admins(clubs, args.password))


if __name__ == "__main__":
    main()
