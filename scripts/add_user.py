#!/usr/bin/env python3
"""Add a new user to the skill matching system.

Usage:
    python scripts/add_user.py --name "John Doe" --email "john@example.com"
    python scripts/add_user.py -n "Jane Doe" -e "jane@example.com" \
        --skill "Python:Expert:programming" --skill "Figma:Beginner"
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skillswap.models.database import SKILL_LEVELS, User, get_engine, get_session
from skillswap.models.profiles import set_user_skill


def parse_skill(value: str) -> tuple[str, str, str | None]:
    """Parse "Name:Level[:Category]" into its parts."""
    parts = [part.strip() for part in value.split(":")]
    if len(parts) < 2 or not parts[0]:
        raise argparse.ArgumentTypeError(f"Expected Name:Level[:Category], got '{value}'")
    if parts[1] not in SKILL_LEVELS:
        raise argparse.ArgumentTypeError(
            f"Level must be one of {', '.join(SKILL_LEVELS)}, got '{parts[1]}'"
        )
    category = parts[2] if len(parts) > 2 and parts[2] else None
    return parts[0], parts[1], category


def add_user(
    name: str,
    email: str,
    skills: list[tuple[str, str, str | None]],
    bio: str | None = None,
    base_url: str = "http://localhost:8000",
) -> None:
    """Create a new user with skills and print their API URL."""
    engine = get_engine()
    session = get_session(engine)

    try:
        # Check if email already exists
        existing = session.query(User).filter(User.email == email).first()
        if existing:
            print(f"❌ Error: User with email '{email}' already exists")
            print(f"   Their match URL: {base_url}/api/u/{existing.access_token}/skill-match")
            sys.exit(1)

        # Create new user (access_token is auto-generated)
        user = User(name=name, email=email, bio=bio)
        session.add(user)
        session.commit()

        # Refresh to get the generated access_token
        session.refresh(user)

        for skill_name, level, category in skills:
            set_user_skill(session, user, skill_name, level, category)

        print()
        print("=" * 60)
        print("✅ User created successfully!")
        print("=" * 60)
        print()
        print(f"  Name:   {user.name}")
        print(f"  Email:  {user.email}")
        print(f"  Skills: {len(skills)}")
        for skill_name, level, _ in skills:
            print(f"    - {skill_name} ({level})")
        print()
        print("  Match URL:")
        print(f"  {base_url}/api/u/{user.access_token}/skill-match")
        print()
        print("  ⚠️  Keep this URL private!")
        print("  Anyone with this link can view and edit the user's skills.")
        print()
        print("=" * 60)

    except Exception as e:
        session.rollback()
        print(f"❌ Error creating user: {e}")
        sys.exit(1)
    finally:
        session.close()


def main():
    parser = argparse.ArgumentParser(
        description="Add a new user to the skill matching system"
    )
    parser.add_argument(
        "-n", "--name",
        required=True,
        help="User's display name"
    )
    parser.add_argument(
        "-e", "--email",
        required=True,
        help="User's email address"
    )
    parser.add_argument(
        "--bio",
        help="Short profile bio"
    )
    parser.add_argument(
        "-s", "--skill",
        action="append",
        type=parse_skill,
        default=[],
        help="Skill as Name:Level[:Category] (repeatable)"
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:8000",
        help="Base URL of the API (default: http://localhost:8000)"
    )

    args = parser.parse_args()

    add_user(args.name, args.email, args.skill, args.bio, args.base_url)


if __name__ == "__main__":
    main()
