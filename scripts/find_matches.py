#!/usr/bin/env python3
"""Print skill-exchange matches for a user.

Usage:
    python scripts/find_matches.py --email "test@example.com"
    python scripts/find_matches.py --user-id 1
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skillswap.matching.matcher import SkillMatcher
from skillswap.models.database import User, get_engine, get_session
from skillswap.models.profiles import ProfileNotFoundError


def resolve_user_id(engine, email: str) -> int | None:
    session = get_session(engine)
    try:
        user = session.query(User).filter(User.email == email).first()
        return user.id if user else None
    finally:
        session.close()


def main():
    parser = argparse.ArgumentParser(
        description="Find skill-exchange partners for a user"
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--email", help="User's email address")
    group.add_argument("--user-id", type=int, help="User's ID")

    args = parser.parse_args()

    engine = get_engine()
    user_id = args.user_id
    if user_id is None:
        user_id = resolve_user_id(engine, args.email)
        if user_id is None:
            print(f"❌ Error: No user with email '{args.email}'")
            sys.exit(1)

    matcher = SkillMatcher(engine=engine)
    try:
        summary = matcher.rank_matches(user_id)
    except ProfileNotFoundError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    print("\n" + "=" * 60)
    print(f"SKILL MATCHES ({len(summary.matches)} of {summary.total_qualifying})")
    print("=" * 60)

    if summary.message:
        print(summary.message)

    for rank, match in enumerate(summary.matches, start=1):
        name = match.candidate.display_name or f"User {match.candidate.user_id}"
        print(f"{rank:>2}. {name:<30} {match.match_score:>3}")
        if match.they_can_teach:
            print(f"    They can teach: {', '.join(match.they_can_teach)}")
        if match.you_can_teach:
            print(f"    You can teach:  {', '.join(match.you_can_teach)}")
        print(f"    {match.explanation}")

    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
