#!/usr/bin/env python3
"""Initialize database and add sample data for testing."""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skillswap.models.database import Base, User, get_engine, get_session
from skillswap.models.profiles import set_user_skill

SAMPLE_USERS = [
    {
        "name": "Test User",
        "email": "test@example.com",
        "bio": "Frontend developer learning design.",
        "skills": [("React", "Intermediate", "programming"), ("TypeScript", "Advanced", "programming")],
    },
    {
        "name": "Maya Chen",
        "email": "maya@example.com",
        "bio": "Product designer who codes a little.",
        "skills": [("React", "Expert", "programming"), ("Figma", "Expert", "design")],
    },
    {
        "name": "Tom Okafor",
        "email": "tom@example.com",
        "bio": "Data engineer.",
        "skills": [("Python", "Expert", "programming"), ("SQL", "Advanced", "data")],
    },
    {
        "name": "Lena Fischer",
        "email": "lena@example.com",
        "bio": "Welder and woodworker.",
        "skills": [("Welding", "Expert", "crafts")],
    },
]


def init_db():
    """Create all tables and add sample data."""
    engine = get_engine()

    # Create all tables
    Base.metadata.create_all(engine)
    print("✓ Tables created")

    session = get_session(engine)

    try:
        # Check if sample user already exists
        existing_user = session.query(User).filter_by(email="test@example.com").first()
        if existing_user:
            print("✓ Sample users already exist (test user id={})".format(existing_user.id))
            return

        for sample in SAMPLE_USERS:
            user = User(name=sample["name"], email=sample["email"], bio=sample["bio"])
            session.add(user)
            session.commit()
            print("✓ Created user: {} ({})".format(user.name, user.email))

            for name, level, category in sample["skills"]:
                set_user_skill(session, user, name, level, category)
                print("  - {} ({})".format(name, level))

        print("\n✓ All sample data committed successfully!")

        # Verify by querying
        print("\n--- Verification ---")
        user = session.query(User).filter_by(email="test@example.com").first()
        print("User: {} (id={})".format(user.name, user.id))
        print("Skills count: {}".format(len(user.user_skills)))
        print("Match URL: /api/u/{}/skill-match".format(user.access_token))

    except Exception as e:
        session.rollback()
        print("✗ Error: {}".format(e))
        raise
    finally:
        session.close()


if __name__ == "__main__":
    init_db()
