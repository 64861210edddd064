#!/usr/bin/env python3
"""Seed a demo movie catalogue.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the demo database
2. Inserts a handful of sample movies (skipped if the catalogue is not empty)
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from movieapi.db import repo  # noqa: E402
from movieapi.db.session import get_db_session, init_db  # noqa: E402
from movieapi.models.domain import MovieEntity  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_DATABASE_URL = f"sqlite:///{DEMO_DB_PATH}"

DEMO_MOVIES = [
    MovieEntity(title="Central do Brasil", genre="Drama", duration=113, release_year=1998),
    MovieEntity(title="Cidade de Deus", genre="Crime", duration=130, release_year=2002),
    MovieEntity(title="O Auto da Compadecida", genre="Comedy", duration=104, release_year=2000),
    MovieEntity(title="Tropa de Elite", genre="Action", duration=115, release_year=2007),
    MovieEntity(title="Bacurau", genre="Western", duration=131, release_year=2019),
]


def seed_database() -> int:
    """Insert demo movies. Returns how many were created."""
    with get_db_session(DEMO_DATABASE_URL) as session:
        existing = repo.count_movies(session)
        if existing:
            print(f"Catalogue already has {existing} movies, skipping")
            return 0

        for movie in DEMO_MOVIES:
            created = repo.create_movie(session, movie)
            print(f"  Created movie {created.movie_id}: {created.title}")

    return len(DEMO_MOVIES)


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("Movie API Demo Seeding Script")
    print("=" * 60)

    print("\n[1/2] Initializing database...")
    init_db(DEMO_DATABASE_URL)

    print("\n[2/2] Seeding movies...")
    created = seed_database()

    print("\n" + "=" * 60)
    print(f"Demo seeding complete! ({created} movies created)")
    print(f"Database: {DEMO_DB_PATH}")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
