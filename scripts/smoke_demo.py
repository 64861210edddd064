#!/usr/bin/env python3
"""Smoke test for the demo catalogue.

Drives every endpoint in-process against the seeded demo database and
leaves the catalogue as it found it.

Requires the test extra (TestClient needs httpx):
    pip install -e ".[test]"

Usage:
    python scripts/seed_demo.py
    python scripts/smoke_demo.py

Exit codes:
    0: All checks passed
    1: Some checks failed
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from fastapi.testclient import TestClient  # noqa: E402

from movieapi.api.app import create_app  # noqa: E402
from movieapi.config import Settings  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_DATABASE_URL = f"sqlite:///{DEMO_DB_PATH}"

SMOKE_MOVIE = {"title": "Smoke Test", "genre": "Documentary", "duration": 90}


def check_database_exists() -> bool:
    """Check that demo database exists."""
    if not DEMO_DB_PATH.exists():
        print(f"FAIL: Demo database not found: {DEMO_DB_PATH}")
        return False
    print(f"OK: Database exists: {DEMO_DB_PATH}")
    return True


def check_list(client: TestClient) -> bool:
    """Check that the seeded movies are listed."""
    response = client.get("/movies")
    if response.status_code != 200 or not response.json():
        print(f"FAIL: GET /movies -> {response.status_code}")
        return False
    print(f"OK: GET /movies returned {len(response.json())} movies")
    return True


def check_lifecycle(client: TestClient) -> bool:
    """Create, read, update, patch and delete a throwaway movie."""
    response = client.post("/movies", json=SMOKE_MOVIE)
    if response.status_code != 201:
        print(f"FAIL: POST /movies -> {response.status_code}")
        return False
    location = response.headers["location"]
    print(f"OK: Created {location}")

    ok = True
    steps = [
        ("GET", client.get(location), 200),
        ("PUT", client.put(location, json={**SMOKE_MOVIE, "duration": 95}), 204),
        (
            "PATCH",
            client.patch(location, json=[{"op": "replace", "path": "/genre", "value": "Drama"}]),
            204,
        ),
        ("DELETE", client.delete(location), 204),
        ("GET after delete", client.get(location), 404),
    ]
    for name, response, expected in steps:
        if response.status_code == expected:
            print(f"    OK: {name} -> {expected}")
        else:
            print(f"    FAIL: {name} -> {response.status_code} (expected {expected})")
            ok = False
    return ok


def main() -> int:
    """Run all smoke checks."""
    print("=" * 60)
    print("Movie API Demo Smoke Test")
    print("=" * 60)

    if not check_database_exists():
        print("\nRun scripts/seed_demo.py first")
        return 1

    app = create_app(Settings(database_url=DEMO_DATABASE_URL))
    with TestClient(app) as client:
        results = [check_list(client), check_lifecycle(client)]

    print("\n" + "=" * 60)
    if all(results):
        print("All checks passed!")
        return 0
    print("Some checks failed")
    return 1


if __name__ == "__main__":
    sys.exit(main())
