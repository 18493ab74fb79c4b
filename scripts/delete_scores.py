#!/usr/bin/env python3
"""
Delete every recorded game score of a user (e.g. to reset the star ratings on the dashboard).
Usage: python scripts/delete_scores.py <user_id>
From repo root with PYTHONPATH=. or from backend: python -m scripts.delete_scores <user_id>
"""
import sys
import os

# Allow running from repo root or backend
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from backend.api.database import SessionLocal, init_db
from backend.api.models import delete_scores, list_scores


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python scripts/delete_scores.py <user_id>", file=sys.stderr)
        sys.exit(1)
    try:
        user_id = int(sys.argv[1].strip())
    except ValueError:
        print("Error: user_id must be an integer.", file=sys.stderr)
        sys.exit(1)

    init_db()
    db = SessionLocal()
    try:
        existing = list_scores(db, user_id)
        if not existing:
            print(f"No scores found for user {user_id}")
            return
        games = sorted({s.game_name for s in existing})
        deleted = delete_scores(db, user_id)
        print(f"Deleted {deleted} scores for user {user_id} ({', '.join(games)}).")
    except Exception as e:
        db.rollback()
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
