"""Print a long‑lived bearer token for an existing user.

Usage:
    python create_token.py admin [--days 365]
"""
import argparse
import sqlite3
import sys

from cleaning_service_api.app.core.db import get_database_path
from cleaning_service_api.app.core.security import create_access_token


def main() -> None:
    ap = argparse.ArgumentParser(description="Issue a bearer token for a user.")
    ap.add_argument("username")
    ap.add_argument("--days", type=int, default=365, help="Token lifetime in days")
    args = ap.parse_args()

    conn = sqlite3.connect(get_database_path())
    try:
        row = conn.execute("SELECT id FROM users WHERE username = ?", (args.username,)).fetchone()
    finally:
        conn.close()
    if not row:
        print(f"[!] No user found with username: {args.username}", file=sys.stderr)
        sys.exit(2)

    token = create_access_token(
        {"sub": args.username, "user_id": row[0]}, expires_delta=args.days * 24 * 60 * 60
    )
    print(token)


if __name__ == "__main__":
    main()
