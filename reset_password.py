#!/usr/bin/env python3
"""
Reset a user's password in the Cleaning Service SQLite database.

This script does not read or reveal any existing password.  It stores a
new PBKDF2 hash for the given username, in the same format the API
uses.

Usage:
    python reset_password.py --db ./cleaning_service.db --username admin --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sqlite3
import sys

from cleaning_service_api.app.core.db import get_database_path
from cleaning_service_api.app.core.security import hash_password


def main() -> None:
    ap = argparse.ArgumentParser(description="Reset a Cleaning Service user password (SQLite).")
    ap.add_argument("--db", default=get_database_path(), help="Path to the SQLite DB file")
    ap.add_argument("--username", required=True, help="User to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        sys.exit(1)

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    conn = sqlite3.connect(args.db)
    try:
        cur = conn.cursor()
        cur.execute(
            "UPDATE users SET password_hash = ? WHERE username = ?",
            (hash_password(new_password), args.username),
        )
        if cur.rowcount == 0:
            print(f"[!] No user found with username: {args.username}", file=sys.stderr)
            sys.exit(2)
        conn.commit()
        print(f"[+] Password updated for user: {args.username}")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
