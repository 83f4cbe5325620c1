#!/usr/bin/env python3
"""
Create a user (optionally an admin) directly in the database.

Usage:
  python scripts/create_user.py --name alice --email alice@example.com [--password secret] [--admin]
"""
from __future__ import annotations

import argparse
import getpass
import sys

from catapi.core.security import hash_password
from catapi.db.models import ROLE_ADMIN, ROLE_USER
from catapi.repositories.sql_repository import DuplicateEmailError, SQLRepository


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a cat API user")
    ap.add_argument("--name", required=True, help="display name (user_name)")
    ap.add_argument("--email", required=True, help="unique e-mail used to log in")
    ap.add_argument("--password", help="password (prompted when omitted)")
    ap.add_argument("--admin", action="store_true", help="grant the admin role")
    args = ap.parse_args()

    name = (args.name or "").strip()
    email = (args.email or "").strip()
    if not name or not email:
        raise SystemExit("Name and email are required")
    password = args.password or getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password must not be empty")

    repo = SQLRepository()
    try:
        user = repo.create_user(
            user_name=name,
            email=email,
            password_hash=hash_password(password),
            role=ROLE_ADMIN if args.admin else ROLE_USER,
        )
    except DuplicateEmailError:
        raise SystemExit(f"E-mail '{email}' is already registered")
    print("OK: user created")
    print(f"  id:    {user.id}")
    print(f"  email: {user.email}")
    print(f"  role:  {user.role}")


if __name__ == "__main__":
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
