#!/usr/bin/env python3
"""
Create an API user from the command line.

    python create_user.py --name "Jane Admin" --email jane@example.com --password 's3cretpass'
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.services.user_service import register_user


def create_user(name: str, email: str, password: str, session_factory=SessionLocal) -> int:
    db = session_factory()
    try:
        result = register_user(db, {"name": name, "email": email, "password": password})
        if not result.ok:
            for field, messages in result.errors.items():
                for message in messages:
                    print(f"✗ {field}: {message}")
            return 1
        print(f"✓ User '{result.value.email}' created with id {result.value.id}")
        return 0
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create an API user")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args(argv)
    return create_user(args.name, args.email, args.password)


if __name__ == "__main__":
    sys.exit(main())
