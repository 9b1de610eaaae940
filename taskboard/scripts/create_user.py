"""
Create a user from the command line (e.g. a second admin). Run from project root:
  python -m taskboard.scripts.create_user EMAIL PASSWORD FIRST_NAME LAST_NAME [--role CODE ...]
Example:
  python -m taskboard.scripts.create_user ops@example.com s3cret Ops Team --role user --role admin
"""
import argparse
import sys

from taskboard.core.database import SessionLocal, init_db
from taskboard.core.exceptions import TaskboardError
from taskboard.core.permissions import ROLE_USER
from taskboard.core.security import (
    ADDRESS_MAX_LEN,
    ADDRESS_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from taskboard.services.users import register_user


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a Taskboard user.")
    parser.add_argument("email", help=f"Email address ({ADDRESS_MIN_LEN}-{ADDRESS_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("first_name")
    parser.add_argument("last_name")
    parser.add_argument(
        "--role",
        dest="roles",
        action="append",
        help=f"Role code to grant; repeatable (default: {ROLE_USER})",
    )
    args = parser.parse_args()

    email = args.email.strip()
    if not (ADDRESS_MIN_LEN <= len(email) <= ADDRESS_MAX_LEN):
        print("Invalid email address length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    init_db()
    db = SessionLocal()
    try:
        user = register_user(
            db,
            first_name=args.first_name,
            last_name=args.last_name,
            email_address=email,
            password=args.password,
            role_codes=args.roles or [ROLE_USER],
        )
        print(f"Created user '{email}' (id {user.id}) with roles {[r.code for r in user.roles]}.")
        return 0
    except TaskboardError as e:
        print(f"Could not create user: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
