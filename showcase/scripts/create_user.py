"""
Create an account from the command line (e.g. the first admin). Run from project root:
  python -m showcase.scripts.create_user EMAIL NAME PASSWORD [role]
Example:
  python -m showcase.scripts.create_user admin@example.com "Site Admin" your-secure-password admin
"""
import argparse
import sys

from email_validator import EmailNotValidError, validate_email

from showcase.core.constants import UserRole
from showcase.core.database import SessionLocal
from showcase.core.log_config import configure_logging
from showcase.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    hash_password,
)
from showcase.services.users import create_or_update_user, get_user_by_email, update_user_role


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Showcase account.")
    parser.add_argument("email", help="Account email")
    parser.add_argument("name", help=f"Display name ({NAME_MIN_LEN}-{NAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.USER.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)
    configure_logging()

    try:
        email = validate_email(args.email, check_deliverability=False).normalized
    except EmailNotValidError as e:
        print(f"Invalid email: {e}", file=sys.stderr)
        return 1
    name = args.name.strip()
    if not NAME_MIN_LEN <= len(name) <= NAME_MAX_LEN:
        print(f"Name must be {NAME_MIN_LEN}-{NAME_MAX_LEN} characters.", file=sys.stderr)
        return 1
    if not PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN:
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        if get_user_by_email(db, email) is not None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        user, _ = create_or_update_user(
            db,
            name=name,
            email=email,
            email_verified=True,
            password_hash=hash_password(args.password),
        )
        if args.role != UserRole.USER:
            update_user_role(db, user.id, args.role)
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
