"""
Create an account with a chosen role (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user owner@shop.example your-secure-password admin
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.services.accounts import AccountError, register

ROLES = ("user", "admin")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a repair shop account.")
    parser.add_argument("email", help="Account email")
    parser.add_argument("password", help="Account password")
    parser.add_argument("role", nargs="?", default="user", choices=ROLES)
    args = parser.parse_args(argv)

    email = args.email.strip()
    db = SessionLocal()
    try:
        register(db, email, args.password, role=args.role)
    except AccountError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created account '{email}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
