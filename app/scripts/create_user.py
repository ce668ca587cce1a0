"""
Create a user from the command line. Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [role] [--first-name ...]
Example:
  python -m app.scripts.create_user admin your-secure-password admin
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal
from app.models import Role
from app.schemas.user import UserCreate
from app.services.errors import ServiceError
from app.services.users import create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a field reports user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument(
        "role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role]
    )
    parser.add_argument("--first-name", default=None)
    parser.add_argument("--last-name", default=None)
    parser.add_argument("--position", default=None)
    parser.add_argument("--odoo-batch-id", default=None)
    args = parser.parse_args(argv)

    data = UserCreate(
        username=args.username,
        password=args.password,
        role=args.role,
        first_name=args.first_name,
        last_name=args.last_name,
        position=args.position,
        odoo_batch_id=args.odoo_batch_id,
    )
    db = SessionLocal()
    try:
        user = create_user(db, data)
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' with role '{user.role.value}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
