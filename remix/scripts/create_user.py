"""
Create a user without going through the API. Run from project root:
  python -m remix.scripts.create_user USERNAME EMAIL PASSWORD
Example:
  python -m remix.scripts.create_user chef123 chef@example.com your-secure-password
"""
import argparse
import logging
import sys

from remix.core.config import get_settings
from remix.core.database import SessionLocal
from remix.core.security import CredentialVerifier
from remix.errors import RemixError
from remix.repositories import UserRepository

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    parser = argparse.ArgumentParser(description="Create a Remix user.")
    parser.add_argument("username", help="Username (5-30 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8+ chars, at most 72 bytes)")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        users = UserRepository(db, CredentialVerifier(get_settings()))
        user = users.register_new_user(args.username.strip(), args.email.strip(), args.password)
    except RemixError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user['username']}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
