"""Print a password hash for ADMIN_PASSWORD_HASH.

Usage:
  python scripts/hash_password.py --password '...'

Put the output in .env as ADMIN_PASSWORD_HASH=... and drop ADMIN_PASSWORD.
"""

import argparse
import getpass
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from research_portfolio.auth.security import hash_password


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--password", help="prompted for when omitted")
    args = ap.parse_args()

    password = args.password or getpass.getpass("Admin password: ")
    print(hash_password(password))


if __name__ == "__main__":
    main()
