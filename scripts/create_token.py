"""
Print a bearer token for calling the API.

Usage:
    python scripts/create_token.py [admin-name] [--minutes N]
"""

import argparse
from datetime import timedelta

# Add project root to path
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings
from app.utils.security import create_access_token


def main():
    parser = argparse.ArgumentParser(description="Create an admin access token")
    parser.add_argument("name", nargs="?", default="admin", help="Administrator name (token subject)")
    parser.add_argument(
        "--minutes",
        type=int,
        default=settings.access_token_expire_minutes,
        help="Token lifetime in minutes",
    )
    args = parser.parse_args()

    token = create_access_token({"sub": args.name}, expires_delta=timedelta(minutes=args.minutes))
    print(token)


if __name__ == "__main__":
    main()
