"""Storefront database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    """Create the identity domain's database schema."""
    from identity.domain import identity
    from identity.utils.db import setup_db

    print("Initializing identity domain...")
    identity.init()
    print("Creating identity database schema...")
    setup_db(identity)
    print("Done.")


def drop_database():
    """Drop the identity domain's database schema."""
    from identity.domain import identity
    from identity.utils.db import drop_db

    print("Initializing identity domain...")
    identity.init()
    print("Dropping identity database schema...")
    drop_db(identity)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
