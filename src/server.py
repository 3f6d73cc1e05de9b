"""Storefront process bootstrap and Protean Engine runner.

Checks the environment, prepares the database schema, then starts the Engine
that processes events asynchronously:
- OutboxProcessor: polls the outbox table, publishes events to the broker
- StreamSubscriptions: read the broker, invoke event handlers (including the
  reconciler that links new auth identities to customers)

Usage:
    python src/server.py                  # Check env, set up schema, run Engine
    python src/server.py --skip-setup-db  # Run Engine against an existing schema
"""

import argparse
import asyncio
import sys

import structlog
from protean.server.engine import Engine

logger = structlog.get_logger(__name__)


def check_environment():
    """Refuse to start in production without the required variables."""
    from identity.utils import settings

    if not settings.is_production():
        return

    missing = settings.missing_required_variables()
    if missing:
        raise SystemExit(f"Missing required environment variables: {', '.join(missing)}")


def bootstrap(setup_schema=True):
    """Initialize the identity domain and, optionally, its database schema."""
    from identity.domain import identity
    from identity.utils.db import setup_db

    identity.init()
    if setup_schema:
        logger.info("Preparing database schema", domain=identity.name)
        setup_db(identity)
    return identity


async def run(domain):
    await Engine(domain).run()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront Engine runner")
    parser.add_argument(
        "--skip-setup-db",
        action="store_true",
        help="Do not create missing tables before starting",
    )
    args = parser.parse_args(argv)

    check_environment()
    domain = bootstrap(setup_schema=not args.skip_setup_db)

    logger.info("Starting Engine", domain=domain.name, python=sys.version.split()[0])
    asyncio.run(run(domain))


if __name__ == "__main__":
    main()
