#!/usr/bin/env python3
"""CLI for Nibash API management tasks.

Usage:
    python -m cli <command>

Commands:
    create-tables   Create any missing tables from models.py
    check-db        Verify the database is reachable
"""

import argparse
import asyncio
import sys

from core.logger import configure_logging, get_logger

logger = get_logger(__name__)


async def create_tables() -> None:
    """Create all database tables defined in models.

    create_all() only creates missing tables; it won't modify existing ones.
    """
    import models  # noqa: F401  (registers tables on Base.metadata)
    from core.database import Base, create_engine

    engine = create_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def check_db() -> None:
    from core.database import Database, create_engine, init_db

    database = Database(create_engine())
    try:
        await init_db(database)
    finally:
        await database.dispose()


def cmd_create_tables() -> int:
    logger.info("cli.create_tables.started")
    asyncio.run(create_tables())
    logger.info("cli.create_tables.complete")
    return 0


def cmd_check_db() -> int:
    try:
        asyncio.run(check_db())
    except Exception:
        logger.exception("cli.check_db.failed")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    configure_logging()

    parser = argparse.ArgumentParser(
        description="Nibash API CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create-tables", help="Create missing database tables")
    subparsers.add_parser("check-db", help="Verify database connectivity")

    args = parser.parse_args(argv)

    if args.command == "create-tables":
        return cmd_create_tables()
    elif args.command == "check-db":
        return cmd_check_db()
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
