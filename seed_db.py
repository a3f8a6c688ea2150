# seed_db.py
"""
Database Seeding Script
=======================

Command-line utilities to prepare a freshly migrated database.

It supports two modes:
- `super-admin`: Create the single super admin account, which also writes
  the default (all enabled) global feature policy.
- `demo`: Insert an admin, a supervised staff member and sample candidates
  with dependent tracking rows, for trying out the recycle bin.

Usage:
    python seed_db.py super-admin --username owner
    python seed_db.py demo --candidates 5

Requirements:
    - A valid database configuration (DB_PATH and pool settings).
    - `alembic upgrade head` has been run.
"""

import sys
import argparse
import asyncio
from typing import Optional

from dotenv import load_dotenv

from deskkit import ConfigurationError, DatabaseConfig, get_config, initialize_config
from recruitdesk.db import DbManager
from recruitdesk.db.models import (
    Candidate,
    Document,
    Employer,
    JobOrder,
    Payment,
    Placement,
    VisaTracking,
)
from recruitdesk.db.schemas import Role, UserContext
from recruitdesk.services.v1 import build_services


def get_db_config() -> DatabaseConfig:
    """
    Load and validate database configuration.

    Raises:
        SystemExit: If no database is configured.
    """
    db_cfg = get_config().database
    if db_cfg is None:
        print("FATAL: DB_PATH is not set")
        sys.exit(1)
    return db_cfg


async def run_super_admin(_db_config: DatabaseConfig, username: str) -> int:
    """
    Create the super admin account.

    Example:
        >>> asyncio.run(run_super_admin(db_cfg, "owner"))
    """
    db_manager = DbManager.from_config(_db_config)
    await db_manager.verify_connection()
    try:
        services = build_services(db_manager)
        result = await services.users.create_user(username, Role.SUPER_ADMIN.value)
    finally:
        await db_manager.dispose()

    if not result.success:
        print(f"Failed: {result.error} {result.errors or ''}")
        return 1
    print(f"Created super admin {username} ({result.data['id']})")
    return 0


async def run_demo(_db_config: DatabaseConfig, candidates: int) -> int:
    """
    Seed an admin, a staff member and `candidates` candidates with children.

    Example:
        >>> asyncio.run(run_demo(db_cfg, candidates=5))
    """
    db_manager = DbManager.from_config(_db_config)
    await db_manager.verify_connection()
    try:
        services = build_services(db_manager)
        owner = await _find_super_admin(services)
        if owner is None:
            print("Run 'python seed_db.py super-admin' first")
            return 1

        admin = await services.users.create_user("demo_admin", "admin", actor=owner)
        if not admin.success:
            print(f"Failed: {admin.error} {admin.errors or ''}")
            return 1
        admin_ctx = UserContext(**admin.data)
        await services.users.create_user("demo_staff", "staff", actor=admin_ctx)

        async with db_manager.session() as session:
            employer = Employer(company_name="Gulf Builders LLC", country="UAE")
            job = JobOrder(employer=employer, position_title="Electrician")
            session.add_all([employer, job])

            for i in range(candidates):
                candidate = Candidate(
                    name=f"Candidate_{i}",
                    position="Electrician",
                    passport_no=f"P{i:07d}",
                )
                session.add_all(
                    [
                        candidate,
                        Document(
                            candidate=candidate,
                            file_name=f"passport_{i}.pdf",
                            category="Passport",
                        ),
                        Payment(
                            candidate=candidate,
                            description="Processing fee",
                            total_amount=1500.0,
                        ),
                        VisaTracking(candidate=candidate, country="UAE"),
                        Placement(candidate=candidate, job_order=job),
                    ]
                )
    finally:
        await db_manager.dispose()

    print(f"Seeded demo_admin, demo_staff and {candidates} candidates")
    return 0


async def _find_super_admin(services) -> Optional[UserContext]:
    row = await services.storage.query_one(
        "SELECT id FROM users WHERE role = 'super_admin' LIMIT 1"
    )
    return await services.users.get_user(row["id"]) if row else None


def main() -> int:
    """
    CLI entry point for database seeding.

    Example:
        python seed_db.py super-admin --username owner
        python seed_db.py demo --candidates 5
    """
    parser = argparse.ArgumentParser(description="Seed database manager")
    subparsers = parser.add_subparsers(dest="mode", required=True)

    admin_parser = subparsers.add_parser("super-admin", help="Create the super admin")
    admin_parser.add_argument(
        "--username",
        type=str,
        default=None,
        help="Defaults to SUPER_ADMIN_USERNAME",
    )

    demo_parser = subparsers.add_parser("demo", help="Seed demo users and records")
    demo_parser.add_argument(
        "--candidates",
        type=int,
        default=5,
        help="Number of candidates to insert",
    )

    args = parser.parse_args()
    _db_config = get_db_config()

    if args.mode == "super-admin":
        username = args.username or get_config().super_admin_username
        if not username:
            print("Required: --username or SUPER_ADMIN_USERNAME")
            return 1
        return asyncio.run(run_super_admin(_db_config, username))

    return asyncio.run(run_demo(_db_config, args.candidates))


if __name__ == "__main__":
    try:
        load_dotenv()
        initialize_config()
    except ConfigurationError as e:
        print(f"FATAL: Configuration error:\n{e}")
        sys.exit(1)
    sys.exit(main())
