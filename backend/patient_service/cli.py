"""Patient Service CLI - Command Line Interface for administrative tasks.

Usage:
    python -m patient_service.cli <command> [options]

Commands:
    init-db         Create the database tables
    check-db        Check database connectivity
    seed-demo       Insert random demo patients (development only)
    version         Show version information

Examples:
    python -m patient_service.cli init-db
    python -m patient_service.cli check-db
    python -m patient_service.cli seed-demo --count 20

"""

import argparse
import asyncio
import sys
from typing import NoReturn

from patient_service.core.config import settings


def print_banner() -> None:
    """Print Patient Service CLI banner."""
    print("\n" + "=" * 50)
    print(" Patient Service CLI")
    print(" Patient Record Management")
    print("=" * 50 + "\n")


def print_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"ERROR: {message}", file=sys.stderr)


def print_success(message: str) -> None:
    """Print success message."""
    print(f"SUCCESS: {message}")


def print_info(message: str) -> None:
    """Print info message."""
    print(f"INFO: {message}")


async def check_database() -> bool:
    """Check database connectivity."""
    from sqlalchemy import text

    from patient_service.models.base import async_session_maker

    try:
        print_info("Checking database connectivity...")
        async with async_session_maker() as session:
            await session.execute(text("SELECT 1"))
            print_success("Database connection successful")
            return True
    except Exception as e:
        print_error(f"Database connection failed: {e}")
        return False


async def init_database() -> bool:
    """Create the database tables."""
    from patient_service.models.base import create_tables

    if not await check_database():
        return False

    try:
        await create_tables()
    except Exception as e:
        print_error(f"Failed to initialize database: {e}")
        return False

    print_success("Database tables created (existing tables left untouched)")
    return True


async def seed_demo(count: int) -> bool:
    """Insert demo patients into an empty database."""
    from patient_service.models.base import async_session_maker, create_tables
    from patient_service.services.demo_data import seed_demo_patients

    try:
        await create_tables()
        async with async_session_maker() as session:
            inserted = await seed_demo_patients(session, count=count)
    except Exception as e:
        print_error(f"Failed to seed demo data: {e}")
        return False

    if inserted:
        print_success(f"{inserted} demo patient(s) created")
    else:
        print_info("Patients already exist in database")
        print_info("Skipping demo data creation")
    return True


def cmd_version(_args: argparse.Namespace) -> int:
    """Show version information."""
    print_banner()
    print(f"Version:     {settings.app_version}")
    print(f"Environment: {settings.environment}")
    print(f"Debug:       {settings.debug}")
    print(f"Python:      {sys.version.split()[0]}")
    return 0


def cmd_check_db(_args: argparse.Namespace) -> int:
    """Check database connectivity command."""
    print_banner()
    result = asyncio.run(check_database())
    return 0 if result else 1


def cmd_init_db(_args: argparse.Namespace) -> int:
    """Initialize database command."""
    print_banner()
    result = asyncio.run(init_database())
    return 0 if result else 1


def cmd_seed_demo(args: argparse.Namespace) -> int:
    """Seed demo patients command."""
    print_banner()

    if settings.environment == "production":
        print_error("Demo data cannot be seeded in production")
        return 1

    if args.count < 1:
        print_error("Count must be at least 1")
        return 1

    result = asyncio.run(seed_demo(args.count))
    return 0 if result else 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="patient-service-cli",
        description="Patient Service CLI - Administrative command line interface",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"Patient Service {settings.app_version}",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    # version command
    version_parser = subparsers.add_parser(
        "version",
        help="Show version information",
    )
    version_parser.set_defaults(func=cmd_version)

    # check-db command
    check_db_parser = subparsers.add_parser(
        "check-db",
        help="Check database connectivity",
    )
    check_db_parser.set_defaults(func=cmd_check_db)

    # init-db command
    init_db_parser = subparsers.add_parser(
        "init-db",
        help="Create the database tables",
    )
    init_db_parser.set_defaults(func=cmd_init_db)

    # seed-demo command
    seed_demo_parser = subparsers.add_parser(
        "seed-demo",
        help="Insert random demo patients (development only)",
    )
    seed_demo_parser.add_argument(
        "--count",
        "-c",
        type=int,
        default=settings.demo_patient_count,
        help="Number of patients to create (default: %(default)s)",
    )
    seed_demo_parser.set_defaults(func=cmd_seed_demo)

    return parser


def main() -> NoReturn:
    """Main CLI entry point."""
    parser = build_parser()

    # Parse arguments
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(0)

    # Execute command
    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
