"""Seed the employee roster.

Usage:
    python scripts/seed_roster.py [--roster-file PATH] [--create-schema]

Without --roster-file the default company roster is inserted. A roster file
is a JSON list of objects with name, job_title (or jobTitle), team and an
optional role tag.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from revenue_split.config import get_settings
from revenue_split.database import create_schema, get_engine, make_session_factory
from revenue_split.models.base import new_id
from revenue_split.services.roster_service import EmployeeRepository
from revenue_split.splitting.types import EmployeeRecord, Team

DEFAULT_ROSTER: list[dict[str, str]] = [
    {"name": "Meech", "job_title": "CEO", "team": "C-suite"},
    {"name": "Nya", "job_title": "COO", "team": "C-suite"},
    {"name": "Tosh", "job_title": "Content Manager", "team": "Content Team"},
    {"name": "Chris", "job_title": "Streamer", "team": "Streamer Team"},
    {
        "name": "Jesy",
        "job_title": "Streaming Growth & Partnerships Lead",
        "team": "Streamer Team",
    },
    {"name": "Bri", "job_title": "Sales Lead", "team": "Sales Team"},
    {"name": "Caylin", "job_title": "Sales Coordinator", "team": "Sales Team"},
    {"name": "sales manager 3", "job_title": "Sales Manager", "team": "Sales Team"},
    {"name": "Sales manager 4", "job_title": "Sales Manager", "team": "Sales Team"},
]


def load_roster(roster_file: Path | None) -> list[EmployeeRecord]:
    """Read roster entries, assigning fresh ids where none are given."""
    entries = DEFAULT_ROSTER
    if roster_file is not None:
        entries = json.loads(roster_file.read_text(encoding="utf-8"))

    records = []
    for entry in entries:
        record = EmployeeRecord.from_mapping({"id": new_id(), **entry})
        if Team.parse(record.team) is None:
            raise ValueError(f"Unknown team '{record.team}' for {record.name}")
        records.append(record)
    return records


async def seed(database_url: str, records: list[EmployeeRecord], schema: bool) -> int:
    engine = get_engine(database_url)
    try:
        if schema:
            await create_schema(engine)
        repository = EmployeeRepository(make_session_factory(engine))
        return await repository.add_employees(records)
    finally:
        await engine.dispose()


def main() -> None:
    """Main entry point."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Seed the employee roster")
    parser.add_argument(
        "--roster-file",
        type=Path,
        default=None,
        help="JSON roster file (default: built-in roster)",
    )
    parser.add_argument(
        "--database-url",
        type=str,
        default=settings.database_url,
        help="Database URL (default: from settings)",
    )
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="Create missing tables before seeding",
    )
    args = parser.parse_args()

    if args.roster_file is not None and not args.roster_file.exists():
        print(f"Error: Roster file not found: {args.roster_file}")
        sys.exit(1)

    try:
        records = load_roster(args.roster_file)
    except (ValueError, KeyError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    count = asyncio.run(seed(args.database_url, records, args.create_schema))
    print(f"Seeded {count} employees")


if __name__ == "__main__":
    main()
