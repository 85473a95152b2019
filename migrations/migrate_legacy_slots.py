#!/usr/bin/env python3
"""Migration script to rewrite stored days in the current slot layout.

Days are upgraded transparently whenever they are loaded, but values that are
never opened again stay in their old layout. This script rewrites them all:

- 10-minute days (144 slots) are split into 288 5-minute slots
- retired category ids (e.g. "work_deep") are replaced by current ids
- orphaned sub-activity references and empty notes are dropped

It covers every slots_<date> key, the legacy "today" key and the template.
Values that cannot be decoded are reported and left untouched.

Usage:
    python migrations/migrate_legacy_slots.py [--db-path PATH] [--dry-run]
"""

import sys
from pathlib import Path

# Add src to path so we can import timeblocker modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from timeblocker.database.factories import create_sqlite_store
from timeblocker.domain.days import DayService


def migrate_database(database_path: str | None = None, dry_run: bool = False) -> dict[str, list[str]]:
    """Upgrade all stored days.

    Args:
        database_path: Path to database file. If None, uses default location.
        dry_run: Report changes without writing them

    Returns:
        Dict with "upgraded", "unchanged" and "failed" key lists
    """
    store = create_sqlite_store(database_path=database_path)
    store.connect()
    store.initialize_schema()

    try:
        print("Starting migration: upgrading stored days..." + (" (dry run)" if dry_run else ""))
        result = DayService(store).upgrade_stored_values(dry_run=dry_run)

        for key in result["upgraded"]:
            print(f"  {'Would upgrade' if dry_run else 'Upgraded'}: {key}")
        for key in result["failed"]:
            print(f"  Could not decode, left untouched: {key}")
        print(
            f"Migration completed: {len(result['upgraded'])} upgraded, "
            f"{len(result['unchanged'])} already current, {len(result['failed'])} failed"
        )
        return result
    finally:
        store.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Rewrite stored days in the current 5-minute slot layout"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides TIMEBLOCKER_DB_PATH environment variable)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Only report what would change")
    args = parser.parse_args()

    try:
        result = migrate_database(database_path=args.db_path, dry_run=args.dry_run)
        return 1 if result["failed"] else 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
