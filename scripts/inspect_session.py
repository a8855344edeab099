#!/usr/bin/env python
"""CLI to inspect and maintain a persisted grid navigation session.

Usage:
    python scripts/inspect_session.py --session-id 3f2c... --backend sqlite

This will:
- Rehydrate the session's store (dropping expired history)
- Optionally prune history with a custom age, clear it, or end the session
- Optionally purge rows of sessions abandoned long ago (sqlite)
- Print the persisted payload as JSON
"""
import argparse
import json
import sys
from datetime import timedelta
from pathlib import Path

# Add parent directory to path so 'gridnav' imports work
sys.path.insert(0, str(Path(__file__).parent.parent))

from gridnav.config import STORAGE_BACKENDS, Settings
from gridnav.persistence.serialization import dump_payload
from gridnav.persistence.storage import build_storage
from gridnav.store.store import GridNavigationStore
from gridnav.utils.logger import setup_logging


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Inspect a persisted grid navigation session"
    )
    parser.add_argument("--session-id", required=True, help="Session to open")
    parser.add_argument(
        "--backend", choices=STORAGE_BACKENDS, default=None, help="Storage backend"
    )
    parser.add_argument("--storage-dir", default=None, help="Directory for file storage")
    parser.add_argument("--database-url", default=None, help="Database URL for sqlite storage")
    parser.add_argument(
        "--prune", type=int, metavar="MS", default=None,
        help="Drop snapshots at least this many milliseconds old",
    )
    parser.add_argument(
        "--clear-history", action="store_true", help="Empty the navigation stack"
    )
    parser.add_argument(
        "--end-session", action="store_true",
        help="Delete everything stored for the session",
    )
    parser.add_argument(
        "--purge-older-than", type=float, metavar="HOURS", default=None,
        help="Delete rows of every session untouched for this many hours (sqlite)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level, e.g. DEBUG")
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings = Settings(session_id=args.session_id)
    if args.backend:
        settings.storage_backend = args.backend
    if args.storage_dir:
        settings.storage_dir = args.storage_dir
    if args.database_url:
        settings.database_url = args.database_url

    try:
        storage = build_storage(settings)
    except Exception as exc:
        print(f"Error: could not open storage: {exc}", file=sys.stderr)
        return 1

    if args.purge_older_than is not None:
        purge = getattr(storage, "purge_stale_sessions", None)
        if purge is None:
            print(f"Error: {settings.storage_backend} storage cannot purge sessions", file=sys.stderr)
            return 1
        removed = purge(timedelta(hours=args.purge_older_than))
        print(f"Purged {removed} stale row(s)")
        return 0

    if args.end_session:
        end_session = getattr(storage, "end_session", None)
        if end_session is None:
            print(f"Error: {settings.storage_backend} storage has no sessions", file=sys.stderr)
            return 1
        end_session()
        print(f"Ended session {settings.session_id}")
        return 0

    store = GridNavigationStore.create(
        storage=storage,
        storage_key=settings.storage_key,
        snapshot_max_age_ms=settings.snapshot_max_age_ms,
    )
    if args.prune is not None:
        store.prune_old_snapshots(args.prune)
    if args.clear_history:
        store.clear_navigation_stack()

    payload = dump_payload(store.active_grid_state, store.navigation_stack)
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
