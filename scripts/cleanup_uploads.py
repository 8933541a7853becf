"""Cron entry point for removing uploads left behind by failed requests."""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass

from src.animator.config import load_config
from src.animator.media.upload_store import UploadStore


@dataclass(slots=True)
class CleanupSummary:
    uploads_matched: int
    ttl_hours: int
    dry_run: bool

    def describe(self) -> str:
        verb = "would remove" if self.dry_run else "removed"
        return f"uploads cleanup: {verb} {self.uploads_matched} file(s) older than {self.ttl_hours}h"


def perform_cleanup(
    *,
    dry_run: bool,
    ttl_hours: int | None = None,
    reference_time: float | None = None,
) -> CleanupSummary:
    """Sweep the upload directory and return what was (or would be) removed."""
    config = load_config()
    store = UploadStore(config.upload_dir)
    hours = config.upload_ttl_hours if ttl_hours is None else ttl_hours
    now = time.time() if reference_time is None else reference_time

    if dry_run:
        matched = len(store.list_stale(hours * 3600, now=now))
    else:
        matched = store.purge_stale(hours * 3600, now=now)
    return CleanupSummary(uploads_matched=matched, ttl_hours=hours, dry_run=dry_run)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Remove stale temporary uploads.")
    parser.add_argument("--dry-run", action="store_true", help="List matches without deleting them.")
    parser.add_argument(
        "--ttl-hours",
        type=int,
        default=None,
        help="Override UPLOAD_TTL_HOURS for this run.",
    )
    args = parser.parse_args(argv or [])
    try:
        summary = perform_cleanup(dry_run=args.dry_run, ttl_hours=args.ttl_hours)
    except Exception as exc:
        print(f"uploads cleanup failed: {exc}", file=sys.stderr)
        return 2

    print(summary.describe())
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
