"""Overwrite the persisted snapshot with the seed dataset (or another CSV file).

Usage: python scripts/reset_store.py [path/to/attendance.csv]
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.youth_attendance.youth_attendance.container import build_snapshot_repository
from src.youth_attendance.youth_attendance.store.service import AttendanceStore, csv_seed_loader


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    csv_path = Path(sys.argv[1]) if len(sys.argv) > 1 else REPO_ROOT / settings.SEED_CSV_PATH

    _, snapshots = build_snapshot_repository(
        backend=settings.SNAPSHOT_BACKEND,
        db_config=dict(settings.DB_CONFIG),
        snapshot_file=REPO_ROOT / settings.SNAPSHOT_FILE,
    )
    store = AttendanceStore(snapshots, csv_seed_loader(csv_path))
    groups = store.reset()

    members = sum(len(g.members) for g in groups)
    print(f"OK: Reset snapshot from {csv_path} ({len(groups)} groups, {members} members)")


if __name__ == "__main__":
    main()
