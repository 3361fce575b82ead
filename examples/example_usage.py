"""Example: drive the core without Flask.

Controllers are a thin layer; parsing, mutations and reports live below them.
"""

import importlib
from pathlib import Path

from config import get_settings_module

from src.youth_attendance.youth_attendance.container import build_container
from src.youth_attendance.youth_attendance.core.enums import AttendanceStatus
from src.youth_attendance.youth_attendance.sessions.dates import session_dates

REPO_ROOT = Path(__file__).resolve().parents[1]


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        seed_csv_path=REPO_ROOT / settings.SEED_CSV_PATH,
        backend="file",
        snapshot_file=REPO_ROOT / "instance" / "example_snapshot.json",
    )
    store = container.store

    store.add_session("2024-03-03")
    first = store.groups[0]
    store.bulk_mark(first.id, "2024-03-03", AttendanceStatus.PRESENT)

    print(session_dates(store.groups)[-3:])
    print(container.report_service.build_dashboard(store.groups))


if __name__ == "__main__":
    main()
