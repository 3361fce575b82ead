from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .database.connection import DatabaseConnection, DBConfig
from .reports.service import ReportService
from .store.file_snapshot_repository import JsonFileSnapshotRepository
from .store.mysql_snapshot_repository import MySQLSnapshotRepository
from .store.repository import SnapshotRepository
from .store.service import AttendanceStore, csv_seed_loader


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    snapshots_repo: SnapshotRepository

    store: AttendanceStore
    report_service: ReportService


def build_snapshot_repository(
    *,
    backend: str,
    db_config: Optional[dict] = None,
    snapshot_file: str | Path = "instance/snapshot.json",
) -> tuple[Optional[DatabaseConnection], SnapshotRepository]:
    if backend == "mysql":
        if not db_config:
            raise ValueError("SNAPSHOT_BACKEND=mysql needs DB_CONFIG")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        return conn, MySQLSnapshotRepository(conn)
    if backend == "file":
        return None, JsonFileSnapshotRepository(snapshot_file)
    raise ValueError(f"Unknown SNAPSHOT_BACKEND: {backend!r}")


def build_container(
    *,
    seed_csv_path: str | Path,
    backend: str = "file",
    db_config: Optional[dict] = None,
    snapshot_file: str | Path = "instance/snapshot.json",
    leaderboard_limit: int = 5,
    at_risk_limit: int = 5,
    snapshots_repo: Optional[SnapshotRepository] = None,
) -> Container:
    conn = None
    if snapshots_repo is None:
        conn, snapshots_repo = build_snapshot_repository(
            backend=backend,
            db_config=db_config,
            snapshot_file=snapshot_file,
        )

    store = AttendanceStore(snapshots_repo, csv_seed_loader(seed_csv_path))
    store.load()

    report_service = ReportService(leaderboard_limit=leaderboard_limit, at_risk_limit=at_risk_limit)

    return Container(
        conn=conn,
        snapshots_repo=snapshots_repo,
        store=store,
        report_service=report_service,
    )
