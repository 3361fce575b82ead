from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from ..common.validators import optional_text, require_date_key, require_non_empty
from ..core.constants import STORAGE_KEY
from ..core.enums import AttendanceStatus
from ..core.exceptions import SnapshotError
from ..groups import mutations
from ..groups.model import Group, Groups
from ..groups.queries import find_group
from ..ingestion.parser import parse_groups
from . import snapshot
from .repository import SnapshotRepository

logger = logging.getLogger(__name__)

SeedLoader = Callable[[], Groups]


def csv_seed_loader(path: str | Path) -> SeedLoader:
    """Seed loader reading the bundled tabular dataset."""

    def load() -> Groups:
        return parse_groups(Path(path).read_text(encoding="utf-8"))

    return load


class AttendanceStore:
    """State container: one current snapshot, many derived views.

    Every mutation builds a new snapshot with the pure functions in
    ``groups.mutations`` and swaps it in as a whole, so readers never see a
    half-applied change. The snapshot is written to storage after each change
    and read once by ``load()``.
    """

    def __init__(
        self,
        snapshots: SnapshotRepository,
        seed_loader: SeedLoader,
        *,
        storage_key: str = STORAGE_KEY,
    ):
        self._snapshots = snapshots
        self._seed_loader = seed_loader
        self._key = storage_key
        self._groups: Groups = ()
        self._selected_group_id: Optional[str] = None

    # ---- state ----

    @property
    def groups(self) -> Groups:
        return self._groups

    @property
    def selected_group_id(self) -> Optional[str]:
        return self._selected_group_id

    @property
    def selected_group(self) -> Optional[Group]:
        return find_group(self._groups, self._selected_group_id)

    def select_group(self, group_id: Optional[str]) -> Optional[Group]:
        group = find_group(self._groups, group_id)
        self._selected_group_id = group.id if group else None
        return group

    def load(self) -> Groups:
        """Read the persisted snapshot; fall back to the seed if missing or corrupt."""
        try:
            raw = self._snapshots.load(self._key)
            if raw:
                self._groups = snapshot.loads(raw)
                return self._groups
            logger.info("No persisted snapshot under %r, loading seed data", self._key)
        except SnapshotError as e:
            logger.warning("Persisted snapshot is corrupt (%s), loading seed data", e)
        except Exception:
            logger.warning("Could not read persisted snapshot, loading seed data", exc_info=True)

        self._groups = self._seed_loader()
        return self._groups

    def reset(self) -> Groups:
        """Restore the bundled seed dataset and persist it."""
        self._selected_group_id = None
        self._commit(self._seed_loader())
        return self._groups

    def _commit(self, new_groups: Groups) -> Groups:
        if new_groups is self._groups:
            return new_groups
        self._groups = new_groups
        if self._selected_group_id and find_group(new_groups, self._selected_group_id) is None:
            self._selected_group_id = None
        self._persist()
        return new_groups

    def _persist(self) -> None:
        try:
            self._snapshots.save(self._key, snapshot.dumps(self._groups))
        except Exception:
            # Persistence is best effort; the in-memory snapshot stays authoritative.
            logger.exception("Failed to persist snapshot under %r", self._key)

    # ---- groups ----

    def add_group(self, *, leader_name: str, co_leader_name: str = "", month_range: str = "") -> Group:
        groups = mutations.add_group(
            self._groups,
            leader_name=require_non_empty(leader_name, "leader_name"),
            co_leader_name=optional_text(co_leader_name, "co_leader_name"),
            month_range=optional_text(month_range, "month_range"),
        )
        self._commit(groups)
        return groups[0]

    def update_group(self, group_id: str, *, leader_name: str, co_leader_name: str = "", month_range: str = "") -> Groups:
        return self._commit(
            mutations.update_group(
                self._groups,
                group_id,
                leader_name=require_non_empty(leader_name, "leader_name"),
                co_leader_name=optional_text(co_leader_name, "co_leader_name"),
                month_range=optional_text(month_range, "month_range"),
            )
        )

    def delete_group(self, group_id: str) -> Groups:
        return self._commit(mutations.delete_group(self._groups, group_id))

    # ---- members ----

    def add_member(self, group_id: str, *, name: str, phone: str = "") -> Groups:
        return self._commit(
            mutations.add_member(
                self._groups,
                group_id,
                name=require_non_empty(name, "name"),
                phone=optional_text(phone, "phone"),
            )
        )

    def update_member(self, group_id: str, member_id: str, *, name: str, phone: str = "") -> Groups:
        return self._commit(
            mutations.update_member(
                self._groups,
                group_id,
                member_id,
                name=require_non_empty(name, "name"),
                phone=optional_text(phone, "phone"),
            )
        )

    def delete_member(self, group_id: str, member_id: str) -> Groups:
        return self._commit(mutations.delete_member(self._groups, group_id, member_id))

    # ---- attendance ----

    def add_session(self, date_key: str) -> Groups:
        return self._commit(mutations.add_session(self._groups, require_date_key(date_key)))

    def mark_attendance(self, group_id: str, member_id: str, date_key: str, status: AttendanceStatus) -> Groups:
        return self._commit(
            mutations.mark_attendance(self._groups, group_id, member_id, require_date_key(date_key), status)
        )

    def toggle_attendance(self, group_id: str, member_id: str, date_key: str) -> Groups:
        return self._commit(
            mutations.toggle_attendance(self._groups, group_id, member_id, require_date_key(date_key))
        )

    def bulk_mark(self, group_id: str, date_key: str, status: AttendanceStatus) -> Groups:
        return self._commit(mutations.bulk_mark(self._groups, group_id, require_date_key(date_key), status))
