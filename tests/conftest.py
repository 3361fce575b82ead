from __future__ import annotations

from typing import Optional

import pytest

from src.youth_attendance.youth_attendance.ingestion.parser import parse_groups

SAMPLE_CSV = """No,Group_Id,Leader,Co_Leader,Month_Range,Member Name,PHONE NUMBER,2024-01-07,2024-01-14,2024-01-21
1,G1,"Alice","Ben","Jan-Mar","Bob","0100",P,A,A
2,G1,"Alice","Ben","Jan-Mar","Cara","0101",P,P,
3,G2,"Dan","","Apr-Jun","Eve","0200",A,A,P
"""


class InMemorySnapshots:
    def __init__(self, initial: Optional[dict[str, str]] = None, *, fail_on_save: bool = False):
        self.data: dict[str, str] = dict(initial or {})
        self.saves = 0
        self._fail_on_save = fail_on_save

    def load(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        if self._fail_on_save:
            raise OSError("disk full")
        self.saves += 1
        self.data[key] = value

    def delete(self, key: str) -> bool:
        return self.data.pop(key, None) is not None


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def groups():
    return parse_groups(SAMPLE_CSV)


@pytest.fixture
def snapshots() -> InMemorySnapshots:
    return InMemorySnapshots()


@pytest.fixture
def make_snapshots():
    return InMemorySnapshots
