"""In-memory roster of student results.

Records are kept in insertion order (until explicitly reordered) and every
mutation either fully succeeds or leaves the roster untouched.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from result_analyzer.config.settings import settings
from result_analyzer.domain.errors import (
    CapacityError,
    DuplicateRollError,
    InvalidRollError,
    StudentNotFoundError,
)
from result_analyzer.domain.logic.results import MAX_MARK, SUBJECTS
from result_analyzer.domain.models.student import StudentResult

logger = logging.getLogger(__name__)

KEEP = -1

# rolls are stored as int32 in the snapshot file
ROLL_MIN = -(2**31)
ROLL_MAX = 2**31 - 1


class ResultStore:
    def __init__(self, capacity: Optional[int] = None, max_name: Optional[int] = None) -> None:
        self.capacity = settings.max_students if capacity is None else capacity
        self.max_name = settings.max_name if max_name is None else max_name
        self._records: list[StudentResult] = []

    def count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def is_full(self) -> bool:
        return len(self._records) >= self.capacity

    def list(self) -> tuple[StudentResult, ...]:
        return tuple(self._records)

    def find(self, roll: int) -> int:
        for index, record in enumerate(self._records):
            if record.roll == roll:
                return index
        raise StudentNotFoundError(f"Student with roll {roll} not found.")

    def contains(self, roll: int) -> bool:
        return any(r.roll == roll for r in self._records)

    def get(self, roll: int) -> StudentResult:
        return self._records[self.find(roll)]

    def add(self, roll: int, name: str, marks: Iterable[int]) -> StudentResult:
        if not ROLL_MIN <= roll <= ROLL_MAX:
            raise InvalidRollError(f"Roll {roll} is out of range ({ROLL_MIN} to {ROLL_MAX}).")
        if self.contains(roll):
            raise DuplicateRollError(f"A student with roll {roll} already exists.")
        if self.is_full():
            raise CapacityError(f"Student list full (max {self.capacity}).")
        record = StudentResult.create(roll, name, marks, max_name=self.max_name)
        self._records.append(record)
        logger.info("Added roll %s (%.2f%%, grade %s)", record.roll, record.percentage, record.grade)
        return record

    def modify(self, roll: int, new_marks: Sequence[Optional[int]]) -> StudentResult:
        """
        Replace a student's marks. A value of None or anything outside
        0..MAX_MARK (KEEP by convention) keeps the current mark for that subject.
        """
        index = self.find(roll)
        if len(new_marks) != SUBJECTS:
            raise ValueError(f"Expected {SUBJECTS} marks, got {len(new_marks)}")
        current = self._records[index]
        merged = [
            old if new is None or not 0 <= new <= MAX_MARK else new
            for old, new in zip(current.marks, new_marks)
        ]
        updated = current.with_marks(merged)
        self._records[index] = updated
        logger.info("Modified roll %s (%.2f%%, grade %s)", roll, updated.percentage, updated.grade)
        return updated

    def delete(self, roll: int) -> StudentResult:
        index = self.find(roll)
        removed = self._records.pop(index)
        logger.info("Deleted roll %s", roll)
        return removed

    def reorder(self, records: Iterable[StudentResult]) -> None:
        ordered = list(records)
        if sorted(r.roll for r in ordered) != sorted(r.roll for r in self._records):
            raise ValueError("reorder() must receive exactly the stored records")
        self._records = ordered

    def replace_all(self, records: Iterable[StudentResult]) -> None:
        incoming = list(records)
        if len(incoming) > self.capacity:
            raise CapacityError(f"Student list full (max {self.capacity}).")
        rolls = [r.roll for r in incoming]
        if len(set(rolls)) != len(rolls):
            raise DuplicateRollError("Snapshot contains duplicate roll numbers.")
        self._records = incoming

    def clear(self) -> None:
        self._records = []
