from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from result_analyzer.domain.logic.results import calculate_result

# fixed-size name buffer in the snapshot file, NUL terminator included
NAME_BYTES = 60


def fit_name(name: str, max_name: int = NAME_BYTES - 1) -> str:
    """Cut to max_name characters and to NAME_BYTES - 1 UTF-8 bytes, on a character boundary."""
    raw = name[:max_name].encode("utf-8")[: NAME_BYTES - 1]
    return raw.decode("utf-8", errors="ignore")


@dataclass(frozen=True)
class StudentResult:
    roll: int
    name: str
    marks: tuple[int, ...]
    total: int
    percentage: float
    grade: str

    @classmethod
    def create(cls, roll: int, name: str, marks: Iterable[int], max_name: int = NAME_BYTES - 1) -> "StudentResult":
        clamped, total, percentage, grade = calculate_result(marks)
        return cls(
            roll=int(roll),
            name=fit_name(name, max_name),
            marks=clamped,
            total=total,
            percentage=percentage,
            grade=grade,
        )

    def with_marks(self, marks: Iterable[int]) -> "StudentResult":
        return StudentResult.create(self.roll, self.name, marks, max_name=len(self.name))
