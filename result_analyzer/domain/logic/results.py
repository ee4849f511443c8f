from __future__ import annotations

from typing import Iterable

SUBJECTS = 5
MAX_MARK = 100

# (lower bound, letter), checked top-down
GRADE_BANDS: list[tuple[float, str]] = [
    (85.0, "A"),
    (70.0, "B"),
    (55.0, "C"),
    (40.0, "D"),
]
GRADES: tuple[str, ...] = ("A", "B", "C", "D", "F")


def clamp_mark(mark: int) -> int:
    return max(0, min(MAX_MARK, int(mark)))


def grade_from_percentage(percentage: float) -> str:
    for low, letter in GRADE_BANDS:
        if percentage >= low:
            return letter
    return "F"


def calculate_result(marks: Iterable[int]) -> tuple[tuple[int, ...], int, float, str]:
    """
    Returns (clamped_marks, total, percentage, grade).

    percentage is the mean mark per subject (total / SUBJECTS), not total
    over the maximum possible total.
    """
    clamped = tuple(clamp_mark(m) for m in marks)
    if len(clamped) != SUBJECTS:
        raise ValueError(f"Expected {SUBJECTS} marks, got {len(clamped)}")
    total = sum(clamped)
    percentage = total / SUBJECTS
    return clamped, total, percentage, grade_from_percentage(percentage)
