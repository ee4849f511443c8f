from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Sequence

from result_analyzer.config.settings import settings
from result_analyzer.domain.errors import EmptyStoreError
from result_analyzer.domain.logic.results import GRADES, MAX_MARK, SUBJECTS
from result_analyzer.domain.models.student import StudentResult


@dataclass(frozen=True)
class ClassAnalysis:
    student_count: int
    subject_averages: tuple[float, ...]
    grade_distribution: Dict[str, int]
    class_average: float


def bar_length(value: float, denominator: float, width: int = settings.bar_width) -> int:
    if denominator <= 0:
        denominator = 1
    filled = math.floor(value / denominator * width + 0.5)
    return max(0, min(width, filled))


def analyze_class(records: Sequence[StudentResult]) -> ClassAnalysis:
    count = len(records)
    if count == 0:
        raise EmptyStoreError("No students for analysis.")

    subject_sums = [0.0] * SUBJECTS
    grand_total = 0.0
    distribution = {letter: 0 for letter in GRADES}
    for record in records:
        for j, mark in enumerate(record.marks):
            subject_sums[j] += mark
        grand_total += record.total
        bucket = record.grade if record.grade in distribution else "F"
        distribution[bucket] += 1

    return ClassAnalysis(
        student_count=count,
        subject_averages=tuple(s / count for s in subject_sums),
        grade_distribution=distribution,
        class_average=grand_total / count / SUBJECTS,
    )


def subject_bar_lengths(analysis: ClassAnalysis, width: int = settings.bar_width) -> list[int]:
    return [bar_length(avg, MAX_MARK, width) for avg in analysis.subject_averages]


def grade_bar_lengths(analysis: ClassAnalysis, width: int = settings.bar_width) -> Dict[str, int]:
    peak = max(1, max(analysis.grade_distribution.values()))
    return {letter: bar_length(n, peak, width) for letter, n in analysis.grade_distribution.items()}


def student_bar_lengths(record: StudentResult, width: int = settings.bar_width) -> list[int]:
    return [bar_length(mark, MAX_MARK, width) for mark in record.marks]
