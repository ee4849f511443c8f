from __future__ import annotations

from typing import Callable

from result_analyzer.config.settings import settings
from result_analyzer.domain.errors import PersistenceError, ResultAnalyzerError
from result_analyzer.domain.logic.analysis import (
    analyze_class,
    grade_bar_lengths,
    student_bar_lengths,
    subject_bar_lengths,
)
from result_analyzer.domain.logic.results import SUBJECTS
from result_analyzer.domain.models.student import StudentResult
from result_analyzer.services.demo import load_demo
from result_analyzer.services.ranking import sort_by_percentage_desc
from result_analyzer.services.storage import SnapshotFile
from result_analyzer.services.store import KEEP, ResultStore

MENU = """====== Student Result Analyzer ======
1. Add Student
2. Display All Students
3. Modify Marks
4. Delete Student
5. Sort by Percentage (High->Low)
6. Show Student Graph (per-subject)
7. Class Analysis (averages + grade distribution)
8. Save to file
9. Load from file
10. Load Demo Data (quick)
11. Search Student
0. Exit"""


def render_bar(filled: int, width: int, char: str = "|") -> str:
    return char * filled + " " * (width - filled)


def format_student(s: StudentResult) -> str:
    lines = [f"Roll: {s.roll}", f"Name: {s.name}"]
    lines += [f" Subject {i} : {m:3d}" for i, m in enumerate(s.marks, start=1)]
    lines.append(f" Total : {s.total}\n Percentage : {s.percentage:.2f}\n Grade : {s.grade}")
    return "\n".join(lines)


def format_table(records) -> str:
    lines = [f"{'Roll':<6} {'Name':<20} {'Percent':<8} {'Grade':<8}"]
    lines += [f"{r.roll:<6d} {r.name:<20} {r.percentage:<8.2f} {r.grade:<8}" for r in records]
    return "\n".join(lines)


class ConsoleMenu:
    def __init__(
        self,
        store: ResultStore,
        snapshot: SnapshotFile,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        bar_width: int | None = None,
    ) -> None:
        self.store = store
        self.snapshot = snapshot
        self.input = input_fn
        self.out = output
        self.bar_width = settings.bar_width if bar_width is None else bar_width
        self.actions: dict[str, Callable[[], None]] = {
            "1": self.add_student,
            "2": self.display_all,
            "3": self.modify_marks,
            "4": self.delete_student,
            "5": self.sort_students,
            "6": self.graph_student,
            "7": self.class_analysis,
            "8": self.save,
            "9": self.load,
            "10": self.load_demo,
            "11": self.search_student,
        }

    def read_int(self, prompt: str) -> int:
        while True:
            raw = self.input(prompt).strip()
            try:
                return int(raw)
            except ValueError:
                self.out("  Invalid number, try again.")

    def run(self) -> None:
        self.load()
        while True:
            self.out(MENU)
            choice = self.input("Select option: ").strip()
            if choice == "0":
                self.exit()
                return
            action = self.actions.get(choice)
            if action is None:
                self.out("Invalid choice. Try again.")
                continue
            try:
                action()
            except ResultAnalyzerError as exc:
                self.out(str(exc))

    def add_student(self) -> None:
        self.out("\n--- Add New Student ---")
        roll = self.read_int("Enter roll number: ")
        if self.store.contains(roll):
            self.out(f"A student with roll {roll} already exists.")
            return
        name = self.input("Enter name: ").strip()
        marks = [self.read_int(f"Enter marks for Subject {i} (0-100): ") for i in range(1, SUBJECTS + 1)]
        s = self.store.add(roll, name, marks)
        self.out(f"Student added. Percentage: {s.percentage:.2f} Grade: {s.grade}\n")

    def display_all(self) -> None:
        if not self.store.count():
            self.out("No students to display.")
            return
        self.out("\n--- All Students ---")
        self.out(format_table(self.store.list()) + "\n")

    def search_student(self) -> None:
        roll = self.read_int("Enter roll number to search: ")
        self.out(format_student(self.store.get(roll)))

    def modify_marks(self) -> None:
        roll = self.read_int("Enter roll number to modify: ")
        current = self.store.get(roll)
        self.out(f"\nModifying marks for {current.name} (Roll {current.roll})")
        new_marks = [
            self.read_int(f"New marks for Subject {i} (current {m}, enter {KEEP} to keep): ")
            for i, m in enumerate(current.marks, start=1)
        ]
        s = self.store.modify(roll, new_marks)
        self.out(f"Updated. New percentage: {s.percentage:.2f} Grade: {s.grade}")

    def delete_student(self) -> None:
        roll = self.read_int("Enter roll number to delete: ")
        self.store.delete(roll)
        self.out(f"Deleted student with roll {roll}")

    def sort_students(self) -> None:
        if sort_by_percentage_desc(self.store):
            self.out("Sorted by percentage (highest first).")
        else:
            self.out("Not enough students to sort.")

    def graph_student(self) -> None:
        roll = self.read_int("Enter roll number for graph: ")
        s = self.store.get(roll)
        self.out(f"\n--- Performance Graph for {s.name} (Roll {s.roll}) ---")
        for i, (mark, filled) in enumerate(zip(s.marks, student_bar_lengths(s, self.bar_width)), start=1):
            self.out(f"Subject {i} [{mark:3d}]: {render_bar(filled, self.bar_width)} {mark}")
        self.out(f"\nTotal: {s.total}  Percentage: {s.percentage:.2f}  Grade: {s.grade}\n")

    def class_analysis(self) -> None:
        analysis = analyze_class(self.store.list())
        self.out("\n--- Class Analysis ---\nSubject Averages:")
        for j, (avg, filled) in enumerate(
            zip(analysis.subject_averages, subject_bar_lengths(analysis, self.bar_width)), start=1
        ):
            self.out(f" Subject {j} : {avg:.2f}\t{render_bar(filled, self.bar_width)} {avg:.2f}")

        self.out("\nGrade Distribution:")
        bars = grade_bar_lengths(analysis, self.bar_width)
        for letter, n in analysis.grade_distribution.items():
            self.out(f"{letter:>2} Grade [{n:3d}]: {render_bar(bars[letter], self.bar_width, '#')} {n}")

        self.out(f"\nClass Average Percentage: {analysis.class_average:.2f}\n")

    def save(self) -> None:
        n = self.snapshot.save(self.store)
        self.out(f"Saved {n} students to {self.snapshot.path}.")

    def load(self) -> None:
        try:
            n = self.snapshot.load_into(self.store)
        except PersistenceError as exc:
            self.out(f"{exc} Starting with empty list.")
            return
        self.out(f"Loaded {n} students from {self.snapshot.path}.")

    def load_demo(self) -> None:
        n = load_demo(self.store)
        self.out(f"Loaded demo data ({n} students).")

    def exit(self) -> None:
        answer = self.input("Do you want to save before exit? (y/n): ").strip().lower()
        if answer.startswith("y"):
            try:
                self.save()
            except ResultAnalyzerError as exc:
                self.out(str(exc))
        self.out("Exiting. Goodbye!")
