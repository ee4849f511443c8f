from __future__ import annotations

import flet as ft

from result_analyzer.config.settings import settings
from result_analyzer.domain.errors import EmptyStoreError, PersistenceError, ResultAnalyzerError
from result_analyzer.domain.logic.analysis import (
    analyze_class,
    grade_bar_lengths,
    student_bar_lengths,
    subject_bar_lengths,
)
from result_analyzer.domain.logic.results import SUBJECTS
from result_analyzer.services.demo import load_demo
from result_analyzer.services.ranking import sort_by_percentage_desc
from result_analyzer.services.storage import SnapshotFile
from result_analyzer.services.store import KEEP, ResultStore

BAR_PIXELS_PER_UNIT = 6


def _build_bar(filled: int, color: str = ft.Colors.BLUE_400) -> ft.Control:
    return ft.Container(
        width=max(2, filled * BAR_PIXELS_PER_UNIT),
        height=12,
        bgcolor=color,
        border_radius=6,
    )


def _parse_int(field: ft.TextField, label: str) -> int:
    try:
        return int((field.value or "").strip())
    except ValueError as exc:
        raise ValueError(f"{label} must be a whole number") from exc


class ResultAnalyzerApp:
    def __init__(self, page: ft.Page) -> None:
        self.page = page
        self.page.title = "Student Result Analyzer"
        self.page.scroll = ft.ScrollMode.AUTO
        self.store = ResultStore()
        self.snapshot = SnapshotFile()
        self.bar_width = settings.bar_width
        self.status = ft.Text()

        self.students_container = ft.Container()
        self.graph_container = ft.Container()
        self.analysis_container = ft.Container()

    def run(self) -> None:
        try:
            count = self.snapshot.load_into(self.store)
            self.set_status(f"Loaded {count} students from {self.snapshot.path}.", is_error=False)
        except PersistenceError as exc:
            self.set_status(f"{exc} Starting with empty list.", is_error=False)
        self.show_main_app()

    def set_status(self, message: str, is_error: bool = True) -> None:
        self.status.value = message
        self.status.color = ft.Colors.RED_400 if is_error else ft.Colors.GREEN_400

    def refresh_all(self) -> None:
        self.students_container.content = self.students_view()
        self.graph_container.content = self.graph_view()
        self.analysis_container.content = self.analysis_view()
        self.page.update()

    def guarded(self, action, success: str | None = None) -> None:
        try:
            result = action()
        except (ResultAnalyzerError, ValueError) as exc:
            self.set_status(str(exc))
        else:
            if success:
                self.set_status(success.format(result=result), is_error=False)
        self.refresh_all()

    def show_main_app(self) -> None:
        self.page.clean()

        tabs = ft.Tabs(
            selected_index=0,
            tabs=[
                ft.Tab(text="Students", content=self.students_container),
                ft.Tab(text="Student Graph", content=self.graph_container),
                ft.Tab(text="Class Analysis", content=self.analysis_container),
            ],
            expand=1,
        )

        def save(_: ft.ControlEvent) -> None:
            self.guarded(lambda: self.snapshot.save(self.store), "Saved {result} students.")

        def load(_: ft.ControlEvent) -> None:
            self.guarded(lambda: self.snapshot.load_into(self.store), "Loaded {result} students.")

        def demo(_: ft.ControlEvent) -> None:
            self.guarded(lambda: load_demo(self.store), "Loaded demo data ({result} students).")

        self.page.add(
            ft.Row(
                [
                    ft.Text("Student Result Analyzer", size=28, weight=ft.FontWeight.BOLD),
                    ft.Row(
                        [
                            ft.OutlinedButton("Save", on_click=save),
                            ft.OutlinedButton("Load", on_click=load),
                            ft.OutlinedButton("Demo Data", on_click=demo),
                            ft.TextButton("Exit", on_click=lambda _: self.confirm_exit()),
                        ]
                    ),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            self.status,
            tabs,
        )
        self.refresh_all()

    def students_view(self) -> ft.Control:
        roll = ft.TextField(label="Roll", width=120)
        name = ft.TextField(label="Name", width=300, max_length=self.store.max_name)
        marks = [ft.TextField(label=f"Subject {i}", width=110) for i in range(1, SUBJECTS + 1)]

        def add_student(_: ft.ControlEvent) -> None:
            def action():
                return self.store.add(
                    _parse_int(roll, "Roll"),
                    (name.value or "").strip(),
                    [_parse_int(m, f"Subject {i}") for i, m in enumerate(marks, start=1)],
                )

            self.guarded(action, "Student added.")

        def modify_student(_: ft.ControlEvent) -> None:
            # blank fields keep the current mark
            def action():
                new_marks = [
                    _parse_int(m, f"Subject {i}") if (m.value or "").strip() else KEEP
                    for i, m in enumerate(marks, start=1)
                ]
                return self.store.modify(_parse_int(roll, "Roll"), new_marks)

            self.guarded(action, "Marks updated.")

        def sort_students(_: ft.ControlEvent) -> None:
            if sort_by_percentage_desc(self.store):
                self.set_status("Sorted by percentage (highest first).", is_error=False)
            else:
                self.set_status("Not enough students to sort.", is_error=False)
            self.refresh_all()

        def delete_student(roll_no: int) -> None:
            self.guarded(lambda: self.store.delete(roll_no), f"Deleted student with roll {roll_no}")

        rows = [
            ft.Row(
                [
                    ft.Text(f"{r.roll:>4}  {r.name}"),
                    ft.Text(f"{' '.join(str(m) for m in r.marks)} | Total {r.total} | {r.percentage:.2f} | {r.grade}"),
                    ft.IconButton(icon=ft.Icons.DELETE, on_click=lambda _, rn=r.roll: delete_student(rn)),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            )
            for r in self.store.list()
        ] or [ft.Text("No students to display.")]

        return ft.Column(
            [
                ft.Row([roll, name]),
                ft.Row(marks),
                ft.Row(
                    [
                        ft.ElevatedButton("Add Student", on_click=add_student),
                        ft.ElevatedButton("Modify Marks", on_click=modify_student),
                        ft.OutlinedButton("Sort by Percentage", on_click=sort_students),
                    ]
                ),
                ft.Divider(),
                *rows,
            ]
        )

    def graph_view(self) -> ft.Control:
        records = self.store.list()
        if not records:
            return ft.Text("No students to display.")

        picker = ft.Dropdown(
            label="Student",
            options=[ft.dropdown.Option(str(r.roll), f"{r.roll} - {r.name}") for r in records],
            value=str(records[0].roll),
        )
        bars = ft.Column(spacing=6)

        def show(e: ft.ControlEvent | None = None) -> None:
            bars.controls.clear()
            try:
                s = self.store.get(int(picker.value))
            except (ResultAnalyzerError, TypeError, ValueError) as exc:
                bars.controls.append(ft.Text(str(exc), color=ft.Colors.RED_400))
            else:
                for i, (mark, filled) in enumerate(zip(s.marks, student_bar_lengths(s, self.bar_width)), start=1):
                    bars.controls.append(ft.Row([ft.Text(f"Subject {i} [{mark:3d}]", width=140), _build_bar(filled)]))
                bars.controls.append(
                    ft.Text(f"Total: {s.total}  Percentage: {s.percentage:.2f}  Grade: {s.grade}", weight=ft.FontWeight.BOLD)
                )
            if e is not None:
                self.page.update()

        picker.on_change = show
        show()
        return ft.Column([picker, ft.Divider(), bars])

    def analysis_view(self) -> ft.Control:
        try:
            analysis = analyze_class(self.store.list())
        except EmptyStoreError as exc:
            return ft.Text(str(exc))

        subject_lines = [
            ft.Row([ft.Text(f"Subject {j}: {avg:.2f}", width=160), _build_bar(filled)])
            for j, (avg, filled) in enumerate(
                zip(analysis.subject_averages, subject_bar_lengths(analysis, self.bar_width)), start=1
            )
        ]
        grade_bars = grade_bar_lengths(analysis, self.bar_width)
        grade_lines = [
            ft.Row([ft.Text(f"{letter} Grade [{n:3d}]", width=160), _build_bar(grade_bars[letter], ft.Colors.GREEN_400)])
            for letter, n in analysis.grade_distribution.items()
        ]

        return ft.Column(
            [
                ft.Text("Subject Averages", size=20, weight=ft.FontWeight.BOLD),
                *subject_lines,
                ft.Divider(),
                ft.Text("Grade Distribution", size=20, weight=ft.FontWeight.BOLD),
                *grade_lines,
                ft.Divider(),
                ft.Text(f"Class Average Percentage: {analysis.class_average:.2f}", size=18, weight=ft.FontWeight.BOLD),
            ]
        )

    def confirm_exit(self) -> None:
        def close(save_first: bool) -> None:
            if save_first:
                try:
                    self.snapshot.save(self.store)
                except PersistenceError as exc:
                    self.page.close(dialog)
                    self.set_status(str(exc))
                    self.page.update()
                    return
            self.page.close(dialog)
            self.page.window.destroy()

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Exit"),
            content=ft.Text("Do you want to save before exit?"),
            actions=[
                ft.TextButton("Yes", on_click=lambda _: close(True)),
                ft.TextButton("No", on_click=lambda _: close(False)),
                ft.TextButton("Cancel", on_click=lambda _: self.page.close(dialog)),
            ],
        )
        self.page.open(dialog)


def main(page: ft.Page) -> None:
    ResultAnalyzerApp(page).run()
