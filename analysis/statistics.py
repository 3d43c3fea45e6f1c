"""Kennzahlen über den gesamten Datenbestand (Pydantic v2)."""

from pydantic import BaseModel

from models.course import FAILING_LETTER, GRADE_SCALE
from models.roster import RosterManager


class HonorRollEntry(BaseModel):
    student_id: str
    name: str
    gpa: float


class RosterStatistics(BaseModel):
    """Ergebnis der Auswertung (Menüpunkt "Statistik")."""

    total_students: int
    students_with_courses: int
    total_enrollments: int
    average_gpa: float                    # Mittel über alle Studierenden, 0.0 wenn leer
    honor_roll_threshold: float
    honor_roll: list[HonorRollEntry]
    letter_distribution: dict[str, int]   # "A".."F" → Anzahl Belegungen

    @classmethod
    def from_manager(cls, manager: RosterManager,
                     threshold: float = 3.0) -> "RosterStatistics":
        students = manager.get_all_students()
        letters = [letter for _, letter, _ in GRADE_SCALE] + [FAILING_LETTER]
        distribution = {letter: 0 for letter in letters}
        for s in students:
            for c in s.courses:
                distribution[c.letter_grade] += 1

        return cls(
            total_students=len(students),
            students_with_courses=sum(1 for s in students if s.courses),
            total_enrollments=sum(distribution.values()),
            average_gpa=(sum(s.gpa for s in students) / len(students)
                         if students else 0.0),
            honor_roll_threshold=threshold,
            honor_roll=[
                HonorRollEntry(student_id=s.student_id, name=s.full_name, gpa=s.gpa)
                for s in manager.get_students_by_min_gpa(threshold)
            ],
            letter_distribution=distribution,
        )

    def print_rich(self, console=None) -> None:
        """Gibt die Statistik formatiert über Rich aus."""
        from rich.console import Console
        from rich.markup import escape
        from rich.panel import Panel

        console = console or Console()
        if self.total_students == 0:
            console.print("[yellow]Keine Studierenden im System.[/yellow]")
            return

        lines = [
            f"[bold]Studierende gesamt:[/bold] {self.total_students}",
            f"[bold]Mit Kursbelegung:[/bold] {self.students_with_courses}",
            f"[bold]Belegungen gesamt:[/bold] {self.total_enrollments}",
            f"[bold]Durchschnittlicher GPA:[/bold] {self.average_gpa:.2f}",
            "",
            "[bold]Notenverteilung:[/bold] " + "  ".join(
                f"{letter}: {count}" for letter, count in self.letter_distribution.items()
            ),
            "",
            f"[bold]Bestenliste (GPA >= {self.honor_roll_threshold:.1f}):[/bold]",
        ]
        if not self.honor_roll:
            lines.append(
                f"  [yellow]Niemand mit GPA >= {self.honor_roll_threshold:.1f}[/yellow]"
            )
        for entry in self.honor_roll:
            lines.append(f"  [green]•[/green] {escape(entry.name)} (ID: {entry.student_id}, "
                         f"GPA: {entry.gpa:.2f})")

        console.print(Panel("\n".join(lines), title="Statistik", border_style="cyan"))
