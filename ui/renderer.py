"""Rich-Darstellung von Studierenden und Kursen für Menü und CLI."""

from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

from models.student import Student

# Farbe der Buchstabennote in Kurstabellen
LETTER_STYLES: dict[str, str] = {
    "A": "bold green",
    "B": "green",
    "C": "yellow",
    "D": "dark_orange",
    "F": "bold red",
}


def gpa_style(gpa: float) -> str:
    if gpa >= 3.0:
        return "green"
    if gpa >= 2.0:
        return "yellow"
    return "red"


def student_table(students: Iterable[Student], title: Optional[str] = None) -> Table:
    """Übersichtstabelle: ID, Name, E-Mail, Alter, GPA (2 Nachkommastellen)."""
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("E-Mail")
    table.add_column("Alter", justify="right")
    table.add_column("GPA", justify="right")
    for s in students:
        table.add_row(
            s.student_id,
            escape(s.full_name),
            escape(s.email),
            str(s.age),
            f"[{gpa_style(s.gpa)}]{s.gpa:.2f}[/{gpa_style(s.gpa)}]",
        )
    return table


def course_table(student: Student) -> Table:
    table = Table(title="Belegte Kurse", box=box.SIMPLE)
    table.add_column("Code", style="bold")
    table.add_column("Kurs")
    table.add_column("Credits", justify="right")
    table.add_column("Note", justify="right")
    table.add_column("Buchst.", justify="center")
    for c in student.courses:
        style = LETTER_STYLES.get(c.letter_grade, "")
        table.add_row(
            c.code, escape(c.name), str(c.credits), f"{c.grade:.1f}%",
            f"[{style}]{c.letter_grade}[/{style}]",
        )
    return table


def print_student_list(console: Console, students: list[Student],
                       title: str = "Alle Studierenden") -> None:
    if not students:
        console.print("[yellow]Keine Studierenden gefunden.[/yellow]")
        return
    console.print(f"[bold]Anzahl:[/bold] {len(students)}")
    console.print(student_table(students, title=escape(title)))


def print_student_details(console: Console, student: Student) -> None:
    """Detailansicht mit Stammdaten und Kurstabelle."""
    header = (
        f"[bold]{escape(student.full_name)}[/bold]  ([cyan]{student.student_id}[/cyan])\n"
        f"E-Mail: {escape(student.email)}\n"
        f"Alter:  {student.age}\n"
        f"GPA:    [{gpa_style(student.gpa)}]{student.gpa:.2f}[/{gpa_style(student.gpa)}]"
    )
    console.print(Panel(header, title="Studierende", border_style="cyan"))
    if student.courses:
        console.print(course_table(student))
    else:
        console.print("[dim]  Keine Kurse belegt.[/dim]")
