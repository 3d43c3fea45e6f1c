"""Interaktives Konsolenmenü mit Admin-Anmeldung.

Ablauf: Banner → Anmeldung (max. Versuche laut Config) → Hauptmenü-Schleife.
Nach jeder erfolgreichen Änderung wird protokolliert und (bei autosave)
gespeichert; beim Beenden wird immer gespeichert.
"""

from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt

from analysis.statistics import RosterStatistics
from config.schema import AppConfig
from models.exceptions import RosterError
from models.roster import RosterManager
from models.validators import (
    MAX_AGE,
    MAX_CREDITS,
    MIN_AGE,
    MIN_CREDITS,
    is_valid_age,
    is_valid_course_code,
    is_valid_credits,
    is_valid_email,
    is_valid_grade,
    is_valid_name,
    normalize_course_code,
    normalize_student_id,
)
from storage.json_store import RosterStore
from storage.session_log import NullSessionLogger, SessionLogger
from ui.renderer import print_student_details, print_student_list

_MENU_ENTRIES = [
    ("1", "Studierende anlegen"),
    ("2", "Alle Studierenden anzeigen"),
    ("3", "Details anzeigen"),
    ("4", "Daten ändern"),
    ("5", "Studierende löschen"),
    ("6", "Suchen"),
    ("7", "Kurs belegen"),
    ("8", "Kurs entfernen"),
    ("9", "Statistik"),
    ("0", "Beenden"),
]

_UPDATE_FIELDS = {
    "1": ("firstname", "Neuer Vorname"),
    "2": ("lastname", "Neuer Nachname"),
    "3": ("email", "Neue E-Mail"),
    "4": ("age", "Neues Alter"),
}


class MenuApp:
    """Interaktive Sitzung über einem RosterManager.

    Manager, Speicher und Konfiguration werden explizit übergeben; es gibt
    keine globale Instanz.
    """

    def __init__(self, manager: RosterManager, store: RosterStore,
                 config: AppConfig, console: Optional[Console] = None):
        self.manager = manager
        self.store = store
        self.config = config
        self.console = console or Console()
        self.session_log: NullSessionLogger = NullSessionLogger()

    # ─── Ausgabe-Helfer ───

    def _success(self, text: str) -> None:
        self.console.print(f"[green]✓[/green] {text}")

    def _error(self, text: str) -> None:
        self.console.print(f"[red]✗ {escape(text)}[/red]")

    def _section(self, title: str) -> None:
        self.console.print()
        self.console.print(f"[bold cyan]─── {title} ───[/bold cyan]")

    # ─── Eingabe-Helfer ───

    def _ask_text(self, label: str, check: Callable[[str], bool],
                  error: str, transform: Callable[[str], str] = str.strip) -> str:
        while True:
            value = transform(Prompt.ask(label, console=self.console))
            if check(value):
                return value
            self._error(error)

    def _ask_int(self, label: str, check: Callable[[int], bool], error: str) -> int:
        while True:
            value = IntPrompt.ask(label, console=self.console)
            if check(value):
                return value
            self._error(error)

    def _ask_float(self, label: str, check: Callable[[float], bool], error: str) -> float:
        while True:
            value = FloatPrompt.ask(label, console=self.console)
            if check(value):
                return value
            self._error(error)

    def _ask_name(self, label: str) -> str:
        return self._ask_text(label, is_valid_name,
                              "Ungültiger Name. Nur Buchstaben und Leerzeichen.")

    def _ask_email(self, label: str) -> str:
        return self._ask_text(label, is_valid_email,
                              "Ungültige E-Mail. Beispiel: user@example.com")

    def _ask_age(self, label: str) -> int:
        return self._ask_int(label, is_valid_age,
                             f"Ungültiges Alter. Erlaubt: {MIN_AGE}-{MAX_AGE}.")

    def _ask_student_id(self) -> str:
        return normalize_student_id(Prompt.ask("Studierenden-ID", console=self.console))

    def _read_password(self) -> str:
        return Prompt.ask("Passwort", password=True, console=self.console)

    # ─── Persistenz & Protokoll ───

    def _record(self, action: str, details: str) -> None:
        """Protokolliert eine erfolgreiche Änderung und speichert ggf."""
        self.session_log.log_action(action, details)
        if self.config.storage.autosave:
            self._persist()

    def _persist(self) -> bool:
        try:
            self.store.save(self.manager)
            return True
        except OSError as e:
            self._error(f"Speichern fehlgeschlagen: {e}")
            return False

    # ─── Ablauf ───

    def print_banner(self) -> None:
        self.console.print(Panel(
            f"[bold]{escape(self.config.app_name.upper())}[/bold]\n"
            "Konsolenbasierte Verwaltung",
            border_style="blue",
            expand=False,
        ))

    def login(self) -> bool:
        """Admin-Anmeldung; öffnet bei Erfolg das Sitzungsprotokoll."""
        self._section("ADMIN-ANMELDUNG")
        admin = self.config.admin
        for attempt in range(1, admin.max_login_attempts + 1):
            username = Prompt.ask("Benutzername", console=self.console).strip()
            password = self._read_password().strip()
            if admin.check(username, password):
                self.session_log = SessionLogger.open(
                    username, self.config.storage.sessions_path
                )
                self.session_log.log_action("LOGIN_SUCCESS", f"username={username}")
                return True
            self._error(
                f"Ungültige Zugangsdaten. Versuch {attempt} von {admin.max_login_attempts}"
            )
        return False

    def run(self) -> int:
        """Startet die Sitzung. Rückgabe: Exit-Code (0 = regulär beendet)."""
        self.print_banner()
        try:
            if not self.login():
                self._error("Anmeldung fehlgeschlagen. Maximale Anzahl Versuche erreicht.")
                return 1
        except (EOFError, KeyboardInterrupt):
            self.console.print("\n[yellow]Eingabe beendet.[/yellow]")
            return 1

        self._success("Anmeldung erfolgreich.")
        try:
            self.main_loop()
        except (EOFError, KeyboardInterrupt):
            self.console.print("\n[yellow]Eingabe beendet.[/yellow]")
        finally:
            self._persist()
            self.session_log.close()
        return 0

    def main_loop(self) -> None:
        actions: dict[str, Callable[[], None]] = {
            "1": self.create_student,
            "2": self.list_students,
            "3": self.show_student,
            "4": self.update_student,
            "5": self.delete_student,
            "6": self.search_students,
            "7": self.assign_course,
            "8": self.remove_course,
            "9": self.show_statistics,
        }
        while True:
            self.print_menu()
            choice = Prompt.ask("Auswahl", console=self.console).strip()
            if choice == "0":
                self.console.print("[bold green]Auf Wiedersehen![/bold green]")
                return
            action = actions.get(choice)
            if action is None:
                self._error("Ungültige Auswahl.")
                continue
            try:
                action()
            except RosterError as e:
                self._error(str(e))

    def print_menu(self) -> None:
        lines = [f"  [bold]{key}.[/bold] {label}" for key, label in _MENU_ENTRIES]
        self.console.print(Panel("\n".join(lines), title="Hauptmenü",
                                 border_style="blue", expand=False))

    # ─── Menüpunkte ───

    def create_student(self) -> None:
        self._section("STUDIERENDE ANLEGEN")
        first = self._ask_name("Vorname")
        last = self._ask_name("Nachname")
        email = self._ask_email("E-Mail")
        age = self._ask_age("Alter")
        student_id = self.manager.create_student(first, last, email, age)
        self._success(f"Angelegt mit ID [bold]{student_id}[/bold]")
        self._record("CREATE_STUDENT", f"id={student_id}, email={email}")

    def list_students(self) -> None:
        self._section("ALLE STUDIERENDEN")
        print_student_list(self.console, self.manager.get_all_students())

    def show_student(self) -> None:
        self._section("DETAILS")
        student = self.manager.get_student(self._ask_student_id())
        print_student_details(self.console, student)

    def update_student(self) -> None:
        self._section("DATEN ÄNDERN")
        student_id = self._ask_student_id()
        student = self.manager.get_student(student_id)
        print_student_details(self.console, student)

        self.console.print("  [bold]1.[/bold] Vorname  [bold]2.[/bold] Nachname  "
                           "[bold]3.[/bold] E-Mail  [bold]4.[/bold] Alter")
        choice = Prompt.ask("Feld", console=self.console).strip()
        if choice not in _UPDATE_FIELDS:
            self._error("Ungültige Auswahl.")
            return
        field, label = _UPDATE_FIELDS[choice]
        if field == "age":
            value: object = self._ask_age(label)
        elif field == "email":
            value = self._ask_email(label)
        else:
            value = self._ask_name(label)

        self.manager.update_student(student_id, field, value)
        self._success("Daten aktualisiert.")
        self._record("UPDATE_STUDENT", f"id={student_id}, field={field}")

    def delete_student(self) -> None:
        self._section("STUDIERENDE LÖSCHEN")
        student_id = self._ask_student_id()
        print_student_details(self.console, self.manager.get_student(student_id))
        if not Confirm.ask("Wirklich löschen?", default=False, console=self.console):
            self.console.print("[yellow]Löschen abgebrochen.[/yellow]")
            return
        if self.manager.delete_student(student_id):
            self._success("Studierende gelöscht.")
            self._record("DELETE_STUDENT", f"id={student_id}")
        else:
            self._error("Löschen fehlgeschlagen.")

    def search_students(self) -> None:
        self._section("SUCHEN")
        term = Prompt.ask("Suchbegriff (ID, Name oder E-Mail)", console=self.console).strip()
        if not term:
            self._error("Suchbegriff darf nicht leer sein.")
            return
        results = self.manager.search_students(term)
        if not results:
            self.console.print(f"[yellow]Keine Treffer für: {escape(term)}[/yellow]")
            return
        print_student_list(self.console, results, title=f"Treffer für '{term}'")

    def assign_course(self) -> None:
        self._section("KURS BELEGEN")
        student_id = self._ask_student_id()
        student = self.manager.get_student(student_id)
        self.console.print(f"Studierende: [bold]{escape(student.full_name)}[/bold]")

        code = self._ask_text(
            "Kurscode (z.B. CS101, MATH201)", is_valid_course_code,
            "Ungültiger Kurscode. Format wie CS101 oder MATH201.",
            transform=normalize_course_code,
        )
        if student.has_course(code):
            self.console.print(f"[yellow]Kurs {code} ist bereits belegt.[/yellow]")
            return
        name = self._ask_text("Kursname", bool, "Kursname darf nicht leer sein.")
        credits = self._ask_int(
            f"Credits ({MIN_CREDITS}-{MAX_CREDITS})", is_valid_credits,
            f"Ungültige Credits. Erlaubt: {MIN_CREDITS}-{MAX_CREDITS}.",
        )
        grade = self._ask_float("Note (0-100)", is_valid_grade,
                                "Ungültige Note. Erlaubt: 0-100.")

        student = self.manager.assign_course(student_id, code, name, credits, grade)
        self._success(f"Kurs belegt. Neuer GPA: [bold]{student.gpa:.2f}[/bold]")
        self._record("ASSIGN_COURSE", f"id={student_id}, course={code}")

    def remove_course(self) -> None:
        self._section("KURS ENTFERNEN")
        student_id = self._ask_student_id()
        student = self.manager.get_student(student_id)
        if not student.courses:
            self.console.print("[yellow]Keine Kurse belegt.[/yellow]")
            return
        for c in student.courses:
            self.console.print(f"  - {c.code}: {escape(c.name)}")
        code = normalize_course_code(Prompt.ask("Kurscode", console=self.console))

        if not self.manager.remove_course(student_id, code):
            self.console.print(f"[yellow]Kurs {escape(code)} ist nicht belegt.[/yellow]")
            return
        self._success(f"Kurs entfernt. Neuer GPA: [bold]{student.gpa:.2f}[/bold]")
        self._record("REMOVE_COURSE", f"id={student_id}, course={code}")

    def show_statistics(self) -> None:
        self._section("STATISTIK")
        stats = RosterStatistics.from_manager(
            self.manager, self.config.roster.honor_roll_gpa
        )
        stats.print_rich(self.console)
