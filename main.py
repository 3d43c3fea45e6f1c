"""Studierendenverwaltung — Haupt-CLI.

Verwendung:
  python main.py                          Interaktives Menü (mit Admin-Anmeldung)
  python main.py menu                     dito
  python main.py add VORNAME NACHNAME EMAIL ALTER
  python main.py list                     Alle Studierenden anzeigen
  python main.py show <ID>                Details inkl. Kurse
  python main.py update <ID> <FELD> <WERT>
  python main.py delete <ID>              Studierende löschen
  python main.py search <BEGRIFF>         Suche in ID, Namen, E-Mail
  python main.py enroll <ID> <CODE> <NAME> <CREDITS> <NOTE>
  python main.py drop <ID> <CODE>         Kurs entfernen
  python main.py stats                    Statistik
  python main.py generate                 Demo-Daten erzeugen
  python main.py config init|show|edit|passwd
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from models.exceptions import RosterError

console = Console()


class AppContext:
    """Pro Aufruf erzeugte Abhängigkeiten: Config, Speicher, Manager."""

    def __init__(self, config_path: Optional[Path] = None):
        from config.manager import ConfigManager
        from storage.json_store import RosterStore

        self.config_manager = ConfigManager()
        self.config_path = config_path
        try:
            self.config = self.config_manager.load_or_default(config_path)
        except (FileNotFoundError, ValueError) as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            sys.exit(1)
        rc = self.config.roster
        self.store = RosterStore(self.config.storage.roster_path,
                                 id_prefix=rc.id_prefix,
                                 first_sequence=rc.first_sequence)
        self._manager = None

    @property
    def manager(self):
        if self._manager is None:
            self._manager = self.store.load()
        return self._manager

    def save(self) -> None:
        """Speichert den Datenbestand; Fehler → Exit-Code 1."""
        try:
            self.store.save(self.manager)
        except OSError as e:
            console.print(f"[red bold]Speichern fehlgeschlagen:[/red bold] {escape(str(e))}")
            sys.exit(1)

    def audit(self, action: str, details: str) -> None:
        """Einzelaktion ins Sitzungsprotokoll (eine Datei pro CLI-Aufruf)."""
        from storage.session_log import SessionLogger

        with SessionLogger.open("cli", self.config.storage.sessions_path) as log:
            log.log_action(action, details)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(message: str) -> NoReturn:
    console.print(f"[red]✗ {escape(message)}[/red]")
    sys.exit(1)


pass_app = click.make_pass_decorator(AppContext)


# ─── MENÜ ─────────────────────────────────────────────────────────────────────

@click.command("menu")
@pass_app
def cmd_menu(app: AppContext):
    """Interaktives Menü mit Admin-Anmeldung."""
    from ui.menu import MenuApp

    menu = MenuApp(app.manager, app.store, app.config, console=console)
    sys.exit(menu.run())


# ─── STUDIERENDE ──────────────────────────────────────────────────────────────

@click.command("add")
@click.argument("first_name")
@click.argument("last_name")
@click.argument("email")
@click.argument("age", type=int)
@pass_app
def cmd_add(app: AppContext, first_name: str, last_name: str, email: str, age: int):
    """Legt Studierende an und gibt die neue ID aus."""
    try:
        student_id = app.manager.create_student(first_name, last_name, email, age)
    except RosterError as e:
        _fail(str(e))
    app.save()
    app.audit("CREATE_STUDENT", f"id={student_id}, email={email}")
    console.print(f"[green]✓[/green] Angelegt: [bold]{student_id}[/bold]")


@click.command("list")
@click.option("--min-gpa", type=float, default=None,
              help="Nur Studierende mit GPA >= Wert anzeigen.")
@pass_app
def cmd_list(app: AppContext, min_gpa: Optional[float]):
    """Zeigt alle Studierenden an."""
    from ui.renderer import print_student_list

    if min_gpa is None:
        students = app.manager.get_all_students()
        title = "Alle Studierenden"
    else:
        students = app.manager.get_students_by_min_gpa(min_gpa)
        title = f"GPA >= {min_gpa:.2f}"
    print_student_list(console, students, title=title)


@click.command("show")
@click.argument("student_id")
@pass_app
def cmd_show(app: AppContext, student_id: str):
    """Zeigt Details und Kurse einer/eines Studierenden."""
    from models.validators import normalize_student_id
    from ui.renderer import print_student_details

    try:
        student = app.manager.get_student(normalize_student_id(student_id))
    except RosterError as e:
        _fail(str(e))
    print_student_details(console, student)


@click.command("update")
@click.argument("student_id")
@click.argument("field", type=click.Choice(["firstname", "lastname", "email", "age"],
                                           case_sensitive=False))
@click.argument("value")
@pass_app
def cmd_update(app: AppContext, student_id: str, field: str, value: str):
    """Ändert ein Feld (firstname, lastname, email, age)."""
    from models.validators import normalize_student_id

    student_id = normalize_student_id(student_id)
    try:
        app.manager.update_student(student_id, field, value)
    except RosterError as e:
        _fail(str(e))
    app.save()
    app.audit("UPDATE_STUDENT", f"id={student_id}, field={field.lower()}")
    console.print(f"[green]✓[/green] {student_id} aktualisiert.")


@click.command("delete")
@click.argument("student_id")
@click.option("--yes", "-y", is_flag=True, default=False,
              help="Ohne Rückfrage löschen.")
@pass_app
def cmd_delete(app: AppContext, student_id: str, yes: bool):
    """Löscht Studierende (mit Rückfrage)."""
    from models.validators import normalize_student_id

    student_id = normalize_student_id(student_id)
    if student_id not in app.manager:
        _fail(f"Keine Studierenden mit ID '{student_id}' gefunden.")
    if not yes and not click.confirm(f"{student_id} wirklich löschen?", default=False):
        console.print("[yellow]Abgebrochen.[/yellow]")
        return
    app.manager.delete_student(student_id)
    app.save()
    app.audit("DELETE_STUDENT", f"id={student_id}")
    console.print(f"[green]✓[/green] {student_id} gelöscht.")


@click.command("search")
@click.argument("term")
@pass_app
def cmd_search(app: AppContext, term: str):
    """Sucht in ID, Vorname, Nachname und E-Mail (ohne Groß-/Kleinschreibung)."""
    from ui.renderer import print_student_list

    term = term.strip()
    if not term:
        _fail("Suchbegriff darf nicht leer sein.")
    results = app.manager.search_students(term)
    if not results:
        console.print(f"[yellow]Keine Treffer für: {escape(term)}[/yellow]")
        return
    print_student_list(console, results, title=f"Treffer für '{term}'")


# ─── KURSE ────────────────────────────────────────────────────────────────────

@click.command("enroll")
@click.argument("student_id")
@click.argument("code")
@click.argument("name")
@click.argument("credits", type=int)
@click.argument("grade", type=float)
@pass_app
def cmd_enroll(app: AppContext, student_id: str, code: str, name: str,
               credits: int, grade: float):
    """Belegt einen Kurs mit Note (0-100) und berechnet den GPA neu."""
    from models.validators import normalize_course_code, normalize_student_id

    student_id = normalize_student_id(student_id)
    code = normalize_course_code(code)
    try:
        already = app.manager.get_student(student_id).has_course(code)
        student = app.manager.assign_course(student_id, code, name, credits, grade)
    except RosterError as e:
        _fail(str(e))
    if already:
        console.print(f"[yellow]Kurs {code} ist bereits belegt – keine Änderung.[/yellow]")
        return
    app.save()
    app.audit("ASSIGN_COURSE", f"id={student_id}, course={code}")
    console.print(f"[green]✓[/green] Kurs {code} belegt. Neuer GPA: {student.gpa:.2f}")


@click.command("drop")
@click.argument("student_id")
@click.argument("code")
@pass_app
def cmd_drop(app: AppContext, student_id: str, code: str):
    """Entfernt einen Kurs; unbekannte Codes sind kein Fehler."""
    from models.validators import normalize_course_code, normalize_student_id

    student_id = normalize_student_id(student_id)
    code = normalize_course_code(code)
    try:
        removed = app.manager.remove_course(student_id, code)
    except RosterError as e:
        _fail(str(e))
    if not removed:
        console.print(f"[yellow]Kurs {escape(code)} ist nicht belegt – keine Änderung.[/yellow]")
        return
    app.save()
    app.audit("REMOVE_COURSE", f"id={student_id}, course={code}")
    student = app.manager.get_student(student_id)
    console.print(f"[green]✓[/green] Kurs {code} entfernt. Neuer GPA: {student.gpa:.2f}")


# ─── STATISTIK ────────────────────────────────────────────────────────────────

@click.command("stats")
@click.option("--threshold", type=float, default=None,
              help="GPA-Grenze der Bestenliste (Standard aus Config).")
@pass_app
def cmd_stats(app: AppContext, threshold: Optional[float]):
    """Zeigt Kennzahlen und Bestenliste."""
    from analysis.statistics import RosterStatistics

    if threshold is None:
        threshold = app.config.roster.honor_roll_gpa
    RosterStatistics.from_manager(app.manager, threshold).print_rich(console)


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--count", default=20, show_default=True,
              help="Anzahl zu erzeugender Studierender.")
@click.option("--seed", default=42, show_default=True,
              help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--backup/--no-backup", default=True, show_default=True,
              help="Vorher Sicherungskopie des Bestands anlegen.")
@pass_app
def cmd_generate(app: AppContext, count: int, seed: int, backup: bool):
    """Ergänzt den Datenbestand um Demo-Studierende mit Kursen."""
    from data.fake_data import FakeRosterGenerator

    if backup and len(app.manager) > 0:
        try:
            path = app.store.save_versioned(app.manager)
            console.print(f"[dim]Sicherung: {escape(str(path))}[/dim]")
        except OSError as e:
            _fail(f"Sicherung fehlgeschlagen: {e}")

    created = FakeRosterGenerator(seed=seed).populate(app.manager, count)
    if not created:
        console.print("[yellow]Keine Studierenden erzeugt.[/yellow]")
        return
    app.save()
    console.print(f"[green]✓[/green] {len(created)} Studierende erzeugt "
                  f"({created[0]} … {created[-1]})")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder bearbeiten."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
@pass_app
def config_init(app: AppContext, force: bool):
    """Schreibt die Standard-Konfiguration als YAML."""
    from config.defaults import default_app_config

    mgr = app.config_manager
    target = app.config_path or mgr.DEFAULT_CONFIG
    if target.exists() and not force:
        _fail(f"Konfiguration existiert bereits: {target} (--force zum Überschreiben)")
    mgr.save(default_app_config(), target)


@cmd_config.command("show")
@pass_app
def config_show(app: AppContext):
    """Zeigt die aktive Konfiguration an."""
    app.config_manager.show(app.config)


@cmd_config.command("edit")
@pass_app
def config_edit(app: AppContext):
    """Bearbeitet die Konfiguration interaktiv."""
    app.config_manager.edit_interactive(app.config, app.config_path)


@cmd_config.command("passwd")
@click.password_option("--password", prompt="Neues Admin-Passwort")
@pass_app
def config_passwd(app: AppContext, password: str):
    """Setzt ein neues Admin-Passwort (gespeichert als SHA-256)."""
    mgr = app.config_manager
    try:
        config = mgr.set_password(app.config, password)
    except ValueError as e:
        _fail(str(e))
    mgr.save(config, app.config_path)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group(invoke_without_command=True)
@click.option("--config", "config_path", type=click.Path(path_type=Path),
              default=None, help="Pfad zur YAML-Konfiguration.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]):
    """Studierendenverwaltung: Studierende, Kurse, Noten und GPA.

    Ohne Befehl startet das interaktive Menü.
    """
    app = AppContext(config_path)
    _setup_logging(app.config.logging.level)
    ctx.obj = app
    if ctx.invoked_subcommand is None:
        ctx.invoke(cmd_menu)


def main():
    """Einstiegspunkt für `python main.py` und das Konsolenskript."""
    cli()


# Befehle registrieren
cli.add_command(cmd_menu)
cli.add_command(cmd_add)
cli.add_command(cmd_list)
cli.add_command(cmd_show)
cli.add_command(cmd_update)
cli.add_command(cmd_delete)
cli.add_command(cmd_search)
cli.add_command(cmd_enroll)
cli.add_command(cmd_drop)
cli.add_command(cmd_stats)
cli.add_command(cmd_generate)
cli.add_command(cmd_config)


if __name__ == "__main__":
    main()
