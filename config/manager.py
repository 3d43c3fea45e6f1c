"""Konfigurationsmanager: Laden, Speichern, Validieren und interaktives Bearbeiten.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table
from rich import box
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import default_app_config
from config.schema import (
    AdminConfig,
    AppConfig,
    LoggingConfig,
    RosterConfig,
    StorageConfig,
    hash_password,
)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Studierendenverwaltung — Konfiguration
# Version: 1.0
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "storage": (
        "Speicherung",
        "Pfade relativ zum Arbeitsverzeichnis.",
    ),
    "admin": (
        "Admin-Zugang",
        "Passwort nur als SHA-256-Hash. Ändern mit: python main.py config passwd",
    ),
    "roster": (
        "Datenbestand",
        "IDs werden als <id_prefix><Zähler> vergeben und nie wiederverwendet.",
    ),
    "logging": (
        "Logging",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "roster_config.yaml"

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> AppConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py config init' aus."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return AppConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_or_default(self, path: Optional[Path] = None) -> AppConfig:
        """Wie load(), liefert aber die Standardwerte wenn keine Datei existiert."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            return default_app_config()
        return self.load(target)

    # ─── Speichern ───

    def save(self, config: AppConfig, path: Optional[Path] = None) -> None:
        """Speichere Config als YAML mit deutschen Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {escape(str(target))}")

    def _build_commented_yaml(self, config: AppConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        if "roster" in cm:
            roster_map = CommentedMap(cm["roster"])
            roster_map.yaml_add_eol_comment("inklusive", "honor_roll_gpa")
            cm["roster"] = roster_map

        return cm

    # ─── Anzeige ───

    def show(self, config: AppConfig) -> None:
        """Gibt die Konfiguration als Tabellen aus (ohne Passwort-Hash)."""
        console.print(Panel(f"[bold]{escape(config.app_name)}[/bold]",
                            title="Konfiguration", border_style="cyan"))
        sections = [
            ("Speicherung", config.storage.model_dump()),
            ("Admin-Zugang", config.admin.model_dump(exclude={"password_sha256"})),
            ("Datenbestand", config.roster.model_dump()),
            ("Logging", config.logging.model_dump()),
        ]
        for title, values in sections:
            table = Table(title=title, box=box.ROUNDED)
            table.add_column("Parameter", style="bold")
            table.add_column("Wert")
            for k, v in values.items():
                table.add_row(k, escape(str(v)))
            console.print(table)

    # ─── Passwort ───

    def set_password(self, config: AppConfig, password: str) -> AppConfig:
        """Gibt eine Kopie mit neuem Admin-Passwort-Hash zurück."""
        if len(password) < 6:
            raise ValueError("Passwort muss mindestens 6 Zeichen lang sein.")
        admin = config.admin.model_copy(
            update={"password_sha256": hash_password(password)}
        )
        return config.model_copy(update={"admin": admin})

    # ─── Interaktives Bearbeiten ───

    def edit_interactive(self, config: AppConfig,
                         path: Optional[Path] = None) -> AppConfig:
        """Interaktives Bearbeitungsmenü für die Konfiguration."""
        while True:
            console.print()
            console.print(Panel(
                "[bold]Konfiguration bearbeiten[/bold]",
                border_style="cyan",
            ))
            console.print("  [bold]1.[/bold] Speicherung (Pfade, Autosave)")
            console.print("  [bold]2.[/bold] Admin-Zugang")
            console.print("  [bold]3.[/bold] Datenbestand (IDs, Bestenliste)")
            console.print("  [bold]4.[/bold] Logging")
            console.print("  [bold]0.[/bold] Speichern & Zurück")

            choice = Prompt.ask("\nAuswahl", default="0")

            editors = {
                "1": ("storage", self._edit_storage),
                "2": ("admin", self._edit_admin),
                "3": ("roster", self._edit_roster),
                "4": ("logging", self._edit_logging),
            }
            if choice == "0":
                self.save(config, path)
                break
            if choice not in editors:
                console.print("[yellow]Ungültige Auswahl.[/yellow]")
                continue

            section, editor = editors[choice]
            try:
                updated = editor(getattr(config, section))
            except PydanticValidationError as e:
                console.print(f"[red]Ungültige Eingabe:[/red] {escape(str(e))}")
                continue
            config = config.model_copy(update={section: updated})

        return config

    def _edit_storage(self, sc: StorageConfig) -> StorageConfig:
        data_dir = Prompt.ask("Datenverzeichnis", default=sc.data_dir)
        roster_file = Prompt.ask("Datei für Studierende", default=sc.roster_file)
        sessions_dir = Prompt.ask("Verzeichnis für Protokolle", default=sc.sessions_dir)
        autosave = Confirm.ask("Nach jeder Änderung speichern?", default=sc.autosave)
        return StorageConfig(data_dir=data_dir, roster_file=roster_file,
                             sessions_dir=sessions_dir, autosave=autosave)

    def _edit_admin(self, ac: AdminConfig) -> AdminConfig:
        username = Prompt.ask("Admin-Benutzername", default=ac.username)
        attempts = IntPrompt.ask("Maximale Anmeldeversuche",
                                 default=ac.max_login_attempts)
        updated = AdminConfig(username=username,
                              password_sha256=ac.password_sha256,
                              max_login_attempts=attempts)
        if Confirm.ask("Passwort ändern?", default=False):
            password = Prompt.ask("Neues Passwort", password=True)
            updated = updated.model_copy(
                update={"password_sha256": hash_password(password)}
            )
        return updated

    def _edit_roster(self, rc: RosterConfig) -> RosterConfig:
        console.print(
            "[dim]Hinweis: Präfix und Startwert gelten nur für neu angelegte "
            "Datenbestände.[/dim]"
        )
        prefix = Prompt.ask("ID-Präfix", default=rc.id_prefix)
        first = IntPrompt.ask("Startwert ID-Zähler", default=rc.first_sequence)
        honor = FloatPrompt.ask("GPA-Grenze Bestenliste", default=rc.honor_roll_gpa)
        return RosterConfig(id_prefix=prefix, first_sequence=first,
                            honor_roll_gpa=honor)

    def _edit_logging(self, lc: LoggingConfig) -> LoggingConfig:
        level = Prompt.ask(
            "Log-Level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            default=lc.level,
        )
        return LoggingConfig(level=level)
