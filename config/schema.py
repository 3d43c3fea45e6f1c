import hashlib
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


def hash_password(password: str) -> str:
    """SHA-256-Hexdigest eines Passworts (nur für das lokale Admin-Gate)."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


# ─── SPEICHERUNG ───

class StorageConfig(BaseModel):
    """Ablageorte für Datenbestand und Sitzungsprotokolle."""
    # Basisverzeichnis für alle Laufzeitdaten
    data_dir: str = Field("data",
        description="Basisverzeichnis für Laufzeitdaten")
    # Dateiname des Datenbestands (JSON) innerhalb von data_dir
    roster_file: str = Field("students.json",
        description="Datei mit allen Studierenden (JSON)")
    # Unterverzeichnis für Sitzungsprotokolle innerhalb von data_dir
    sessions_dir: str = Field("sessions",
        description="Verzeichnis für Sitzungsprotokolle")
    # Nach jeder erfolgreichen Änderung sofort speichern
    autosave: bool = Field(True,
        description="Nach jeder Änderung speichern")

    @property
    def roster_path(self) -> Path:
        return Path(self.data_dir) / self.roster_file

    @property
    def sessions_path(self) -> Path:
        return Path(self.data_dir) / self.sessions_dir


# ─── ADMIN-ZUGANG ───

class AdminConfig(BaseModel):
    """Einzelner Admin-Zugang für das interaktive Menü."""
    # Benutzername des Admins
    username: str = Field("admin",
        description="Admin-Benutzername")
    # SHA-256 des Passworts (Standard: "admin123")
    password_sha256: str = Field(hash_password("admin123"),
        description="SHA-256-Hash des Admin-Passworts")
    # Maximale Anmeldeversuche, danach Programmende
    max_login_attempts: int = Field(3, ge=1, le=10,
        description="Maximale Anmeldeversuche")

    def check(self, username: str, password: str) -> bool:
        return (username == self.username
                and hash_password(password) == self.password_sha256)


# ─── DATENBESTAND ───

class RosterConfig(BaseModel):
    """Regeln für ID-Vergabe und Auswertungen."""
    # Präfix der Studierenden-IDs
    id_prefix: str = Field("STU",
        description="Präfix der Studierenden-IDs")
    # Startwert des ID-Zählers
    first_sequence: int = Field(1001, ge=1,
        description="Startwert des ID-Zählers")
    # GPA-Grenze für die Bestenliste (inklusive)
    honor_roll_gpa: float = Field(3.0, ge=0.0, le=4.0,
        description="GPA-Grenze für die Bestenliste")

    @field_validator("id_prefix")
    @classmethod
    def _check_prefix(cls, v: str) -> str:
        v = v.strip().upper()
        if not (2 <= len(v) <= 5 and v.isalpha() and v.isascii()):
            raise ValueError("id_prefix muss aus 2-5 Buchstaben bestehen.")
        return v


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    """Anwendungs-Logging (unabhängig vom Sitzungsprotokoll)."""
    # Log-Level für die Konsole
    level: str = Field("WARNING",
        description="DEBUG, INFO, WARNING, ERROR oder CRITICAL")

    @field_validator("level")
    @classmethod
    def _check_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unbekanntes Log-Level: {v}")
        return v


# ─── GESAMT-CONFIG ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration der Studierendenverwaltung."""
    # Anzeigename in Banner und Überschriften
    app_name: str = Field("Studierendenverwaltung",
        description="Anzeigename")
    storage: StorageConfig = Field(default_factory=StorageConfig)
    admin: AdminConfig = Field(default_factory=AdminConfig)
    roster: RosterConfig = Field(default_factory=RosterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
