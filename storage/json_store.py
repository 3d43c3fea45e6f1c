"""JSON-Persistenz für den RosterManager (Pydantic v2).

Das Dateiformat gehört allein dieser Schicht; Modelle und Manager kennen es
nicht. Gespeicherte GPA-Werte gibt es nicht: der GPA wird beim Laden aus den
Kursen neu berechnet.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from models.course import Course
from models.roster import DEFAULT_FIRST_SEQUENCE, DEFAULT_ID_PREFIX, RosterManager
from models.student import Student

logger = logging.getLogger(__name__)

DATA_VERSION = "1.0"


class StoredStudent(BaseModel):
    """Eine:r Studierende:r inklusive Kursliste, wie in der Datei abgelegt."""

    student_id: str
    first_name: str
    last_name: str
    email: str
    age: int
    courses: list[Course] = []

    @classmethod
    def from_student(cls, student: Student) -> "StoredStudent":
        return cls(
            student_id=student.student_id,
            first_name=student.first_name,
            last_name=student.last_name,
            email=student.email,
            age=student.age,
            courses=student.courses,
        )

    def to_student(self) -> Student:
        student = Student.create(self.student_id, self.first_name,
                                 self.last_name, self.email, self.age)
        for course in self.courses:
            student.add_course(course)
        return student


class RosterFile(BaseModel):
    """Vollständiger Datenbestand einer Datei."""

    data_version: str = DATA_VERSION
    saved_at: Optional[datetime] = None
    id_prefix: str = DEFAULT_ID_PREFIX
    next_sequence: int = DEFAULT_FIRST_SEQUENCE
    students: list[StoredStudent] = []


class RosterStore:
    """Lädt und speichert einen RosterManager als JSON-Datei."""

    def __init__(self, path: Path, id_prefix: str = DEFAULT_ID_PREFIX,
                 first_sequence: int = DEFAULT_FIRST_SEQUENCE):
        self.path = Path(path)
        self.id_prefix = id_prefix
        self.first_sequence = first_sequence

    def _empty(self) -> RosterManager:
        return RosterManager(id_prefix=self.id_prefix,
                             first_sequence=self.first_sequence)

    # ─── Laden ───

    def load(self) -> RosterManager:
        """Lädt den Datenbestand; bei fehlender oder defekter Datei leer."""
        if not self.path.exists() or self.path.stat().st_size == 0:
            logger.info(f"Kein Datenbestand unter {self.path} – starte leer")
            return self._empty()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                stored = RosterFile.model_validate_json(f.read())
            return RosterManager.restore(
                (s.to_student() for s in stored.students),
                next_sequence=stored.next_sequence,
                id_prefix=stored.id_prefix,
            )
        except Exception as e:
            logger.warning(
                f"Datenbestand {self.path} konnte nicht geladen werden – "
                f"starte mit leerem Bestand. Details: {e}"
            )
            return self._empty()

    # ─── Speichern ───

    def _serialize(self, manager: RosterManager) -> str:
        stored = RosterFile(
            saved_at=datetime.now(timezone.utc),
            id_prefix=manager.id_prefix,
            next_sequence=manager.next_sequence,
            students=[StoredStudent.from_student(s)
                      for s in manager.get_all_students()],
        )
        return stored.model_dump_json(indent=2)

    def save(self, manager: RosterManager, path: Optional[Path] = None) -> Path:
        """Speichert den kompletten Datenbestand. Schreibfehler → OSError."""
        target = Path(path) if path is not None else self.path
        target.parent.mkdir(parents=True, exist_ok=True)
        payload = self._serialize(manager)
        with open(target, "w", encoding="utf-8") as f:
            f.write(payload)
        logger.debug(f"{len(manager)} Studierende gespeichert: {target}")
        return target

    def save_versioned(self, manager: RosterManager) -> Path:
        """Speichert eine Sicherungskopie mit Zeitstempel im Dateinamen."""
        ts = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
        versioned = self.path.parent / f"{self.path.stem}_{ts}{self.path.suffix}"
        return self.save(manager, versioned)
