"""RosterManager: Verwaltung aller Studierenden (CRUD, Suche, Kursbelegung).

Der Manager besitzt die Zuordnung student_id → Student und den Zähler für
neue IDs. Persistenz und Audit-Log sind Aufgabe des Aufrufers.
"""

import logging
from typing import Iterable, Union

from models.course import Course
from models.exceptions import NotFoundError, ValidationError
from models.student import Student

logger = logging.getLogger(__name__)

DEFAULT_ID_PREFIX = "STU"
DEFAULT_FIRST_SEQUENCE = 1001

# Feldname (klein geschrieben) → Setter auf Student
UPDATABLE_FIELDS = {
    "firstname": Student.set_first_name,
    "lastname": Student.set_last_name,
    "email": Student.set_email,
    "age": Student.set_age,
}


class RosterManager:
    """Besitzt alle Studierenden und vergibt eindeutige IDs.

    Nicht thread-sicher: die ID-Vergabe (lesen, dann hochzählen) ist nicht
    atomar. Gedacht für genau einen interaktiven Aufrufer.
    """

    def __init__(self, id_prefix: str = DEFAULT_ID_PREFIX,
                 first_sequence: int = DEFAULT_FIRST_SEQUENCE):
        self.id_prefix = id_prefix
        self.next_sequence = first_sequence
        self._students: dict[str, Student] = {}

    @classmethod
    def restore(cls, students: Iterable[Student], next_sequence: int,
                id_prefix: str = DEFAULT_ID_PREFIX) -> "RosterManager":
        """Baut einen Manager aus gespeicherten Studierenden wieder auf."""
        manager = cls(id_prefix=id_prefix, first_sequence=next_sequence)
        for student in students:
            if student.student_id in manager._students:
                raise ValidationError(
                    f"Doppelte Studierenden-ID im Datenbestand: {student.student_id}",
                    field="student_id",
                )
            manager._students[student.student_id] = student
        return manager

    # ─── ID-Vergabe ───

    def _generate_unique_id(self) -> str:
        while True:
            candidate = f"{self.id_prefix}{self.next_sequence}"
            self.next_sequence += 1
            if candidate not in self._students:
                return candidate

    # ─── CRUD ───

    def create_student(self, first_name: str, last_name: str, email: str,
                       age: int) -> str:
        """Legt Studierende an und gibt die neue ID zurück."""
        sequence_before = self.next_sequence
        student_id = self._generate_unique_id()
        try:
            student = Student.create(student_id, first_name, last_name, email, age)
        except ValidationError:
            # Fehlgeschlagene Anlage verbraucht keine ID
            self.next_sequence = sequence_before
            raise
        self._students[student_id] = student
        logger.info(f"Studierende angelegt: {student_id}")
        return student_id

    def get_student(self, student_id: str) -> Student:
        student = self._students.get(student_id)
        if student is None:
            raise NotFoundError(student_id)
        return student

    def update_student(self, student_id: str, field: str,
                       value: Union[str, int]) -> None:
        """Ändert genau ein Feld (firstname, lastname, email, age)."""
        student = self.get_student(student_id)
        key = field.strip().lower()
        setter = UPDATABLE_FIELDS.get(key)
        if setter is None:
            raise ValidationError(
                f"Unbekanntes Feld: '{field}' "
                f"(erlaubt: {', '.join(UPDATABLE_FIELDS)})",
                field=field,
            )
        if key == "age":
            try:
                value = int(str(value).strip())
            except ValueError:
                raise ValidationError(
                    f"Ungültiger Wert für age: '{value}' (ganze Zahl erwartet).",
                    field="age",
                ) from None
        setter(student, value)
        logger.info(f"Studierende {student_id}: Feld '{key}' geändert")

    def delete_student(self, student_id: str) -> bool:
        if student_id not in self._students:
            return False
        del self._students[student_id]
        logger.info(f"Studierende gelöscht: {student_id}")
        return True

    # ─── Suche & Abfragen ───

    def search_students(self, term: str) -> list[Student]:
        """Teilstring-Suche (ohne Groß-/Kleinschreibung) in ID, Namen und E-Mail."""
        needle = term.lower()
        return [
            s for s in self._students.values()
            if needle in s.student_id.lower()
            or needle in s.first_name.lower()
            or needle in s.last_name.lower()
            or needle in s.email.lower()
        ]

    def get_all_students(self) -> list[Student]:
        return list(self._students.values())

    def get_students_by_min_gpa(self, threshold: float) -> list[Student]:
        """Alle Studierenden mit gpa >= threshold (Grenze inklusive)."""
        return [s for s in self._students.values() if s.gpa >= threshold]

    @property
    def total_students(self) -> int:
        return len(self._students)

    def student_exists(self, student_id: str) -> bool:
        return student_id in self._students

    def __len__(self) -> int:
        return len(self._students)

    def __contains__(self, student_id: object) -> bool:
        return student_id in self._students

    # ─── Kursbelegung ───

    def assign_course(self, student_id: str, code: str, name: str,
                      credits: int, grade: float) -> Student:
        """Belegt einen Kurs. Doppelte Codes werden stillschweigend ignoriert."""
        student = self.get_student(student_id)
        course = Course.create(code, name, credits, grade)
        if student.add_course(course):
            logger.info(f"Kurs {course.code} für {student_id} belegt (GPA {student.gpa:.2f})")
        else:
            logger.debug(f"Kurs {course.code} bei {student_id} bereits belegt – ignoriert")
        return student

    def remove_course(self, student_id: str, code: str) -> bool:
        """Entfernt einen Kurs. False, wenn der Kurs nicht belegt war."""
        student = self.get_student(student_id)
        if not student.remove_course(code):
            logger.debug(f"Kurs {code} bei {student_id} nicht belegt – nichts entfernt")
            return False
        logger.info(f"Kurs {code} bei {student_id} entfernt (GPA {student.gpa:.2f})")
        return True
