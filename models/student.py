"""Datenmodell für Studierende mit Kursbelegungen und GPA (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from models.course import Course
from models.exceptions import validation_errors
from models.validators import (
    MAX_AGE,
    MIN_AGE,
    is_valid_age,
    is_valid_email,
    is_valid_name,
    normalize_course_code,
)


class Student(BaseModel):
    """Repräsentiert eine:n Studierende:n.

    Die Kursliste ist privat und wird nur über add_course/remove_course
    verändert. Nach jeder Änderung wird der GPA sofort neu berechnet;
    Lesen von `gpa` rechnet nie nach.
    """

    model_config = ConfigDict(validate_assignment=True)

    student_id: str = Field(frozen=True)  # "STU1001"
    first_name: str
    last_name: str
    email: str
    age: int

    _courses: list[Course] = PrivateAttr(default_factory=list)
    _gpa: float = PrivateAttr(default=0.0)

    @classmethod
    def create(cls, student_id: str, first_name: str, last_name: str,
               email: str, age: int) -> "Student":
        """Erzeugt Studierende; Regelverstöße → ValidationError."""
        with validation_errors():
            return cls(student_id=student_id, first_name=first_name,
                       last_name=last_name, email=email, age=age)

    # ─── Validierung ───

    @field_validator("first_name", "last_name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        v = v.strip()
        if not is_valid_name(v):
            raise ValueError(f"Ungültiger Name '{v}': nur Buchstaben und Leerzeichen erlaubt.")
        return v

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        v = v.strip()
        if not is_valid_email(v):
            raise ValueError(f"Ungültige E-Mail-Adresse '{v}' (Beispiel: user@example.com).")
        return v

    @field_validator("age")
    @classmethod
    def _check_age(cls, v: int) -> int:
        if not is_valid_age(v):
            raise ValueError(f"Alter muss zwischen {MIN_AGE} und {MAX_AGE} liegen (erhalten: {v}).")
        return v

    # ─── Setter ───

    def set_first_name(self, value: str) -> None:
        with validation_errors():
            self.first_name = value

    def set_last_name(self, value: str) -> None:
        with validation_errors():
            self.last_name = value

    def set_email(self, value: str) -> None:
        with validation_errors():
            self.email = value

    def set_age(self, value: int) -> None:
        with validation_errors():
            self.age = value

    # ─── Kurse ───

    @property
    def courses(self) -> list[Course]:
        """Kopien der Kurse in Belegungsreihenfolge.

        Änderungen an den Kopien wirken nicht zurück; Noten und Credits
        ändern sich nur über add_course/remove_course.
        """
        return [c.model_copy() for c in self._courses]

    @property
    def gpa(self) -> float:
        return self._gpa

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def has_course(self, code: str) -> bool:
        code = normalize_course_code(code)
        return any(c.code == code for c in self._courses)

    def get_course(self, code: str) -> Optional[Course]:
        code = normalize_course_code(code)
        course = next((c for c in self._courses if c.code == code), None)
        return course.model_copy() if course is not None else None

    def add_course(self, course: Optional[Course]) -> bool:
        """Belegt einen Kurs. Gibt False zurück, wenn nichts geändert wurde."""
        if course is None or course in self._courses:
            return False
        self._courses.append(course.model_copy())
        self.calculate_gpa()
        return True

    def remove_course(self, code: str) -> bool:
        """Entfernt alle Kurse mit diesem Code; GPA wird immer neu berechnet."""
        code = normalize_course_code(code)
        before = len(self._courses)
        self._courses = [c for c in self._courses if c.code != code]
        self.calculate_gpa()
        return len(self._courses) < before

    def calculate_gpa(self) -> float:
        """Credit-gewichteter Mittelwert der Notenpunkte, 0.0 ohne Kurse."""
        total_credits = sum(c.credits for c in self._courses)
        if total_credits <= 0:
            self._gpa = 0.0
        else:
            total_points = sum(c.grade_point * c.credits for c in self._courses)
            self._gpa = total_points / total_credits
        return self._gpa

    def __str__(self) -> str:
        lines = [
            f"ID: {self.student_id}",
            f"Name: {self.full_name}",
            f"E-Mail: {self.email}",
            f"Alter: {self.age}",
            f"GPA: {self.gpa:.2f}",
            "Belegte Kurse:",
        ]
        if not self._courses:
            lines.append("  Keine Kurse belegt")
        lines.extend(f"  - {c}" for c in self._courses)
        return "\n".join(lines)
