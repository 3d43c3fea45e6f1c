"""Datenmodell für eine Kursbelegung mit Note (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.exceptions import validation_errors
from models.validators import (
    MAX_CREDITS,
    MAX_GRADE,
    MIN_CREDITS,
    MIN_GRADE,
    is_valid_course_code,
    is_valid_credits,
    is_valid_grade,
    normalize_course_code,
)

# (Untergrenze in %, Buchstabennote, Notenpunkte), absteigend geprüft
GRADE_SCALE: list[tuple[float, str, float]] = [
    (90.0, "A", 4.0),
    (80.0, "B", 3.0),
    (70.0, "C", 2.0),
    (60.0, "D", 1.0),
]
FAILING_LETTER = "F"
FAILING_POINTS = 0.0


class Course(BaseModel):
    """Eine Kursbelegung: Code, Name, Credits und Prozentnote.

    Zwei Kurse gelten als gleich, wenn ihr Code übereinstimmt. Darüber wird
    verhindert, dass Studierende denselben Kurs doppelt belegen.
    """

    model_config = ConfigDict(validate_assignment=True)

    code: str = Field(frozen=True)  # "CS101", "MATH201"
    name: str
    credits: int                    # 1..10
    grade: float                    # Prozent, 0..100

    @classmethod
    def create(cls, code: str, name: str, credits: int, grade: float) -> "Course":
        """Erzeugt einen Kurs; Regelverstöße → ValidationError."""
        with validation_errors():
            return cls(code=code, name=name, credits=credits, grade=grade)

    @field_validator("code", mode="before")
    @classmethod
    def _normalize_code(cls, v):
        if isinstance(v, str):
            v = normalize_course_code(v)
            if not is_valid_course_code(v):
                raise ValueError(
                    f"Ungültiger Kurscode '{v}' (Format wie CS101 oder MATH201)."
                )
        return v

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Kursname darf nicht leer sein.")
        return v

    @field_validator("credits")
    @classmethod
    def _check_credits(cls, v: int) -> int:
        if not is_valid_credits(v):
            raise ValueError(
                f"Credits müssen zwischen {MIN_CREDITS} und {MAX_CREDITS} liegen (erhalten: {v})."
            )
        return v

    @field_validator("grade")
    @classmethod
    def _check_grade(cls, v: float) -> float:
        if not is_valid_grade(v):
            raise ValueError(
                f"Note muss zwischen {MIN_GRADE:g} und {MAX_GRADE:g} liegen (erhalten: {v})."
            )
        return v

    # ─── Setter mit erneuter Validierung ───

    def set_name(self, name: str) -> None:
        with validation_errors():
            self.name = name

    def set_credits(self, credits: int) -> None:
        with validation_errors():
            self.credits = credits

    def set_grade(self, grade: float) -> None:
        with validation_errors():
            self.grade = grade

    # ─── Abgeleitete Werte ───

    @property
    def letter_grade(self) -> str:
        for threshold, letter, _ in GRADE_SCALE:
            if self.grade >= threshold:
                return letter
        return FAILING_LETTER

    @property
    def grade_point(self) -> float:
        """Notenpunkte auf der 4.0-Skala."""
        for threshold, _, points in GRADE_SCALE:
            if self.grade >= threshold:
                return points
        return FAILING_POINTS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Course):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __str__(self) -> str:
        return (
            f"{self.code} - {self.name} (Credits: {self.credits}, "
            f"Note: {self.grade:.1f}%, Buchstabe: {self.letter_grade})"
        )
