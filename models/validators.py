"""Formatregeln für Eingaben (Namen, E-Mail, Kurscodes, Wertebereiche).

Werden von den Pydantic-Validatoren der Modelle und von den Eingabe-Prompts
der Konsole gemeinsam genutzt.
"""

import re

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
COURSE_CODE_PATTERN = re.compile(r"^[A-Z]{2,4}[0-9]{3}$")

MIN_AGE = 1
MAX_AGE = 149
MIN_CREDITS = 1
MAX_CREDITS = 10
MIN_GRADE = 0.0
MAX_GRADE = 100.0


def is_valid_name(name: str) -> bool:
    """Buchstaben, Wörter durch genau ein Leerzeichen getrennt."""
    if not name or name != name.strip() or "  " in name:
        return False
    return all(ch.isalpha() or ch == " " for ch in name)


def is_valid_email(email: str) -> bool:
    if not email or not email.strip():
        return False
    return EMAIL_PATTERN.match(email) is not None


def is_valid_course_code(code: str) -> bool:
    """Erwartet bereits normalisierte Großschreibung (z.B. "CS101", "MATH201")."""
    if not code:
        return False
    return COURSE_CODE_PATTERN.match(code) is not None


def is_valid_age(age: int) -> bool:
    return MIN_AGE <= age <= MAX_AGE


def is_valid_credits(credits: int) -> bool:
    return MIN_CREDITS <= credits <= MAX_CREDITS


def is_valid_grade(grade: float) -> bool:
    return MIN_GRADE <= grade <= MAX_GRADE


def normalize_course_code(code: str) -> str:
    return code.strip().upper()


def normalize_student_id(student_id: str) -> str:
    """Eingegebene IDs werden wie im Menü getrimmt und großgeschrieben."""
    return student_id.strip().upper()
