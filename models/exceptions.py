"""Fehlerklassen der Studierendenverwaltung.

ValidationError und NotFoundError werden von Modellen und RosterManager
synchron geworfen, bevor irgendein Zustand verändert wird.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from pydantic import ValidationError as PydanticValidationError


class RosterError(Exception):
    """Basisklasse aller fachlichen Fehler."""


class ValidationError(RosterError, ValueError):
    """Eingabe verletzt eine fachliche Regel (Alter, Note, Credits, Feld, ...)."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(RosterError, LookupError):
    """Referenzierte Studierenden-ID existiert nicht."""

    def __init__(self, student_id: str):
        super().__init__(f"Keine Studierenden mit ID '{student_id}' gefunden.")
        self.student_id = student_id


def describe_pydantic_error(exc: PydanticValidationError) -> tuple[str, Optional[str]]:
    """Wandelt einen Pydantic-Fehler in (Meldung, erstes Feld) um."""
    parts: list[str] = []
    first_field: Optional[str] = None
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or None
        if first_field is None:
            first_field = field
        # Bei ValueError aus eigenen Validatoren die Originalmeldung nehmen
        ctx_error = (err.get("ctx") or {}).get("error")
        msg = str(ctx_error) if ctx_error is not None else err["msg"]
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts), first_field


@contextmanager
def validation_errors() -> Iterator[None]:
    """Übersetzt Pydantic-Validierungsfehler in ValidationError."""
    try:
        yield
    except PydanticValidationError as e:
        message, field = describe_pydantic_error(e)
        raise ValidationError(message, field=field) from e
