"""Sitzungsprotokoll: schreibt Admin-Aktionen in eine Datei pro Sitzung.

Zeilenformat:
  2026-10-19 14:03:11 | <session-id> | CREATE_STUDENT | id=STU1001, email=...

Ein Fehler beim Protokollieren darf nie die eigentliche Änderung abbrechen.
"""

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Gemeinsamer Logger aller Sitzungen; jede Sitzung hängt nur ihren Handler an
AUDIT_LOGGER_NAME = "roster.session"


class NullSessionLogger:
    """Ersatz, wenn kein Protokoll geöffnet werden konnte."""

    session_id: Optional[str] = None
    path: Optional[Path] = None

    def log_action(self, action: str, details: str = "") -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class SessionLogger(NullSessionLogger):
    """Protokolliert die Aktionen genau einer Admin-Sitzung.

    Schreibt über den festen Logger AUDIT_LOGGER_NAME (ohne Weitergabe an
    das Anwendungs-Log). Der FileHandler filtert auf die eigene session_id,
    gleichzeitig offene Sitzungen schreiben also nur in ihre eigene Datei.
    """

    def __init__(self, username: str, sessions_dir: Path):
        self.username = username
        self.session_id = str(uuid.uuid4())
        sessions_dir = Path(sessions_dir)
        sessions_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d%H%M%S")
        self.path = sessions_dir / f"session-{stamp}-{self.session_id}.log"

        self._handler = logging.FileHandler(self.path, mode="a", encoding="utf-8")
        self._handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(session_id)s | %(message)s",
            datefmt=_TIMESTAMP_FORMAT,
        ))
        self._handler.addFilter(self._is_own_record)
        self._audit = logging.getLogger(AUDIT_LOGGER_NAME)
        self._audit.setLevel(logging.INFO)
        self._audit.propagate = False
        self._audit.addHandler(self._handler)
        self._closed = False

        self.log_action("SESSION_START", f"username={username}")

    @classmethod
    def open(cls, username: str, sessions_dir: Path) -> NullSessionLogger:
        """Öffnet ein Protokoll oder liefert bei Fehlern einen NullSessionLogger."""
        try:
            return cls(username, sessions_dir)
        except OSError as e:
            logger.warning(f"Sitzungsprotokoll deaktiviert: {e}")
            return NullSessionLogger()

    def _is_own_record(self, record: logging.LogRecord) -> bool:
        return getattr(record, "session_id", None) == self.session_id

    def log_action(self, action: str, details: str = "") -> None:
        if self._closed:
            return
        try:
            self._audit.info(f"{action} | {details or ''}",
                             extra={"session_id": self.session_id})
        except Exception as e:
            logger.warning(f"Sitzungsprotokoll konnte nicht geschrieben werden: {e}")

    def close(self) -> None:
        if self._closed:
            return
        self.log_action("SESSION_END", f"username={self.username}")
        self._closed = True
        self._audit.removeHandler(self._handler)
        self._handler.close()
