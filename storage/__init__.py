"""Persistenz (JSON-Datenbestand) und Sitzungsprotokoll."""

from storage.json_store import RosterStore
from storage.session_log import NullSessionLogger, SessionLogger

__all__ = ["RosterStore", "SessionLogger", "NullSessionLogger"]
