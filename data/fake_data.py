"""Demo-Daten-Generator für die Studierendenverwaltung.

Legt reproduzierbare Studierende (fester Seed) über die öffentliche
RosterManager-API an, inklusive 0-5 Kursbelegungen aus dem Kurskatalog.
Alle erzeugten Werte erfüllen die Validierungsregeln der Modelle.
"""

import random
from typing import Optional

from config.defaults import COURSE_CATALOG
from models.roster import RosterManager

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Anna", "Ben", "Clara", "David", "Elif", "Finn", "Greta", "Hannah",
    "Jonas", "Lena", "Lukas", "Maria", "Noah", "Paul", "Sophie", "Tim",
    "Yusuf", "Zoe", "Emma", "Leon", "Mila", "Felix", "Ida", "Karl",
]

_LAST_NAMES = [
    "Müller", "Schmidt", "Schneider", "Fischer", "Weber", "Meyer",
    "Wagner", "Becker", "Schulz", "Hoffmann", "Koch", "Bauer",
    "Richter", "Klein", "Wolf", "Neumann", "Schwarz", "Braun",
    "Krüger", "Hartmann", "Lange", "Werner", "Krause", "Lehmann",
]

_MAIL_DOMAINS = ["uni-example.de", "student.example.org", "mail.example.com"]

_UMLAUTS = str.maketrans({"ä": "ae", "ö": "oe", "ü": "ue", "ß": "ss",
                          "Ä": "Ae", "Ö": "Oe", "Ü": "Ue"})


class FakeRosterGenerator:
    """Erzeugt Demo-Studierende mit Kursbelegungen."""

    def __init__(self, seed: int = 42):
        self.rng = random.Random(seed)

    def _email(self, first: str, last: str, used: set[str]) -> str:
        base = f"{first}.{last}".lower().translate(_UMLAUTS)
        domain = self.rng.choice(_MAIL_DOMAINS)
        email = f"{base}@{domain}"
        n = 2
        while email in used:
            email = f"{base}{n}@{domain}"
            n += 1
        used.add(email)
        return email

    def _grade(self) -> float:
        # Normalverteilt um 78, auf 0..100 begrenzt
        return round(min(100.0, max(0.0, self.rng.gauss(78, 12))), 1)

    def populate(self, manager: RosterManager, count: int = 20,
                 max_courses: int = 5) -> list[str]:
        """Legt `count` Studierende an und gibt ihre IDs zurück."""
        used_emails = {s.email for s in manager.get_all_students()}
        created: list[str] = []
        codes = list(COURSE_CATALOG)

        for _ in range(count):
            first = self.rng.choice(_FIRST_NAMES)
            last = self.rng.choice(_LAST_NAMES)
            student_id = manager.create_student(
                first, last, self._email(first, last, used_emails),
                self.rng.randint(18, 35),
            )
            created.append(student_id)

            n_courses = self.rng.randint(0, min(max_courses, len(codes)))
            for code in self.rng.sample(codes, n_courses):
                name, credits = COURSE_CATALOG[code]
                manager.assign_course(student_id, code, name, credits, self._grade())

        return created

    def generate(self, count: int = 20, manager: Optional[RosterManager] = None) -> RosterManager:
        """Erzeugt einen neuen (oder ergänzt einen bestehenden) Datenbestand."""
        manager = manager if manager is not None else RosterManager()
        self.populate(manager, count)
        return manager
