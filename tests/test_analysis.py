"""Tests für Statistik und Demo-Daten."""

import pytest
from rich.console import Console

from analysis.statistics import RosterStatistics
from config.defaults import COURSE_CATALOG
from data.fake_data import FakeRosterGenerator
from models.roster import RosterManager


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _make_manager() -> RosterManager:
    """STU1001: GPA 4.0, STU1002: GPA 3.0, STU1003: ohne Kurse."""
    manager = RosterManager()
    manager.create_student("Anna", "Schmidt", "anna@example.com", 21)
    manager.create_student("Ben", "Meyer", "ben@example.com", 24)
    manager.create_student("Clara", "Schmitz", "clara@example.com", 19)
    manager.assign_course("STU1001", "CS101", "Intro", 3, 95)
    manager.assign_course("STU1001", "MATH101", "Analysis I", 8, 91)
    manager.assign_course("STU1002", "CS101", "Intro", 3, 85)
    return manager


# ─── STATISTIK ────────────────────────────────────────────────────────────────

class TestRosterStatistics:
    def test_counts(self):
        stats = RosterStatistics.from_manager(_make_manager())
        assert stats.total_students == 3
        assert stats.students_with_courses == 2
        assert stats.total_enrollments == 3

    def test_average_gpa_includes_students_without_courses(self):
        """(4.0 + 3.0 + 0.0) / 3."""
        stats = RosterStatistics.from_manager(_make_manager())
        assert stats.average_gpa == pytest.approx(7 / 3)

    def test_letter_distribution(self):
        stats = RosterStatistics.from_manager(_make_manager())
        assert stats.letter_distribution == {"A": 2, "B": 1, "C": 0, "D": 0, "F": 0}

    def test_honor_roll_inclusive_threshold(self):
        """Grenze 3.0 inklusive: Anna und Ben, in Anlage-Reihenfolge."""
        stats = RosterStatistics.from_manager(_make_manager(), threshold=3.0)
        assert [e.student_id for e in stats.honor_roll] == ["STU1001", "STU1002"]
        assert stats.honor_roll[0].name == "Anna Schmidt"

    def test_honor_roll_higher_threshold(self):
        stats = RosterStatistics.from_manager(_make_manager(), threshold=3.5)
        assert [e.student_id for e in stats.honor_roll] == ["STU1001"]

    def test_empty_roster(self):
        stats = RosterStatistics.from_manager(RosterManager())
        assert stats.total_students == 0
        assert stats.average_gpa == 0.0
        assert stats.honor_roll == []

    def test_print_rich_uses_given_console(self):
        console = Console(record=True, width=120)
        RosterStatistics.from_manager(_make_manager()).print_rich(console)
        text = console.export_text()
        assert "Statistik" in text
        assert "Anna Schmidt" in text
        assert "2.33" in text

    def test_print_rich_empty(self):
        console = Console(record=True, width=120)
        RosterStatistics.from_manager(RosterManager()).print_rich(console)
        assert "Keine Studierenden" in console.export_text()


# ─── DEMO-DATEN ───────────────────────────────────────────────────────────────

class TestFakeRosterGenerator:
    def test_populate_count(self):
        manager = RosterManager()
        ids = FakeRosterGenerator(seed=42).populate(manager, count=15)
        assert len(ids) == 15
        assert len(manager) == 15
        assert ids == [s.student_id for s in manager.get_all_students()]

    def test_reproducible_with_seed(self):
        """Gleicher Seed → identische Daten."""
        a = FakeRosterGenerator(seed=7).generate(10)
        b = FakeRosterGenerator(seed=7).generate(10)
        assert [(s.full_name, s.email, s.gpa) for s in a.get_all_students()] == \
               [(s.full_name, s.email, s.gpa) for s in b.get_all_students()]

    def test_emails_unique(self):
        manager = FakeRosterGenerator(seed=1).generate(60)
        emails = [s.email for s in manager.get_all_students()]
        assert len(emails) == len(set(emails)), "Doppelte E-Mail-Adressen erzeugt!"

    def test_generated_values_within_rules(self):
        """Alle Werte liegen in den erlaubten Bereichen."""
        manager = FakeRosterGenerator(seed=3).generate(30)
        for s in manager.get_all_students():
            assert 18 <= s.age <= 35
            assert 0.0 <= s.gpa <= 4.0
            assert len(s.courses) <= 5
            for c in s.courses:
                assert c.code in COURSE_CATALOG
                assert c.credits == COURSE_CATALOG[c.code][1]
                assert 0.0 <= c.grade <= 100.0

    def test_generate_extends_existing_manager(self):
        manager = RosterManager()
        manager.create_student("Anna", "Schmidt", "anna@example.com", 21)
        FakeRosterGenerator(seed=42).generate(5, manager=manager)
        assert len(manager) == 6
        assert manager.get_student("STU1001").first_name == "Anna"
        assert "STU1006" in manager
