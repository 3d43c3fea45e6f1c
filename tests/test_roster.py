"""Tests für den RosterManager (CRUD, Suche, Kursbelegung, ID-Vergabe)."""

import pytest

from models.exceptions import NotFoundError, ValidationError
from models.roster import RosterManager
from models.student import Student


@pytest.fixture
def manager():
    return RosterManager()


@pytest.fixture
def filled(manager):
    """Drei Studierende in fester Reihenfolge."""
    manager.create_student("Anna", "Schmidt", "anna.schmidt@example.com", 21)
    manager.create_student("Ben", "Meyer", "ben.meyer@uni.de", 24)
    manager.create_student("Clara", "Schmitz", "clara@example.com", 19)
    return manager


# ─── ID-VERGABE ───────────────────────────────────────────────────────────────

class TestIdGeneration:
    def test_first_id(self, manager):
        assert manager.create_student("Anna", "Schmidt", "a@example.com", 20) == "STU1001"

    def test_ids_strictly_increasing(self, manager):
        ids = [manager.create_student("Anna", "Schmidt", f"a{i}@example.com", 20)
               for i in range(5)]
        numbers = [int(i[3:]) for i in ids]
        assert numbers == sorted(numbers)
        assert len(set(ids)) == 5

    def test_ids_not_reused_after_delete(self, manager):
        """Gelöschte IDs werden nie erneut vergeben."""
        first = manager.create_student("Anna", "Schmidt", "a@example.com", 20)
        manager.delete_student(first)
        second = manager.create_student("Ben", "Meyer", "b@example.com", 22)
        assert second != first
        assert second == "STU1002"

    def test_failed_create_consumes_no_id(self, manager):
        """Ungültige Anlage: nichts gespeichert, Zähler unverändert."""
        with pytest.raises(ValidationError):
            manager.create_student("Anna", "Schmidt", "a@example.com", 0)
        assert len(manager) == 0
        assert manager.next_sequence == 1001
        assert manager.create_student("Anna", "Schmidt", "a@example.com", 20) == "STU1001"

    def test_skips_ids_already_present(self):
        """Kollision mit vorhandener ID → nächster freier Kandidat."""
        existing = Student.create("STU1001", "Anna", "Schmidt", "a@example.com", 20)
        manager = RosterManager.restore([existing], next_sequence=1001)
        assert manager.create_student("Ben", "Meyer", "b@example.com", 22) == "STU1002"

    def test_custom_prefix(self):
        manager = RosterManager(id_prefix="MAT", first_sequence=1)
        assert manager.create_student("Anna", "Schmidt", "a@example.com", 20) == "MAT1"

    def test_restore_rejects_duplicate_ids(self):
        a = Student.create("STU1001", "Anna", "Schmidt", "a@example.com", 20)
        b = Student.create("STU1001", "Ben", "Meyer", "b@example.com", 22)
        with pytest.raises(ValidationError):
            RosterManager.restore([a, b], next_sequence=1002)


# ─── CRUD ─────────────────────────────────────────────────────────────────────

class TestCrud:
    def test_create_then_get(self, manager):
        sid = manager.create_student("Anna", "Schmidt", "anna@example.com", 21)
        s = manager.get_student(sid)
        assert (s.first_name, s.last_name, s.email, s.age) == (
            "Anna", "Schmidt", "anna@example.com", 21)
        assert s.gpa == 0.0
        assert sid in manager
        assert manager.student_exists(sid)
        assert manager.total_students == 1

    def test_get_unknown_raises(self, manager):
        with pytest.raises(NotFoundError) as exc:
            manager.get_student("STU9999")
        assert exc.value.student_id == "STU9999"
        assert "STU9999" in str(exc.value)

    def test_lookup_is_case_sensitive(self, filled):
        """Normalisierung der Eingabe ist Sache der Oberfläche."""
        with pytest.raises(NotFoundError):
            filled.get_student("stu1001")

    def test_delete(self, filled):
        assert filled.delete_student("STU1002") is True
        with pytest.raises(NotFoundError):
            filled.get_student("STU1002")
        assert len(filled) == 2

    def test_delete_unknown_returns_false(self, filled):
        assert filled.delete_student("STU4711") is False
        assert len(filled) == 3

    def test_get_all_preserves_insertion_order(self, filled):
        assert [s.student_id for s in filled.get_all_students()] == [
            "STU1001", "STU1002", "STU1003"]

    def test_get_all_returns_snapshot(self, filled):
        snapshot = filled.get_all_students()
        snapshot.clear()
        assert len(filled) == 3


# ─── ÄNDERN ───────────────────────────────────────────────────────────────────

class TestUpdate:
    @pytest.mark.parametrize("field, value, attr, expected", [
        ("firstname", "Berta", "first_name", "Berta"),
        ("LastName", "Müller", "last_name", "Müller"),
        ("EMAIL", "neu@example.org", "email", "neu@example.org"),
        ("age", 30, "age", 30),
        ("Age", " 42 ", "age", 42),
    ])
    def test_update_fields(self, filled, field, value, attr, expected):
        """Feldnamen sind unabhängig von Groß-/Kleinschreibung."""
        filled.update_student("STU1001", field, value)
        assert getattr(filled.get_student("STU1001"), attr) == expected

    def test_unknown_field_raises(self, filled):
        with pytest.raises(ValidationError):
            filled.update_student("STU1001", "gpa", "4.0")

    def test_non_integer_age_raises(self, filled):
        with pytest.raises(ValidationError) as exc:
            filled.update_student("STU1001", "age", "einundzwanzig")
        assert exc.value.field == "age"
        assert filled.get_student("STU1001").age == 21

    def test_out_of_range_age_keeps_old_value(self, filled):
        with pytest.raises(ValidationError):
            filled.update_student("STU1001", "age", "150")
        assert filled.get_student("STU1001").age == 21

    def test_invalid_email_keeps_old_value(self, filled):
        with pytest.raises(ValidationError):
            filled.update_student("STU1001", "email", "keine-mail")
        assert filled.get_student("STU1001").email == "anna.schmidt@example.com"

    def test_update_unknown_student(self, filled):
        with pytest.raises(NotFoundError):
            filled.update_student("STU9999", "age", 30)


# ─── SUCHE ────────────────────────────────────────────────────────────────────

class TestSearch:
    def test_search_by_id_case_insensitive(self, filled):
        assert [s.student_id for s in filled.search_students("stu1001")] == ["STU1001"]

    def test_search_by_name_prefix(self, filled):
        """'schmi' passt auf Schmidt und Schmitz, Reihenfolge wie angelegt."""
        result = filled.search_students("SCHMI")
        assert [s.last_name for s in result] == ["Schmidt", "Schmitz"]

    def test_search_by_email_domain(self, filled):
        assert [s.student_id for s in filled.search_students("uni.de")] == ["STU1002"]

    def test_search_first_name(self, filled):
        assert [s.first_name for s in filled.search_students("clara")] == ["Clara"]

    def test_search_no_match(self, filled):
        assert filled.search_students("zzz") == []

    def test_search_empty_roster(self, manager):
        assert manager.search_students("anna") == []


# ─── KURSBELEGUNG ─────────────────────────────────────────────────────────────

class TestCourses:
    def test_assign_course_updates_gpa(self, filled):
        s = filled.assign_course("STU1001", "cs101", "Intro", 3, 95)
        assert s.gpa == 4.0
        assert s.courses[0].code == "CS101"
        s = filled.assign_course("STU1001", "MATH201", "Lineare Algebra", 4, 65)
        assert s.gpa == pytest.approx(16 / 7)

    def test_assign_duplicate_is_silent_noop(self, filled):
        filled.assign_course("STU1001", "CS101", "Intro", 3, 95)
        s = filled.assign_course("STU1001", "CS101", "Intro", 3, 10)
        assert len(s.courses) == 1
        assert s.gpa == 4.0

    def test_assign_invalid_grade_changes_nothing(self, filled):
        with pytest.raises(ValidationError):
            filled.assign_course("STU1001", "CS101", "Intro", 3, 101)
        assert filled.get_student("STU1001").courses == []

    def test_assign_invalid_credits(self, filled):
        with pytest.raises(ValidationError):
            filled.assign_course("STU1001", "CS101", "Intro", 11, 80)

    def test_assign_unknown_student(self, filled):
        with pytest.raises(NotFoundError):
            filled.assign_course("STU9999", "CS101", "Intro", 3, 80)

    def test_remove_course(self, filled):
        filled.assign_course("STU1002", "CS101", "Intro", 3, 95)
        filled.assign_course("STU1002", "ENG120", "English", 2, 55)
        assert filled.remove_course("STU1002", "eng120") is True
        s = filled.get_student("STU1002")
        assert [c.code for c in s.courses] == ["CS101"]
        assert s.gpa == 4.0

    def test_remove_unknown_course_is_noop(self, filled):
        filled.assign_course("STU1002", "CS101", "Intro", 3, 85)
        assert filled.remove_course("STU1002", "PHYS110") is False
        s = filled.get_student("STU1002")
        assert len(s.courses) == 1
        assert s.gpa == 3.0

    def test_remove_course_unknown_student(self, filled):
        with pytest.raises(NotFoundError):
            filled.remove_course("STU9999", "CS101")


# ─── GPA-FILTER ───────────────────────────────────────────────────────────────

class TestMinGpa:
    def test_threshold_is_inclusive(self, filled):
        """GPA genau 3.0 ist enthalten."""
        filled.assign_course("STU1001", "CS101", "Intro", 3, 85)   # B → 3.0
        filled.assign_course("STU1002", "CS101", "Intro", 3, 95)   # A → 4.0
        filled.assign_course("STU1003", "CS101", "Intro", 3, 75)   # C → 2.0
        result = filled.get_students_by_min_gpa(3.0)
        assert [s.student_id for s in result] == ["STU1001", "STU1002"]

    def test_just_below_threshold_excluded(self, filled):
        """1000 Credits mit 2999 Punkten → GPA 2.999, knapp unter 3.0."""
        for i in range(99):
            filled.assign_course("STU1001", f"CS{100 + i}", "Kurs", 10, 85)   # B
        filled.assign_course("STU1001", "MA100", "Analysis", 9, 85)          # B
        filled.assign_course("STU1001", "EN100", "English", 1, 75)           # C
        student = filled.get_student("STU1001")
        assert len(student.courses) == 101
        assert student.gpa == pytest.approx(2.999)
        assert student not in filled.get_students_by_min_gpa(3.0)

    def test_weighted_gpa_below_threshold(self, filled):
        """10 Credits B + 1 Credit C → 32/11 ≈ 2.91, also nicht enthalten."""
        filled.assign_course("STU1001", "CS101", "Intro", 10, 85)
        filled.assign_course("STU1001", "ENG120", "English", 1, 75)
        assert filled.get_student("STU1001").gpa == pytest.approx(32 / 11)
        assert filled.get_students_by_min_gpa(3.0) == []

    def test_zero_threshold_returns_all(self, filled):
        assert len(filled.get_students_by_min_gpa(0.0)) == 3
