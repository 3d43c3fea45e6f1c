from config.schema import (
    AdminConfig,
    AppConfig,
    LoggingConfig,
    RosterConfig,
    StorageConfig,
)


def default_app_config() -> AppConfig:
    """Standard-Konfiguration, entspricht dem Verhalten ohne Config-Datei.

    Datenbestand:  data/students.json
    Protokolle:    data/sessions/
    Admin:         admin / admin123 (bitte mit `config passwd` ändern)
    IDs:           STU1001, STU1002, ...
    """
    return AppConfig(
        app_name="Studierendenverwaltung",
        storage=StorageConfig(),
        admin=AdminConfig(),
        roster=RosterConfig(),
        logging=LoggingConfig(),
    )


# Kurskatalog für Demo-Daten: Code → (Name, Credits)
COURSE_CATALOG: dict[str, tuple[str, int]] = {
    "CS101": ("Einführung in die Informatik", 5),
    "CS201": ("Algorithmen und Datenstrukturen", 6),
    "CS305": ("Datenbanksysteme", 5),
    "MATH101": ("Analysis I", 8),
    "MATH201": ("Lineare Algebra", 8),
    "STAT210": ("Statistik", 4),
    "PHYS110": ("Experimentalphysik", 6),
    "ECON100": ("Grundlagen der VWL", 4),
    "ENG120": ("Academic English", 2),
    "PHIL150": ("Logik und Argumentation", 3),
}
