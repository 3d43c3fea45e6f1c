"""Demo-Daten."""
