"""Auswertungen über den Datenbestand."""
