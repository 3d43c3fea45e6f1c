"""Konsolen-Oberfläche: Rich-Darstellung und interaktives Menü."""
