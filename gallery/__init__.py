"""Domain core for the gallery management application."""
