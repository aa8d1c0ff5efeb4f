"""Presentation layer: CLI, view models and navigation."""
