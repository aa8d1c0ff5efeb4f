"""Core entities and interfaces for omnisearch."""
