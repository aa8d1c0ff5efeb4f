"""Cross-cutting utilities: logging, errors, validation and dependency injection."""
