"""Observability – structured logging for the search layer."""
