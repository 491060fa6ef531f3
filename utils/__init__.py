"""Logging and redaction helpers."""
