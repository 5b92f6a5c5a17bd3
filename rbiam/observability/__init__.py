"""Structured logging for rbiam."""
