"""Telemetry, settings, and I/O collaborators."""
