"""Thin command orchestrators for the CLI."""
