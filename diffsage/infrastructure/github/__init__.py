"""GitHub Actions integration."""

from .output import write_github_outputs, write_github_step_summary

__all__ = ["write_github_outputs", "write_github_step_summary"]
