"""Typer sub-applications of the focusflow CLI."""
