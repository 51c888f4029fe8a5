"""Typer command-line interface for the sticky note client."""
