"""
logging_utils.py

Small logging helpers shared by the CLI and the note list controller.

Output goes through Typer's echo so it behaves the same under a real
terminal and under `typer.testing.CliRunner`. There is no logging
framework here on purpose; messages are short, plain-English lines.
"""

import typer


def log_verbose(message: str, verbose: bool) -> None:
    """
    Print a high-level progress message when verbose mode is enabled.

    Parameters
    ----------
    message : str
        Short description of what the client is doing
        (e.g., "Loading notes...", "Deleting note...").
    verbose : bool
        When False, this function does nothing.
    """
    if verbose:
        typer.echo(message)


def log_error(message: str) -> None:
    """Print an error line to stderr."""
    typer.secho(message, err=True, fg=typer.colors.RED)
