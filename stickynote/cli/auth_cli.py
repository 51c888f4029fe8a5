"""
Authentication commands.

    stickynote auth signin    email + password, session saved for later commands
    stickynote auth signup    create an account
    stickynote auth signout   forget the session (safe to repeat)
    stickynote auth whoami    show the signed-in email
"""

import typer

from stickynote.cli.common import fail, load_runtime
from stickynote.errors import StickyNoteError

auth_app = typer.Typer(help="Sign in, sign up, and sign out.")


@auth_app.command("signin")
def sign_in(
    email: str = typer.Option(..., "--email", prompt=True, help="Account email."),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="Account password."),
) -> None:
    """Sign in to your account."""
    runtime = load_runtime()
    try:
        user = runtime.session.sign_in(email, password)
    except StickyNoteError as e:
        raise fail(str(e))
    typer.echo(f"Signed in as {user['email']}.")


@auth_app.command("signup")
def sign_up(
    email: str = typer.Option(..., "--email", prompt=True, help="Account email."),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Account password.",
    ),
) -> None:
    """Create an account."""
    runtime = load_runtime()
    try:
        user = runtime.session.sign_up(email, password)
    except StickyNoteError as e:
        raise fail(str(e))

    if user is None:
        typer.echo("Account created. Check your email to confirm it, then run `stickynote auth signin`.")
        return
    typer.echo(f"Account created. Signed in as {user['email']}.")


@auth_app.command("signout")
def sign_out() -> None:
    """Sign out of your account."""
    runtime = load_runtime()
    try:
        runtime.session.sign_out()
    except StickyNoteError as e:
        raise fail(str(e))
    typer.echo("Signed out.")


@auth_app.command("whoami")
def who_am_i() -> None:
    """Show the signed-in account."""
    runtime = load_runtime()
    user = runtime.session.current_user
    if user is None:
        typer.echo("Not signed in.")
        raise typer.Exit(code=1)
    typer.echo(user["email"])
