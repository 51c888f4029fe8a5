"""
Tests for the interactive `stickynote app` view.

Each test feeds a whole session of keystrokes through CliRunner's input.
"""

from stickynote.cli.main import cli
from tests.conftest import USER_EMAIL, USER_ID


def test_app_create_edit_delete_then_quit(cli_runner, signed_in_cli) -> None:
    keys = "\n".join(
        [
            "n", "First", "one",       # new note
            "n", "Second", "two",      # another
            "e 1", "", "two, edited",  # edit newest, keep title
            "d 2", "y",                # delete the older one
            "q",
        ]
    ) + "\n"

    result = cli_runner.invoke(cli, ["app"], input=keys)

    assert result.exit_code == 0
    assert USER_EMAIL in result.output
    assert [(r["title"], r["content"]) for r in signed_in_cli.rows] == [("Second", "two, edited")]


def test_app_shows_errors_and_keeps_running(cli_runner, signed_in_cli) -> None:
    signed_in_cli.seed(USER_ID, "A", "first")
    signed_in_cli.fail_ops["delete"] = "permission denied"

    result = cli_runner.invoke(cli, ["app"], input="d 1\ny\nx\nq\n")

    assert result.exit_code == 0
    assert "Error: Supabase error: permission denied" in result.output
    assert "Unknown action 'x'" in result.output
    assert len(signed_in_cli.rows) == 1


def test_app_sign_out_ends_session(cli_runner, signed_in_cli) -> None:
    result = cli_runner.invoke(cli, ["app"], input="s\n")

    assert result.exit_code == 0
    assert "Signed out." in result.output
    assert cli_runner.invoke(cli, ["auth", "whoami"]).exit_code == 1
