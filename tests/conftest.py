"""
Shared pytest configuration for the sticky note test suite.

This file centralizes reusable testing utilities so that:
    • every test talks to the same in-memory Supabase double
    • clocks are fixed, so `updated_at` assertions are exact
    • CLI tests run against the fake without any network or real .env
"""

from datetime import datetime, timezone

import pytest
from typer.testing import CliRunner

from stickynote.session import SessionProvider, TokenStore
from stickynote.supabase_client import NotesService
from tests.fake_supabase import FakeSupabaseClient

USER_EMAIL = "ada@example.com"
USER_PASSWORD = "correct horse"
USER_ID = "user-ada"

FIXED_NOW = datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc)


# ============================================================================
# SHARED TEST INFRASTRUCTURE
# ============================================================================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provides a fresh Typer CliRunner instance for CLI tests."""
    return CliRunner()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


# ============================================================================
# SUPABASE DOUBLES
# ============================================================================


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    """A fake with one registered (but not yet signed-in) account."""
    client = FakeSupabaseClient()
    client.auth.add_account(USER_EMAIL, USER_PASSWORD, USER_ID)
    return client


@pytest.fixture
def token_store(tmp_path) -> TokenStore:
    return TokenStore(tmp_path / "session.json")


@pytest.fixture
def session(fake_client, token_store) -> SessionProvider:
    return SessionProvider(fake_client.auth, token_store=token_store)


@pytest.fixture
def signed_in_session(session) -> SessionProvider:
    session.sign_in(USER_EMAIL, USER_PASSWORD)
    return session


@pytest.fixture
def service(fake_client, signed_in_session, fixed_clock) -> NotesService:
    return NotesService(fake_client, session=signed_in_session, clock=fixed_clock)


# ============================================================================
# CLI WIRING
# ============================================================================


@pytest.fixture
def cli_env(monkeypatch, tmp_path, fake_client):
    """
    Point the CLI at the fake client.

    Credentials are dummies; `create_client` is replaced so build_runtime()
    wires the fake instead of the real SDK. The session file lives in
    tmp_path, so sign-ins persist across invocations within one test.
    """
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "anon-key")
    monkeypatch.setenv("STICKYNOTE_SESSION_FILE", str(tmp_path / "session.json"))
    monkeypatch.setattr("stickynote.supabase_client.create_client", lambda url, key: fake_client)
    return fake_client


@pytest.fixture
def signed_in_cli(cli_env, tmp_path):
    """CLI wiring with Ada already signed in (tokens saved to the session file)."""
    store = TokenStore(tmp_path / "session.json")
    SessionProvider(cli_env.auth, token_store=store).sign_in(USER_EMAIL, USER_PASSWORD)
    return cli_env
