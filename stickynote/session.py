"""
Session provider: the signed-in identity as an observable value.

Supabase's auth client keeps the session in memory for the lifetime of the
process. This module adds the two things the note client needs on top:

    • an observable `current_user` with explicit subscribe/unsubscribe, so
      the note list controller reacts to sign-in and sign-out without
      reading global state
    • a small token file, so a sign-in survives between CLI invocations

Listeners are notified only when the identity actually changes (a
different user id, or signed-in ↔ signed-out).
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, List, Optional

import httpx
from supabase import AuthError as SupabaseAuthError

from stickynote.errors import AuthError
from stickynote.types import SessionListener, SessionUser, StoredTokens


def _to_session_user(resp: Any) -> Optional[SessionUser]:
    """Extract a SessionUser from an auth response (or None)."""
    user = getattr(resp, "user", None)
    if user is None:
        return None
    return {"id": str(user.id), "email": getattr(user, "email", None) or ""}


# ---------------------------------------------------------------------------
# Token persistence
# ---------------------------------------------------------------------------


class TokenStore:
    """
    JSON file holding the access/refresh token pair.

    The file is written with owner-only permissions. A missing or unreadable
    file simply means "not signed in".
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Optional[StoredTokens]:
        if not self.path.exists():
            return None

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            raw = None

        if not isinstance(raw, dict):
            # A corrupt file cannot be used to restore anything.
            self.clear()
            return None

        if not raw.get("access_token") or not raw.get("refresh_token"):
            return None
        return {"access_token": raw["access_token"], "refresh_token": raw["refresh_token"]}

    def save(self, access_token: str, refresh_token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"access_token": access_token, "refresh_token": refresh_token}
        self.path.write_text(json.dumps(payload), encoding="utf-8")
        os.chmod(self.path, 0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


# ---------------------------------------------------------------------------
# SessionProvider
# ---------------------------------------------------------------------------


class SessionProvider:
    """
    Wraps a Supabase auth client (`client.auth`) and publishes the identity.

    Parameters
    ----------
    auth : Any
        The Supabase auth client, or a fake exposing the same methods:
        get_user, get_session, set_session, sign_in_with_password,
        sign_up, sign_out.
    token_store : TokenStore | None
        Where to persist tokens. Without one, sessions last only as long
        as the process.
    """

    def __init__(self, auth: Any, token_store: Optional[TokenStore] = None) -> None:
        self.auth = auth
        self.token_store = token_store
        self._user: Optional[SessionUser] = None
        self._listeners: List[SessionListener] = []

    # -----------------------------------------------------------------------
    # Observable identity
    # -----------------------------------------------------------------------

    @property
    def current_user(self) -> Optional[SessionUser]:
        return self._user

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a listener for identity changes.

        Returns a callable that removes the listener again. Calling it more
        than once is harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, user: Optional[SessionUser]) -> None:
        previous = self._user
        self._user = user

        previous_id = previous["id"] if previous else None
        current_id = user["id"] if user else None
        if previous_id == current_id:
            return

        # Copy: a listener may unsubscribe while being notified.
        for listener in list(self._listeners):
            listener(user)

    # -----------------------------------------------------------------------
    # Identity resolution
    # -----------------------------------------------------------------------

    def get_current_user(self) -> Optional[SessionUser]:
        """
        Ask the auth provider who is signed in, and publish the answer.

        An expired or missing session is reported as None, not as an error.

        Raises
        ------
        AuthError
            If the auth provider cannot be reached.
        """
        try:
            resp = self.auth.get_user()
        except SupabaseAuthError:
            resp = None
        except httpx.HTTPError as e:
            raise AuthError(f"Could not reach the auth provider: {e}") from e

        user = _to_session_user(resp)
        self._publish(user)
        return user

    def restore(self) -> Optional[SessionUser]:
        """
        Re-establish a session from the token file, if one was saved.

        Tokens the provider no longer accepts are discarded. When the provider
        cannot be reached the tokens are kept and AuthError is raised.
        """
        tokens = self.token_store.load() if self.token_store is not None else None
        if tokens is not None:
            try:
                self.auth.set_session(tokens["access_token"], tokens["refresh_token"])
            except SupabaseAuthError:
                if self.token_store is not None:
                    self.token_store.clear()
            except httpx.HTTPError as e:
                raise AuthError(f"Could not reach the auth provider: {e}") from e
            else:
                # The refresh may have rotated the tokens.
                self._persist(self.auth.get_session())

        return self.get_current_user()

    def _persist(self, session: Any) -> None:
        if self.token_store is None or session is None:
            return
        self.token_store.save(session.access_token, session.refresh_token)

    # -----------------------------------------------------------------------
    # Sign in / sign up / sign out
    # -----------------------------------------------------------------------

    def sign_in(self, email: str, password: str) -> SessionUser:
        """
        Sign in with email and password.

        Raises
        ------
        AuthError
            If the provider rejects the credentials or cannot be reached.
        """
        try:
            resp = self.auth.sign_in_with_password({"email": email, "password": password})
        except SupabaseAuthError as e:
            raise AuthError(f"Sign-in failed: {e}") from e
        except httpx.HTTPError as e:
            raise AuthError(f"Sign-in failed: could not reach the auth provider: {e}") from e

        user = _to_session_user(resp)
        if user is None:
            raise AuthError("Sign-in failed: no user returned")

        self._persist(getattr(resp, "session", None))
        self._publish(user)
        return user

    def sign_up(self, email: str, password: str) -> Optional[SessionUser]:
        """
        Create an account.

        Returns the signed-in user, or None when the project requires email
        confirmation before the first sign-in (no session is issued then).
        """
        try:
            resp = self.auth.sign_up({"email": email, "password": password})
        except SupabaseAuthError as e:
            raise AuthError(f"Sign-up failed: {e}") from e
        except httpx.HTTPError as e:
            raise AuthError(f"Sign-up failed: could not reach the auth provider: {e}") from e

        session = getattr(resp, "session", None)
        if session is None:
            return None

        user = _to_session_user(resp)
        self._persist(session)
        self._publish(user)
        return user

    def sign_out(self) -> None:
        """
        Terminate the session. Safe to call when already signed out.

        The local session is forgotten even when the provider cannot be
        reached; AuthError is raised afterwards so the caller can say so.
        """
        try:
            if self._user is not None:
                self.auth.sign_out()
        except httpx.HTTPError as e:
            raise AuthError(f"Could not reach the auth provider: {e}") from e
        finally:
            if self.token_store is not None:
                self.token_store.clear()
            self._publish(None)
