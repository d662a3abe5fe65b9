"""Local profiles: who is signed in right now.

This is the identity the rest of the app asks for.  There are no
passwords; a profile is picked by email on this machine.  Signing up
creates the profile row and signs in straight away.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from .database.db import get_session
from .database.models import Profile

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Sign-in or sign-up could not be completed."""


def _normalise(email: str) -> str:
    return email.strip().lower()


class LocalAuth:
    """Tracks the signed-in profile.  ``current_user_id()`` is None when
    nobody is signed in; callers treat that as anonymous use."""

    def __init__(self) -> None:
        self._user_id: Optional[str] = None
        self._email: Optional[str] = None
        self._name: Optional[str] = None

    @property
    def email(self) -> Optional[str]:
        return self._email

    @property
    def display_name(self) -> Optional[str]:
        return self._name or self._email

    @property
    def signed_in(self) -> bool:
        return self._user_id is not None

    def current_user_id(self) -> Optional[str]:
        return self._user_id

    def sign_up(self, email: str, name: Optional[str] = None) -> str:
        """Create a profile for *email* and sign in.  Returns the user id."""
        email = _normalise(email)
        if "@" not in email:
            raise AuthError("Enter a valid email address.")
        with get_session() as db:
            if db.query(Profile).filter_by(email=email).first() is not None:
                raise AuthError(f"An account for {email} already exists.")
            profile = Profile(
                user_id=str(uuid.uuid4()),
                email=email,
                name=(name or "").strip() or None,
            )
            db.add(profile)
            user_id, display = profile.user_id, profile.name
        self._set(user_id, email, display)
        logger.info("Created profile for %s", email)
        return user_id

    def sign_in(self, email: str) -> str:
        """Sign in an existing profile.  Returns the user id."""
        email = _normalise(email)
        with get_session() as db:
            profile = db.query(Profile).filter_by(email=email).first()
            if profile is None:
                raise AuthError(f"No account found for {email}.")
            user_id, display = profile.user_id, profile.name
        self._set(user_id, email, display)
        logger.info("Signed in as %s", email)
        return user_id

    def sign_out(self) -> None:
        if self._user_id is not None:
            logger.info("Signed out %s", self._email)
        self._set(None, None, None)

    def _set(
        self, user_id: Optional[str], email: Optional[str], name: Optional[str],
    ) -> None:
        self._user_id = user_id
        self._email = email
        self._name = name
