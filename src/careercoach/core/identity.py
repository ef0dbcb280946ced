"""Identity resolution: maps the identity provider's subject to a user row."""

from __future__ import annotations

import logging
import sqlite3

from careercoach.core.database import get_user_by_subject, save_user
from careercoach.core.errors import Unauthorized, UserNotFound
from careercoach.core.models import User

logger = logging.getLogger(__name__)


def require_user(conn: sqlite3.Connection, subject: str | None) -> User:
    """Return the user for *subject*.

    Raises ``Unauthorized`` when no subject is given and ``UserNotFound``
    when the subject has never registered.
    """
    if not subject:
        raise Unauthorized()
    user = get_user_by_subject(conn, subject)
    if user is None:
        raise UserNotFound(subject)
    return user


def register_user(
    conn: sqlite3.Connection,
    subject: str | None,
    *,
    email: str,
    name: str | None = None,
) -> User:
    """Create the user row on first sign-in; return the existing one afterwards."""
    if not subject:
        raise Unauthorized()
    existing = get_user_by_subject(conn, subject)
    if existing is not None:
        return existing
    user = User(subject=subject, email=email, name=name)
    save_user(conn, user)
    logger.debug("Registered user %s for subject %s", user.id, subject)
    return user
