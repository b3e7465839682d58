"""Mock login against the stored user list.

There is no real authentication here: passwords are stored in clear and
the token is an opaque marker, just enough for the dashboard to proceed.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

from schooladmin.backend.core.storage import RecordStore

logger = logging.getLogger(__name__)

LOGIN_OK = "Login successful"
LOGIN_FAILED = "Invalid username or password"


@dataclass
class LoginResult:
    success: bool
    message: str
    token: str | None = None
    user: dict[str, Any] | None = field(default=None)


def login(store: RecordStore, username: str, password: str) -> LoginResult:
    """Check ``username``/``password`` against users allowed to log in."""
    for user in store.list("users"):
        if (
            user.get("username") == username
            and user.get("password") == password
            and user.get("canLogin")
        ):
            logger.info("User %s logged in", username)
            return LoginResult(
                success=True,
                message=LOGIN_OK,
                token=f"mock-token-{user['id']}-{int(time.time() * 1000)}",
                user={
                    "id": str(user["id"]),
                    "username": user["username"],
                    "role": user.get("role") or "user",
                },
            )

    logger.warning("Failed login attempt for %s", username)
    return LoginResult(success=False, message=LOGIN_FAILED)
