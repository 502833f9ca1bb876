"""
Signup and login use cases.

Login is a single-shot credential check: nothing is issued or remembered
between requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from clinic_api.core.config import Settings, get_settings
from clinic_api.core.security import hash_password, verify_password
from clinic_api.domain.entities import User
from clinic_api.domain.errors import InvalidCredentialsError, ValidationError
from clinic_api.domain.validation import require_fields
from clinic_api.repositories.entity_repositories import UserRepository

logger = logging.getLogger(__name__)

ADMIN_REDIRECT = "/admin"


@dataclass
class LoginSuccess:
    username: str


@dataclass
class AdminLogin:
    identifier: str
    redirect_to: str = ADMIN_REDIRECT


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


class AuthService:
    """Handles registration and credential checks."""

    def __init__(self, users: UserRepository, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.users = users
        self._admin_identifier = (self.settings.admin_identifier or "").strip()
        self._admin_digest = self._admin_password_digest()

    def _admin_password_digest(self) -> str:
        if self.settings.admin_password_hash:
            return self.settings.admin_password_hash
        if self.settings.admin_password:
            return hash_password(self.settings.admin_password)
        return ""

    # -------------------------------------- registration --------------------------------------
    def register(self, username: Any, email: Any, password: Any) -> User:
        values = require_fields(
            {"username": username, "email": email, "password": password},
            ("username", "email", "password"),
        )
        if not isinstance(password, str):
            raise ValidationError("password must be a string", ("password",))
        # hashed untrimmed, exactly as login will see it
        digest = hash_password(password)
        user = self.users.create(
            {"username": values["username"], "email": values["email"], "passwordDigest": digest}
        )
        logger.info("User registered: %s (id %d)", user.username, user.id)
        return user

    # -------------------------------------- login --------------------------------------
    def login(self, password: Any, email: Any = None, username: Any = None) -> LoginSuccess | AdminLogin:
        """
        Check credentials. A non-empty ``email`` wins over ``username`` when both
        are supplied.
        """
        by_email = _text(email)
        identifier = by_email or _text(username)
        secret = password if isinstance(password, str) else ""
        if not identifier or not secret:
            raise InvalidCredentialsError("Invalid email or password")

        if self._is_admin(identifier, secret):
            logger.info("Admin login: %s", identifier)
            return AdminLogin(identifier=identifier)

        user = self.users.find_by_email(identifier) if by_email else self.users.find_by_username(identifier)
        if not user or not verify_password(secret, user.password_digest):
            logger.info("Rejected login for %s", identifier)
            raise InvalidCredentialsError("Invalid email or password")
        logger.info("Login: %s", user.username)
        return LoginSuccess(username=user.username)

    def _is_admin(self, identifier: str, secret: str) -> bool:
        if not self._admin_identifier or identifier != self._admin_identifier:
            return False
        return verify_password(secret, self._admin_digest)
