# essaycircle/services/auth_service.py
# -*- coding: utf-8 -*-
"""Inscription / connexion. Le hachage passe par passlib (pbkdf2_sha256)."""

from __future__ import annotations

import logging

from passlib.hash import pbkdf2_sha256 as hasher

from essaycircle.errors import AuthenticationError, ConflictError, DuplicateError, NotFoundError
from essaycircle.persistence.models import User
from essaycircle.persistence.repositories.contracts import ProfileStore, UserStore
from essaycircle.schemas import LoginRequest, SignupRequest, parse_input

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return hasher.verify(password, password_hash)
    except ValueError:
        # hash illisible (format inconnu) : on refuse
        return False


class AuthService:
    def __init__(self, users: UserStore, profiles: ProfileStore) -> None:
        self._users = users
        self._profiles = profiles

    def register_user(self, raw) -> User:
        """Crée le User puis son UserProfile (même user_id)."""
        data = parse_input(SignupRequest, raw)

        if self._users.get_by_username(data.username) is not None:
            raise ConflictError("Username already taken", code="USERNAME_TAKEN")

        try:
            user = self._users.create(data.username, hash_password(data.password))
        except DuplicateError as exc:
            raise ConflictError("Username already taken", code="USERNAME_TAKEN") from exc

        self._profiles.create(
            user.id,
            username=user.username,
            display_name=data.display_name,
            bio=data.bio or "",
        )
        logger.info("Nouvel utilisateur %s (%s)", user.username, user.id)
        return user

    def login_user(self, raw) -> User:
        data = parse_input(LoginRequest, raw)
        user = self._users.get_by_username(data.username)
        if user is None or not verify_password(data.password, user.password_hash):
            raise AuthenticationError("Invalid username or password", code="INVALID_CREDENTIALS")
        return user

    def get_current_user(self, user_id: str) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError("User not found", code="USER_NOT_FOUND")
        return user
