# essaycircle/persistence/repositories/users_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from essaycircle.errors import DuplicateError
from essaycircle.persistence.db import get_session
from essaycircle.persistence.models import User


class UserRepository:
    def create(self, username: str, password_hash: str) -> User:
        try:
            with get_session() as s:
                u = User(username=username.strip(), password_hash=password_hash)
                s.add(u)
                s.flush(); s.refresh(u); s.expunge(u)
                return u
        except IntegrityError as exc:
            raise DuplicateError(f"username déjà pris: {username}") from exc

    def get(self, user_id: str) -> User | None:
        with get_session() as s:
            u = s.get(User, user_id)
            if not u:
                return None
            s.expunge(u)
            return u

    def get_by_username(self, username: str) -> User | None:
        with get_session() as s:
            u = s.scalar(select(User).where(User.username == username.strip()))
            if not u:
                return None
            s.expunge(u)
            return u
