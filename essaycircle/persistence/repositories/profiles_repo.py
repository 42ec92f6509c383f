# essaycircle/persistence/repositories/profiles_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from essaycircle.errors import DuplicateError
from essaycircle.persistence.db import get_session
from essaycircle.persistence.models import UserProfile


class ProfileRepository:
    def list_all(self) -> list[UserProfile]:
        with get_session() as s:
            rows = list(s.scalars(select(UserProfile).order_by(UserProfile.joined_at.asc())))
            for r in rows:
                s.expunge(r)
            return rows

    def get(self, user_id: str) -> UserProfile | None:
        with get_session() as s:
            p = s.scalar(select(UserProfile).where(UserProfile.user_id == user_id))
            if not p:
                return None
            s.expunge(p)
            return p

    def create(self, user_id: str, **fields) -> UserProfile:
        try:
            with get_session() as s:
                p = UserProfile(user_id=user_id, **fields)
                s.add(p)
                s.flush(); s.refresh(p); s.expunge(p)
                return p
        except IntegrityError as exc:
            raise DuplicateError(f"profil déjà présent pour {user_id}") from exc

    def update(self, user_id: str, **fields) -> UserProfile | None:
        with get_session() as s:
            p = s.scalar(select(UserProfile).where(UserProfile.user_id == user_id))
            if not p:
                return None
            for k, v in fields.items():
                setattr(p, k, v)
            s.flush(); s.refresh(p); s.expunge(p)
            return p
