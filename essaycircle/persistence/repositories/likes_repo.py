# essaycircle/persistence/repositories/likes_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select, func, and_
from sqlalchemy.exc import IntegrityError
from essaycircle.errors import DuplicateError
from essaycircle.persistence.db import get_session
from essaycircle.persistence.models import EssayLike


class EssayLikeRepository:
    def list_for_essay(self, essay_id: str) -> list[EssayLike]:
        with get_session() as s:
            rows = list(s.scalars(select(EssayLike).where(EssayLike.essay_id == essay_id)))
            for r in rows:
                s.expunge(r)
            return rows

    def exists(self, essay_id: str, user_id: str) -> bool:
        with get_session() as s:
            c = s.scalar(select(func.count(EssayLike.id)).where(
                and_(EssayLike.essay_id == essay_id, EssayLike.user_id == user_id)
            )) or 0
            return c > 0

    def create(self, essay_id: str, user_id: str) -> EssayLike:
        try:
            with get_session() as s:
                like = EssayLike(essay_id=essay_id, user_id=user_id)
                s.add(like)
                s.flush(); s.refresh(like); s.expunge(like)
                return like
        except IntegrityError as exc:
            raise DuplicateError(f"like déjà présent ({essay_id}, {user_id})") from exc

    def delete(self, essay_id: str, user_id: str) -> bool:
        with get_session() as s:
            like = s.scalar(select(EssayLike).where(
                and_(EssayLike.essay_id == essay_id, EssayLike.user_id == user_id)
            ).limit(1))
            if not like:
                return False
            s.delete(like)
            return True
