# essaycircle/persistence/repositories/essays_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select
from essaycircle.persistence.db import get_session
from essaycircle.persistence.models import Essay, utcnow


class EssayRepository:
    def get(self, essay_id: str) -> Essay | None:
        with get_session() as s:
            e = s.get(Essay, essay_id)
            if not e:
                return None
            s.expunge(e)
            return e

    def list(self, is_public: bool | None = None, author_id: str | None = None) -> list[Essay]:
        with get_session() as s:
            stmt = select(Essay)
            if is_public is not None:
                stmt = stmt.where(Essay.is_public == is_public)
            if author_id:
                stmt = stmt.where(Essay.author_id == author_id)
            stmt = stmt.order_by(Essay.updated_at.desc())
            rows = list(s.scalars(stmt))
            for r in rows:
                s.expunge(r)
            return rows

    def create(self, **fields) -> Essay:
        with get_session() as s:
            e = Essay(**fields)
            s.add(e)
            s.flush(); s.refresh(e); s.expunge(e)
            return e

    def update(self, essay_id: str, **fields) -> Essay | None:
        with get_session() as s:
            e = s.get(Essay, essay_id)
            if not e:
                return None
            for k, v in fields.items():
                setattr(e, k, v)
            e.updated_at = utcnow()
            s.flush(); s.refresh(e); s.expunge(e)
            return e

    def delete(self, essay_id: str) -> bool:
        with get_session() as s:
            e = s.get(Essay, essay_id)
            if not e:
                return False
            s.delete(e)
            return True
