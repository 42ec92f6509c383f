# essaycircle/persistence/repositories/inspirations_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select, func
from essaycircle.persistence.db import get_session
from essaycircle.persistence.models import Inspiration


class InspirationRepository:
    def list(self, category: str | None = None, type: str | None = None,
             public_only: bool = True) -> list[Inspiration]:
        with get_session() as s:
            stmt = select(Inspiration)
            if public_only:
                stmt = stmt.where(Inspiration.is_public.is_(True))
            if category:
                stmt = stmt.where(Inspiration.category == category)
            if type:
                stmt = stmt.where(Inspiration.type == type)
            stmt = stmt.order_by(Inspiration.created_at.desc())
            rows = list(s.scalars(stmt))
            for r in rows:
                s.expunge(r)
            return rows

    def get(self, inspiration_id: str) -> Inspiration | None:
        with get_session() as s:
            i = s.get(Inspiration, inspiration_id)
            if not i:
                return None
            s.expunge(i)
            return i

    def create(self, **fields) -> Inspiration:
        with get_session() as s:
            i = Inspiration(**fields)
            s.add(i)
            s.flush(); s.refresh(i); s.expunge(i)
            return i

    def update(self, inspiration_id: str, **fields) -> Inspiration | None:
        with get_session() as s:
            i = s.get(Inspiration, inspiration_id)
            if not i:
                return None
            for k, v in fields.items():
                setattr(i, k, v)
            s.flush(); s.refresh(i); s.expunge(i)
            return i

    def count(self) -> int:
        with get_session() as s:
            return s.scalar(select(func.count(Inspiration.id))) or 0
