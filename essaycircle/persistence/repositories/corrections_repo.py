# essaycircle/persistence/repositories/corrections_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select
from essaycircle.persistence.db import get_session
from essaycircle.persistence.models import UserCorrection


class UserCorrectionRepository:
    def list_for_essay(self, essay_id: str) -> list[UserCorrection]:
        with get_session() as s:
            stmt = (select(UserCorrection)
                    .where(UserCorrection.essay_id == essay_id)
                    .order_by(UserCorrection.created_at.desc()))
            rows = list(s.scalars(stmt))
            for r in rows:
                s.expunge(r)
            return rows

    def get(self, correction_id: str) -> UserCorrection | None:
        with get_session() as s:
            c = s.get(UserCorrection, correction_id)
            if not c:
                return None
            s.expunge(c)
            return c

    def create(self, **fields) -> UserCorrection:
        with get_session() as s:
            c = UserCorrection(**fields)
            s.add(c)
            s.flush(); s.refresh(c); s.expunge(c)
            return c

    def update(self, correction_id: str, **fields) -> UserCorrection | None:
        with get_session() as s:
            c = s.get(UserCorrection, correction_id)
            if not c:
                return None
            for k, v in fields.items():
                setattr(c, k, v)
            s.flush(); s.refresh(c); s.expunge(c)
            return c
