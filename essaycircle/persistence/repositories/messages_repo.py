# essaycircle/persistence/repositories/messages_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select, or_
from essaycircle.persistence.db import get_session
from essaycircle.persistence.models import UserMessage


class MessageRepository:
    def get(self, message_id: str) -> UserMessage | None:
        with get_session() as s:
            m = s.get(UserMessage, message_id)
            if not m:
                return None
            s.expunge(m)
            return m

    def list_for_user(self, user_id: str, unread_only: bool = False) -> list[UserMessage]:
        with get_session() as s:
            stmt = select(UserMessage).where(
                or_(UserMessage.from_user_id == user_id, UserMessage.to_user_id == user_id)
            )
            if unread_only:
                # "non lu" n'a de sens que pour les messages reçus
                stmt = stmt.where(UserMessage.to_user_id == user_id, UserMessage.is_read.is_(False))
            stmt = stmt.order_by(UserMessage.created_at.desc())
            rows = list(s.scalars(stmt))
            for r in rows:
                s.expunge(r)
            return rows

    def create(self, **fields) -> UserMessage:
        with get_session() as s:
            m = UserMessage(**fields)
            s.add(m)
            s.flush(); s.refresh(m); s.expunge(m)
            return m

    def mark_read(self, message_id: str) -> UserMessage | None:
        with get_session() as s:
            m = s.get(UserMessage, message_id)
            if not m:
                return None
            m.is_read = True
            s.flush(); s.refresh(m); s.expunge(m)
            return m
