# essaycircle/persistence/repositories/friendships_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from essaycircle.errors import DuplicateError
from essaycircle.persistence.db import get_session
from essaycircle.persistence.models import Friendship, friendship_pair_key, utcnow


class FriendshipRepository:
    def get(self, friendship_id: str) -> Friendship | None:
        with get_session() as s:
            f = s.get(Friendship, friendship_id)
            if not f:
                return None
            s.expunge(f)
            return f

    def list_for_user(self, user_id: str, status: str | None = None) -> list[Friendship]:
        with get_session() as s:
            stmt = select(Friendship).where(
                or_(Friendship.requester_id == user_id, Friendship.addressee_id == user_id)
            )
            if status:
                stmt = stmt.where(Friendship.status == status)
            stmt = stmt.order_by(Friendship.updated_at.desc())
            rows = list(s.scalars(stmt))
            for r in rows:
                s.expunge(r)
            return rows

    def find_between(self, a: str, b: str) -> Friendship | None:
        with get_session() as s:
            f = s.scalar(select(Friendship).where(Friendship.pair_key == friendship_pair_key(a, b)))
            if not f:
                return None
            s.expunge(f)
            return f

    def create(self, requester_id: str, addressee_id: str, status: str = "pending") -> Friendship:
        try:
            with get_session() as s:
                f = Friendship(
                    requester_id=requester_id,
                    addressee_id=addressee_id,
                    pair_key=friendship_pair_key(requester_id, addressee_id),
                    status=status,
                )
                s.add(f)
                s.flush(); s.refresh(f); s.expunge(f)
                return f
        except IntegrityError as exc:
            raise DuplicateError(f"relation déjà présente ({requester_id}, {addressee_id})") from exc

    def update(self, friendship_id: str, **fields) -> Friendship | None:
        with get_session() as s:
            f = s.get(Friendship, friendship_id)
            if not f:
                return None
            for k, v in fields.items():
                setattr(f, k, v)
            f.updated_at = utcnow()
            s.flush(); s.refresh(f); s.expunge(f)
            return f
