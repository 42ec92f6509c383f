# essaycircle/persistence/repositories/memory_repos.py
# -*- coding: utf-8 -*-
"""
Stores en mémoire (dict de lignes), mêmes contrats que les repositories SQL.

Pensés pour les tests et le dev local mono-processus : un verrou par table
sérialise les écritures, mais rien n'est persisté.
"""

from __future__ import annotations

import copy
import threading
from typing import Optional

from essaycircle.errors import DuplicateError, RecordLockedError
from essaycircle.persistence.models import (
    COLUMN_DEFAULTS, Essay, EssayLike, Friendship, Inspiration, PeerReview,
    User, UserCorrection, UserMessage, UserProfile, friendship_pair_key, new_id, utcnow,
)

_TIMESTAMP_COLUMNS = ("created_at", "updated_at", "joined_at", "last_active_at")


class _MemoryTable:
    model = None

    def __init__(self) -> None:
        self._rows: dict[str, dict] = {}
        self._lock = threading.RLock()

    # --- helpers --------------------------------------------------------
    def _new_row(self, **fields) -> dict:
        row = {}
        for k, v in COLUMN_DEFAULTS[self.model].items():
            row[k] = v() if callable(v) else v
        columns = self.model.__table__.columns.keys()
        now = utcnow()
        for col in _TIMESTAMP_COLUMNS:
            if col in columns:
                row[col] = now
        row.update(fields)
        row.setdefault("id", new_id())
        return row

    def _build(self, row: dict):
        # copie profonde : listes JSON (corrections, tags) jamais partagées
        return self.model(**copy.deepcopy(row))

    def _insert(self, **fields):
        row = self._new_row(**fields)
        self._rows[row["id"]] = row
        return self._build(row)

    def _patch(self, row_id: str, touch: bool = True, **fields):
        row = self._rows.get(row_id)
        if row is None:
            return None
        row.update(copy.deepcopy(fields))
        if touch and "updated_at" in row:
            row["updated_at"] = utcnow()
        return self._build(row)

    def _select(self, predicate, order_by: str | None = None, desc: bool = True) -> list:
        rows = [r for r in self._rows.values() if predicate(r)]
        if order_by:
            rows.sort(key=lambda r: r[order_by], reverse=desc)
        return [self._build(r) for r in rows]

    def _first(self, predicate):
        for r in self._rows.values():
            if predicate(r):
                return r
        return None


class MemoryUserRepository(_MemoryTable):
    model = User

    def create(self, username: str, password_hash: str) -> User:
        with self._lock:
            username = username.strip()
            if self._first(lambda r: r["username"] == username):
                raise DuplicateError(f"username déjà pris: {username}")
            return self._insert(username=username, password_hash=password_hash)

    def get(self, user_id: str) -> Optional[User]:
        with self._lock:
            row = self._rows.get(user_id)
            return self._build(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            row = self._first(lambda r: r["username"] == username.strip())
            return self._build(row) if row else None


class MemoryProfileRepository(_MemoryTable):
    model = UserProfile

    def list_all(self) -> list[UserProfile]:
        with self._lock:
            return self._select(lambda r: True, order_by="joined_at", desc=False)

    def get(self, user_id: str) -> Optional[UserProfile]:
        with self._lock:
            row = self._first(lambda r: r["user_id"] == user_id)
            return self._build(row) if row else None

    def create(self, user_id: str, **fields) -> UserProfile:
        with self._lock:
            username = fields.get("username")
            if self._first(lambda r: r["user_id"] == user_id or r["username"] == username):
                raise DuplicateError(f"profil déjà présent pour {user_id}")
            return self._insert(user_id=user_id, **fields)

    def update(self, user_id: str, **fields) -> Optional[UserProfile]:
        with self._lock:
            row = self._first(lambda r: r["user_id"] == user_id)
            if row is None:
                return None
            return self._patch(row["id"], **fields)


class MemoryEssayRepository(_MemoryTable):
    model = Essay

    def get(self, essay_id: str) -> Optional[Essay]:
        with self._lock:
            row = self._rows.get(essay_id)
            return self._build(row) if row else None

    def list(self, is_public: Optional[bool] = None, author_id: Optional[str] = None) -> list[Essay]:
        def keep(r):
            if is_public is not None and r["is_public"] != is_public:
                return False
            if author_id and r["author_id"] != author_id:
                return False
            return True

        with self._lock:
            return self._select(keep, order_by="updated_at")

    def create(self, **fields) -> Essay:
        with self._lock:
            return self._insert(**fields)

    def update(self, essay_id: str, **fields) -> Optional[Essay]:
        with self._lock:
            return self._patch(essay_id, **fields)

    def delete(self, essay_id: str) -> bool:
        with self._lock:
            return self._rows.pop(essay_id, None) is not None


class MemoryUserCorrectionRepository(_MemoryTable):
    model = UserCorrection

    def list_for_essay(self, essay_id: str) -> list[UserCorrection]:
        with self._lock:
            return self._select(lambda r: r["essay_id"] == essay_id, order_by="created_at")

    def get(self, correction_id: str) -> Optional[UserCorrection]:
        with self._lock:
            row = self._rows.get(correction_id)
            return self._build(row) if row else None

    def create(self, **fields) -> UserCorrection:
        with self._lock:
            fields.pop("likes", None)
            return self._insert(**fields)

    def update(self, correction_id: str, **fields) -> Optional[UserCorrection]:
        with self._lock:
            return self._patch(correction_id, **fields)


class MemoryEssayLikeRepository(_MemoryTable):
    model = EssayLike

    def list_for_essay(self, essay_id: str) -> list[EssayLike]:
        with self._lock:
            return self._select(lambda r: r["essay_id"] == essay_id)

    def exists(self, essay_id: str, user_id: str) -> bool:
        with self._lock:
            return self._first(lambda r: r["essay_id"] == essay_id and r["user_id"] == user_id) is not None

    def create(self, essay_id: str, user_id: str) -> EssayLike:
        with self._lock:
            if self.exists(essay_id, user_id):
                raise DuplicateError(f"like déjà présent ({essay_id}, {user_id})")
            return self._insert(essay_id=essay_id, user_id=user_id)

    def delete(self, essay_id: str, user_id: str) -> bool:
        with self._lock:
            row = self._first(lambda r: r["essay_id"] == essay_id and r["user_id"] == user_id)
            if row is None:
                return False
            del self._rows[row["id"]]
            return True


class MemoryInspirationRepository(_MemoryTable):
    model = Inspiration

    def list(self, category: Optional[str] = None, type: Optional[str] = None,
             public_only: bool = True) -> list[Inspiration]:
        def keep(r):
            if public_only and not r["is_public"]:
                return False
            if category and r["category"] != category:
                return False
            if type and r["type"] != type:
                return False
            return True

        with self._lock:
            return self._select(keep, order_by="created_at")

    def get(self, inspiration_id: str) -> Optional[Inspiration]:
        with self._lock:
            row = self._rows.get(inspiration_id)
            return self._build(row) if row else None

    def create(self, **fields) -> Inspiration:
        with self._lock:
            return self._insert(**fields)

    def update(self, inspiration_id: str, **fields) -> Optional[Inspiration]:
        with self._lock:
            return self._patch(inspiration_id, **fields)

    def count(self) -> int:
        with self._lock:
            return len(self._rows)


class MemoryFriendshipRepository(_MemoryTable):
    model = Friendship

    def get(self, friendship_id: str) -> Optional[Friendship]:
        with self._lock:
            row = self._rows.get(friendship_id)
            return self._build(row) if row else None

    def list_for_user(self, user_id: str, status: Optional[str] = None) -> list[Friendship]:
        def keep(r):
            if user_id not in (r["requester_id"], r["addressee_id"]):
                return False
            return not status or r["status"] == status

        with self._lock:
            return self._select(keep, order_by="updated_at")

    def find_between(self, a: str, b: str) -> Optional[Friendship]:
        key = friendship_pair_key(a, b)
        with self._lock:
            row = self._first(lambda r: r["pair_key"] == key)
            return self._build(row) if row else None

    def create(self, requester_id: str, addressee_id: str, status: str = "pending") -> Friendship:
        key = friendship_pair_key(requester_id, addressee_id)
        with self._lock:
            if self._first(lambda r: r["pair_key"] == key):
                raise DuplicateError(f"relation déjà présente ({requester_id}, {addressee_id})")
            return self._insert(requester_id=requester_id, addressee_id=addressee_id,
                                pair_key=key, status=status)

    def update(self, friendship_id: str, **fields) -> Optional[Friendship]:
        with self._lock:
            return self._patch(friendship_id, **fields)


class MemoryMessageRepository(_MemoryTable):
    model = UserMessage

    def get(self, message_id: str) -> Optional[UserMessage]:
        with self._lock:
            row = self._rows.get(message_id)
            return self._build(row) if row else None

    def list_for_user(self, user_id: str, unread_only: bool = False) -> list[UserMessage]:
        def keep(r):
            if user_id not in (r["from_user_id"], r["to_user_id"]):
                return False
            if unread_only and (r["to_user_id"] != user_id or r["is_read"]):
                return False
            return True

        with self._lock:
            return self._select(keep, order_by="created_at")

    def create(self, **fields) -> UserMessage:
        with self._lock:
            return self._insert(**fields)

    def mark_read(self, message_id: str) -> Optional[UserMessage]:
        with self._lock:
            return self._patch(message_id, is_read=True)


class MemoryPeerReviewRepository(_MemoryTable):
    model = PeerReview

    def _pair(self, essay_id: str, reviewer_id: str):
        return self._first(lambda r: r["essay_id"] == essay_id and r["reviewer_id"] == reviewer_id)

    def list_for_essay(self, essay_id: str) -> list[PeerReview]:
        with self._lock:
            return self._select(lambda r: r["essay_id"] == essay_id, order_by="created_at")

    def get(self, essay_id: str, reviewer_id: str) -> Optional[PeerReview]:
        with self._lock:
            row = self._pair(essay_id, reviewer_id)
            return self._build(row) if row else None

    def get_by_id(self, review_id: str) -> Optional[PeerReview]:
        with self._lock:
            row = self._rows.get(review_id)
            return self._build(row) if row else None

    def create(self, **fields) -> PeerReview:
        with self._lock:
            if self._pair(fields.get("essay_id"), fields.get("reviewer_id")):
                raise DuplicateError(
                    f"revue déjà présente ({fields.get('essay_id')}, {fields.get('reviewer_id')})"
                )
            return self._insert(**copy.deepcopy(fields))

    def update(self, review_id: str, **fields) -> Optional[PeerReview]:
        with self._lock:
            return self._patch(review_id, **fields)

    def upsert(self, essay_id: str, reviewer_id: str, update_fields: dict,
               create_fields: Optional[dict] = None) -> PeerReview:
        with self._lock:
            row = self._pair(essay_id, reviewer_id)
            if row is not None:
                return self._patch(row["id"], **update_fields)
            fields = {**(create_fields or {}), **update_fields}
            return self._insert(essay_id=essay_id, reviewer_id=reviewer_id, **copy.deepcopy(fields))

    def append_correction(self, review_id: str, correction: dict) -> Optional[PeerReview]:
        with self._lock:
            row = self._rows.get(review_id)
            if row is None:
                return None
            if row["is_submitted"]:
                raise RecordLockedError(f"revue {review_id} déjà soumise")
            return self._patch(review_id, corrections=[*row["corrections"], dict(correction)])
