# essaycircle/persistence/repositories/contracts.py
# -*- coding: utf-8 -*-
"""
Contrats des stores, partagés par l'implémentation SQL et l'implémentation mémoire.

Les deux renvoient des instances détachées des modèles ORM : modifier l'objet
renvoyé n'écrit jamais dans le store.
"""

from __future__ import annotations

from typing import Optional, Protocol

from essaycircle.persistence.models import (
    Essay, EssayLike, Friendship, Inspiration, PeerReview,
    User, UserCorrection, UserMessage, UserProfile,
)


class UserStore(Protocol):
    def create(self, username: str, password_hash: str) -> User: ...
    def get(self, user_id: str) -> Optional[User]: ...
    def get_by_username(self, username: str) -> Optional[User]: ...


class ProfileStore(Protocol):
    def list_all(self) -> list[UserProfile]: ...
    def get(self, user_id: str) -> Optional[UserProfile]: ...
    def create(self, user_id: str, **fields) -> UserProfile: ...
    def update(self, user_id: str, **fields) -> Optional[UserProfile]: ...


class EssayStore(Protocol):
    def get(self, essay_id: str) -> Optional[Essay]: ...
    def list(self, is_public: Optional[bool] = None, author_id: Optional[str] = None) -> list[Essay]: ...
    def create(self, **fields) -> Essay: ...
    def update(self, essay_id: str, **fields) -> Optional[Essay]: ...
    def delete(self, essay_id: str) -> bool: ...


class UserCorrectionStore(Protocol):
    def list_for_essay(self, essay_id: str) -> list[UserCorrection]: ...
    def get(self, correction_id: str) -> Optional[UserCorrection]: ...
    def create(self, **fields) -> UserCorrection: ...
    def update(self, correction_id: str, **fields) -> Optional[UserCorrection]: ...


class EssayLikeStore(Protocol):
    def list_for_essay(self, essay_id: str) -> list[EssayLike]: ...
    def exists(self, essay_id: str, user_id: str) -> bool: ...
    def create(self, essay_id: str, user_id: str) -> EssayLike: ...
    def delete(self, essay_id: str, user_id: str) -> bool: ...


class InspirationStore(Protocol):
    def list(self, category: Optional[str] = None, type: Optional[str] = None,
             public_only: bool = True) -> list[Inspiration]: ...
    def get(self, inspiration_id: str) -> Optional[Inspiration]: ...
    def create(self, **fields) -> Inspiration: ...
    def update(self, inspiration_id: str, **fields) -> Optional[Inspiration]: ...
    def count(self) -> int: ...


class FriendshipStore(Protocol):
    def get(self, friendship_id: str) -> Optional[Friendship]: ...
    def list_for_user(self, user_id: str, status: Optional[str] = None) -> list[Friendship]: ...
    def find_between(self, a: str, b: str) -> Optional[Friendship]: ...
    def create(self, requester_id: str, addressee_id: str, status: str = "pending") -> Friendship: ...
    def update(self, friendship_id: str, **fields) -> Optional[Friendship]: ...


class MessageStore(Protocol):
    def get(self, message_id: str) -> Optional[UserMessage]: ...
    def list_for_user(self, user_id: str, unread_only: bool = False) -> list[UserMessage]: ...
    def create(self, **fields) -> UserMessage: ...
    def mark_read(self, message_id: str) -> Optional[UserMessage]: ...


class PeerReviewStore(Protocol):
    def list_for_essay(self, essay_id: str) -> list[PeerReview]: ...
    def get(self, essay_id: str, reviewer_id: str) -> Optional[PeerReview]: ...
    def get_by_id(self, review_id: str) -> Optional[PeerReview]: ...
    def create(self, **fields) -> PeerReview: ...
    def update(self, review_id: str, **fields) -> Optional[PeerReview]: ...
    def upsert(self, essay_id: str, reviewer_id: str, update_fields: dict,
               create_fields: Optional[dict] = None) -> PeerReview: ...
    def append_correction(self, review_id: str, correction: dict) -> Optional[PeerReview]: ...
