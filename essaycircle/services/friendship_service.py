# essaycircle/services/friendship_service.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Optional

from essaycircle.errors import ConflictError, DuplicateError, ForbiddenError, NotFoundError
from essaycircle.persistence.models import Friendship
from essaycircle.persistence.repositories.contracts import FriendshipStore
from essaycircle.schemas import FriendshipCreate, FriendshipUpdate, parse_input

logger = logging.getLogger(__name__)


class FriendshipService:
    def __init__(self, friendships: FriendshipStore) -> None:
        self._friendships = friendships

    def get_friendships(self, user_id: str, status: Optional[str] = None) -> list[Friendship]:
        return self._friendships.list_for_user(user_id, status or None)

    def create_friend_request(self, requester_id: str, raw) -> Friendship:
        """
        Règles :
        1. pas de demande à soi-même ;
        2. aucune relation existante entre les deux, dans un sens ou l'autre,
           quel que soit son statut (une demande refusée bloque aussi).
        """
        data = parse_input(FriendshipCreate, raw)

        if data.addressee_id == requester_id:
            raise ConflictError("You cannot send a friend request to yourself", code="CANNOT_ADD_SELF")

        if self._friendships.find_between(requester_id, data.addressee_id) is not None:
            raise ConflictError("Friendship already exists", code="FRIENDSHIP_ALREADY_EXISTS")

        try:
            return self._friendships.create(requester_id, data.addressee_id, status="pending")
        except DuplicateError as exc:
            raise ConflictError("Friendship already exists", code="FRIENDSHIP_ALREADY_EXISTS") from exc

    def update_friendship_status(self, friendship_id: str, user_id: str, raw) -> Friendship:
        """Seul le destinataire (addressee) peut accepter / refuser / bloquer."""
        data = parse_input(FriendshipUpdate, raw)

        friendship = self._friendships.get(friendship_id)
        if friendship is None:
            raise NotFoundError("Friendship not found", code="FRIENDSHIP_NOT_FOUND")

        if friendship.addressee_id != user_id:
            logger.warning("Mise à jour refusée de la relation %s par %s", friendship_id, user_id)
            raise ForbiddenError("You cannot update this friendship request", code="FORBIDDEN_UPDATE")

        updated = self._friendships.update(friendship_id, status=data.status)
        if updated is None:
            raise NotFoundError("Friendship not found", code="FRIENDSHIP_NOT_FOUND")
        return updated
