# essaycircle/services/message_service.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import logging

from essaycircle.errors import ConflictError, ForbiddenError, NotFoundError
from essaycircle.persistence.models import UserMessage
from essaycircle.persistence.repositories.contracts import MessageStore
from essaycircle.schemas import MessageCreate, parse_input
from essaycircle.services.crypto import MessageCipher

logger = logging.getLogger(__name__)


class MessageService:
    """
    Messages privés entre deux utilisateurs. Le contenu est chiffré au repos et
    déchiffré à la lecture ; les objets renvoyés portent le texte clair.
    """

    def __init__(self, messages: MessageStore, cipher: MessageCipher) -> None:
        self._messages = messages
        self._cipher = cipher

    def _reveal(self, message: UserMessage) -> UserMessage:
        # instance détachée : la modifier n'écrit pas dans le store
        message.content = self._cipher.decrypt(message.content)
        return message

    def get_user_messages(self, target_user_id: str, requesting_user_id: str,
                          unread_only: bool = False) -> list[UserMessage]:
        if target_user_id != requesting_user_id:
            logger.warning("Lecture refusée de la boîte de %s par %s", target_user_id, requesting_user_id)
            raise ForbiddenError("You can only fetch your own messages", code="FORBIDDEN_ACCESS")

        return [self._reveal(m) for m in self._messages.list_for_user(target_user_id, unread_only)]

    def send_message(self, from_user_id: str, raw) -> UserMessage:
        data = parse_input(MessageCreate, raw)
        if data.to_user_id == from_user_id:
            raise ConflictError("You cannot send a message to yourself", code="CANNOT_SEND_TO_SELF")

        stored = self._messages.create(
            from_user_id=from_user_id,
            to_user_id=data.to_user_id,
            content=self._cipher.encrypt(data.content),
            type=data.type,
            related_essay_id=data.related_essay_id,
        )
        return self._reveal(stored)

    def mark_as_read(self, message_id: str, requesting_user_id: str) -> UserMessage:
        """Seul le destinataire peut marquer un message comme lu."""
        message = self._messages.get(message_id)
        if message is None or requesting_user_id not in (message.from_user_id, message.to_user_id):
            raise NotFoundError("Message not found", code="MESSAGE_NOT_FOUND")

        if message.to_user_id != requesting_user_id:
            raise ForbiddenError("You can only mark your own messages as read", code="FORBIDDEN_ACCESS")

        updated = self._messages.mark_read(message_id)
        if updated is None:
            raise NotFoundError("Message not found", code="MESSAGE_NOT_FOUND")
        return self._reveal(updated)
