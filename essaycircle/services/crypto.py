# essaycircle/services/crypto.py
# -*- coding: utf-8 -*-
"""Chiffrement symétrique (Fernet) du contenu des messages au repos."""

from __future__ import annotations

import logging
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from essaycircle.errors import UnexpectedError

logger = logging.getLogger(__name__)


class MessageCipher:
    def __init__(self, key: Optional[str] = None) -> None:
        if not key:
            key = Fernet.generate_key().decode("ascii")
            logger.warning("MESSAGE_KEY absente : clé éphémère générée, "
                           "les messages stockés seront illisibles après redémarrage")
        self._fernet = Fernet(key.encode("ascii") if isinstance(key, str) else key)

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, token: str) -> str:
        try:
            return self._fernet.decrypt(token.encode("ascii")).decode("utf-8")
        except InvalidToken as exc:
            raise UnexpectedError("Message content could not be decrypted") from exc
