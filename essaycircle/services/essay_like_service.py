# essaycircle/services/essay_like_service.py
# -*- coding: utf-8 -*-
from essaycircle.errors import DuplicateError, NotFoundError
from essaycircle.persistence.repositories.contracts import EssayLikeStore, EssayStore


class EssayLikeService:
    def __init__(self, likes: EssayLikeStore, essays: EssayStore) -> None:
        self._likes = likes
        self._essays = essays

    def get_likes(self, essay_id: str):
        return self._likes.list_for_essay(essay_id)

    def toggle_like(self, essay_id: str, user_id: str) -> dict:
        """Like si absent, unlike si présent. Renvoie le nouvel état {"liked": bool}."""
        if self._essays.get(essay_id) is None:
            raise NotFoundError("Essay not found", code="ESSAY_NOT_FOUND")

        if self._likes.exists(essay_id, user_id):
            self._likes.delete(essay_id, user_id)
            return {"liked": False}
        try:
            self._likes.create(essay_id, user_id)
        except DuplicateError:
            pass  # like concurrent déjà inséré : l'état final est "liké"
        return {"liked": True}
