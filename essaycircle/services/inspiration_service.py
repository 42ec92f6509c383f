# essaycircle/services/inspiration_service.py
# -*- coding: utf-8 -*-
from essaycircle.errors import NotFoundError
from essaycircle.persistence.repositories.contracts import InspirationStore


class InspirationService:
    def __init__(self, inspirations: InspirationStore) -> None:
        self._inspirations = inspirations

    def get_inspirations(self, category=None, type=None):
        return self._inspirations.list(category=category or None, type=type or None, public_only=True)

    def get_inspiration(self, inspiration_id: str):
        item = self._inspirations.get(inspiration_id)
        if item is None or not item.is_public:
            raise NotFoundError("Inspiration not found", code="INSPIRATION_NOT_FOUND")
        return item
