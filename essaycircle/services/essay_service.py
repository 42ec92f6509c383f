# essaycircle/services/essay_service.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Optional, Union

from essaycircle.errors import ForbiddenError, NotFoundError
from essaycircle.persistence.models import Essay
from essaycircle.persistence.repositories.contracts import EssayStore, ProfileStore
from essaycircle.schemas import EssayCreate, EssayUpdate, parse_input
from essaycircle.services.analysis_engine import count_words

logger = logging.getLogger(__name__)


def _parse_visibility(value: Union[bool, str, None]) -> Optional[bool]:
    if isinstance(value, bool) or value is None:
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    return None


class EssayService:
    def __init__(self, essays: EssayStore, profiles: ProfileStore, ai_service,
                 task_runner, profile_service=None) -> None:
        self._essays = essays
        self._profiles = profiles
        self._ai = ai_service
        self._tasks = task_runner
        self._profile_service = profile_service

    def _refresh_author(self, author_id: str) -> None:
        if self._profile_service is not None:
            self._profile_service.refresh_stats(author_id)

    def get_essays(self, is_public: Union[bool, str, None] = None,
                   author_id: Optional[str] = None) -> list[Essay]:
        return self._essays.list(_parse_visibility(is_public), author_id or None)

    def get_essay(self, essay_id: str) -> Essay:
        essay = self._essays.get(essay_id)
        if essay is None:
            raise NotFoundError("Essay not found", code="ESSAY_NOT_FOUND")
        return essay

    def create_essay(self, user_id: str, raw) -> Essay:
        """
        Les champs auteur viennent toujours de la session (jamais du corps).
        Une rédaction publique déclenche l'analyse IA en tâche détachée.
        """
        data = parse_input(EssayCreate, raw)
        profile = self._profiles.get(user_id)

        essay = self._essays.create(
            title=data.title,
            content=data.content,
            is_public=data.is_public,
            author_id=user_id,
            author_name=profile.display_name if profile else "Anonymous",
            word_count=count_words(data.content),
        )
        self._refresh_author(user_id)

        if essay.is_public:
            logger.info("Analyse automatique déclenchée pour la rédaction %s", essay.id)
            self._tasks.submit(self._ai.analyze_essay, essay.id, label=f"auto-analysis:{essay.id}")
        return essay

    def _check_owner(self, essay_id: str, requesting_user_id: Optional[str]) -> Essay:
        essay = self.get_essay(essay_id)
        if requesting_user_id is not None and essay.author_id != requesting_user_id:
            logger.warning("Accès refusé à la rédaction %s pour %s", essay_id, requesting_user_id)
            raise ForbiddenError("You can only modify your own essays", code="FORBIDDEN_ACCESS")
        return essay

    def update_essay(self, essay_id: str, raw, requesting_user_id: Optional[str] = None) -> Essay:
        updates = parse_input(EssayUpdate, raw).model_dump(exclude_unset=True, exclude_none=True)
        self._check_owner(essay_id, requesting_user_id)

        if "content" in updates:
            updates["word_count"] = count_words(updates["content"])

        essay = self._essays.update(essay_id, **updates)
        if essay is None:
            raise NotFoundError("Essay not found", code="ESSAY_NOT_FOUND")
        if "content" in updates:
            self._refresh_author(essay.author_id)
        return essay

    def delete_essay(self, essay_id: str, requesting_user_id: Optional[str] = None) -> bool:
        """Suppression définitive, sans cascade sur corrections/likes/revues."""
        essay = self._check_owner(essay_id, requesting_user_id)
        if not self._essays.delete(essay_id):
            raise NotFoundError("Essay not found", code="ESSAY_NOT_FOUND")
        self._refresh_author(essay.author_id)
        return True
