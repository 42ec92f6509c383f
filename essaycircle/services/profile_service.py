# essaycircle/services/profile_service.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import logging

from essaycircle.errors import ConflictError, DuplicateError, ForbiddenError, NotFoundError
from essaycircle.persistence.models import AI_REVIEWER_ID, UserProfile, utcnow
from essaycircle.persistence.repositories.contracts import (
    EssayStore, PeerReviewStore, ProfileStore, UserStore,
)
from essaycircle.schemas import ProfileCreate, ProfileUpdate, parse_input

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, profiles: ProfileStore, users: UserStore,
                 essays: EssayStore, peer_reviews: PeerReviewStore) -> None:
        self._profiles = profiles
        self._users = users
        self._essays = essays
        self._reviews = peer_reviews

    def get_profile(self, user_id: str) -> UserProfile:
        profile = self._profiles.get(user_id)
        if profile is None:
            raise NotFoundError("Profile not found", code="PROFILE_NOT_FOUND")
        return profile

    def get_all_profiles(self) -> list[UserProfile]:
        return self._profiles.list_all()

    def create_profile(self, auth_user_id: str, raw) -> UserProfile:
        """
        Crée le profil de l'utilisateur de la session. Un `userId` fourni par le
        client est ignoré : le profil est toujours lié à `auth_user_id`.
        """
        data = parse_input(ProfileCreate, raw)
        user = self._users.get(auth_user_id)
        if user is None:
            raise NotFoundError("User not found", code="USER_NOT_FOUND")
        if self._profiles.get(auth_user_id) is not None:
            raise ConflictError("Profile already exists", code="PROFILE_ALREADY_EXISTS")
        try:
            return self._profiles.create(auth_user_id, username=user.username, **data.model_dump())
        except DuplicateError as exc:
            raise ConflictError("Profile already exists", code="PROFILE_ALREADY_EXISTS") from exc

    def update_profile(self, target_user_id: str, requesting_user_id: str, raw) -> UserProfile:
        if target_user_id != requesting_user_id:
            logger.warning("Modification refusée du profil %s par %s", target_user_id, requesting_user_id)
            raise ForbiddenError("You can only update your own profile", code="FORBIDDEN_ACCESS")

        # displayName: null laisse le nom affiché en place (colonne NOT NULL)
        updates = parse_input(ProfileUpdate, raw).model_dump(exclude_unset=True, exclude_none=True)
        profile = self._profiles.update(target_user_id, last_active_at=utcnow(), **updates)
        if profile is None:
            raise NotFoundError("Profile not found", code="PROFILE_NOT_FOUND")
        return profile

    def refresh_stats(self, user_id: str) -> UserProfile | None:
        """Recalcule totalEssays / totalWords / averageScore (score IA moyen)."""
        essays = self._essays.list(author_id=user_id)
        scores = []
        for essay in essays:
            review = self._reviews.get(essay.id, AI_REVIEWER_ID)
            if review is not None:
                scores.append(review.overall_score)

        return self._profiles.update(
            user_id,
            total_essays=len(essays),
            total_words=sum(e.word_count for e in essays),
            average_score=round(sum(scores) / len(scores)) if scores else 0,
            last_active_at=utcnow(),
        )
