# essaycircle/container.py
# -*- coding: utf-8 -*-
"""Assemblage stores + services (une instance par processus)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from essaycircle.config import Settings
from essaycircle.persistence.stores import Stores, build_stores
from essaycircle.services.ai_service import AIService, select_provider
from essaycircle.services.auth_service import AuthService
from essaycircle.services.background import build_task_runner
from essaycircle.services.crypto import MessageCipher
from essaycircle.services.essay_like_service import EssayLikeService
from essaycircle.services.essay_service import EssayService
from essaycircle.services.friendship_service import FriendshipService
from essaycircle.services.inspiration_service import InspirationService
from essaycircle.services.message_service import MessageService
from essaycircle.services.peer_review_service import PeerReviewService
from essaycircle.services.profile_service import ProfileService
from essaycircle.services.user_correction_service import UserCorrectionService


@dataclass
class Services:
    stores: Stores
    auth: AuthService
    profiles: ProfileService
    essays: EssayService
    ai: AIService
    peer_reviews: PeerReviewService
    likes: EssayLikeService
    user_corrections: UserCorrectionService
    friendships: FriendshipService
    messages: MessageService
    inspirations: InspirationService
    task_runner: object

    def close(self) -> None:
        self.task_runner.shutdown(wait=True)


def build_services(settings: Settings, stores: Optional[Stores] = None,
                   provider: Optional[object] = None, task_runner: Optional[object] = None) -> Services:
    stores = stores if stores is not None else build_stores(settings)
    runner = task_runner if task_runner is not None else build_task_runner(settings)

    profiles = ProfileService(stores.profiles, stores.users, stores.essays, stores.peer_reviews)
    ai = AIService(
        stores.essays,
        stores.peer_reviews,
        provider=provider if provider is not None else select_provider(settings.ai_provider),
        on_analyzed=profiles.refresh_stats,
    )
    return Services(
        stores=stores,
        auth=AuthService(stores.users, stores.profiles),
        profiles=profiles,
        essays=EssayService(stores.essays, stores.profiles, ai, runner, profile_service=profiles),
        ai=ai,
        peer_reviews=PeerReviewService(stores.peer_reviews, stores.essays),
        likes=EssayLikeService(stores.likes, stores.essays),
        user_corrections=UserCorrectionService(stores.user_corrections, stores.essays, stores.profiles),
        friendships=FriendshipService(stores.friendships),
        messages=MessageService(stores.messages, MessageCipher(settings.message_key)),
        inspirations=InspirationService(stores.inspirations),
        task_runner=runner,
    )
