# essaycircle/persistence/stores.py
# -*- coding: utf-8 -*-
"""
Sélection du backend de stockage (une seule fois, au démarrage).

    stores = build_stores(settings)   # settings.store_backend: 'sql' | 'memory'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from essaycircle.config import Settings
from essaycircle.persistence import db
from essaycircle.persistence.models import Base
from essaycircle.persistence.seed_data import INSPIRATIONS
from essaycircle.persistence.repositories import contracts
from essaycircle.persistence.repositories.corrections_repo import UserCorrectionRepository
from essaycircle.persistence.repositories.essays_repo import EssayRepository
from essaycircle.persistence.repositories.friendships_repo import FriendshipRepository
from essaycircle.persistence.repositories.inspirations_repo import InspirationRepository
from essaycircle.persistence.repositories.likes_repo import EssayLikeRepository
from essaycircle.persistence.repositories.messages_repo import MessageRepository
from essaycircle.persistence.repositories.peer_reviews_repo import PeerReviewRepository
from essaycircle.persistence.repositories.profiles_repo import ProfileRepository
from essaycircle.persistence.repositories.users_repo import UserRepository
from essaycircle.persistence.repositories import memory_repos as mem

logger = logging.getLogger(__name__)


@dataclass
class Stores:
    users: contracts.UserStore
    profiles: contracts.ProfileStore
    essays: contracts.EssayStore
    user_corrections: contracts.UserCorrectionStore
    likes: contracts.EssayLikeStore
    inspirations: contracts.InspirationStore
    friendships: contracts.FriendshipStore
    messages: contracts.MessageStore
    peer_reviews: contracts.PeerReviewStore


def sql_stores() -> Stores:
    return Stores(
        users=UserRepository(),
        profiles=ProfileRepository(),
        essays=EssayRepository(),
        user_corrections=UserCorrectionRepository(),
        likes=EssayLikeRepository(),
        inspirations=InspirationRepository(),
        friendships=FriendshipRepository(),
        messages=MessageRepository(),
        peer_reviews=PeerReviewRepository(),
    )


def memory_stores() -> Stores:
    return Stores(
        users=mem.MemoryUserRepository(),
        profiles=mem.MemoryProfileRepository(),
        essays=mem.MemoryEssayRepository(),
        user_corrections=mem.MemoryUserCorrectionRepository(),
        likes=mem.MemoryEssayLikeRepository(),
        inspirations=mem.MemoryInspirationRepository(),
        friendships=mem.MemoryFriendshipRepository(),
        messages=mem.MemoryMessageRepository(),
        peer_reviews=mem.MemoryPeerReviewRepository(),
    )


def seed_inspirations(stores: Stores) -> int:
    """Charge le catalogue si la table est vide. Renvoie le nombre d'entrées créées."""
    if stores.inspirations.count() > 0:
        return 0
    for item in INSPIRATIONS:
        stores.inspirations.create(word_count=len(item["content"].split()), **item)
    logger.info("Catalogue d'inspirations chargé (%d entrées)", len(INSPIRATIONS))
    return len(INSPIRATIONS)


def build_stores(settings: Settings, drop_and_recreate: bool = False) -> Stores:
    if settings.store_backend == "memory":
        stores = memory_stores()
    elif settings.store_backend == "sql":
        if settings.db_url != db.DB_URL:
            db.configure(settings.db_url)
        db.init_db(Base, drop_and_recreate=drop_and_recreate)
        stores = sql_stores()
    else:
        raise ValueError(f"STORE_BACKEND inconnu: {settings.store_backend!r} (attendu 'sql' ou 'memory')")

    logger.info("Backend de stockage: %s", settings.store_backend)
    if settings.seed_inspirations:
        seed_inspirations(stores)
    return stores
