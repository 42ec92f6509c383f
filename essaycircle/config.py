# essaycircle/config.py
# -*- coding: utf-8 -*-
"""
Configuration lue depuis l'environnement (et un éventuel fichier .env).

Variables supportées (toutes optionnelles, noms insensibles à la casse) :
    DB_URL              : URL SQLAlchemy (par défaut sqlite:///essaycircle.db)
    STORE_BACKEND       : 'sql' (défaut) ou 'memory'
    AI_PROVIDER         : 'stub' (défaut) ou 'hf' (voir services/ai_service.py pour HF_*)
    MESSAGE_KEY         : clé Fernet pour chiffrer le contenu des messages
    SESSION_BACKEND     : 'memory' (défaut) ou 'redis'
    REDIS_URL           : URL redis si SESSION_BACKEND=redis
    SESSION_COOKIE      : nom du cookie de session (défaut essaycircle_sid)
    SESSION_TTL_HOURS   : durée de vie d'une session (défaut 24)
    BACKGROUND_MODE     : 'thread' (défaut) ou 'inline'
    BACKGROUND_WORKERS  : taille du pool pour les tâches détachées (défaut 4)
    LOG_LEVEL           : niveau de log (défaut INFO)
    SEED_INSPIRATIONS   : '1' (défaut) pour charger le catalogue d'inspirations

Une valeur invalide (ex. SESSION_TTL_HOURS=abc) lève une pydantic.ValidationError
qui nomme le champ fautif, dès le démarrage.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True
    )

    db_url: str = "sqlite:///essaycircle.db"
    store_backend: Literal["sql", "memory"] = "sql"
    ai_provider: str = "stub"
    message_key: Optional[str] = None
    session_backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379/0"
    session_cookie: str = Field(default="essaycircle_sid", min_length=1)
    session_ttl_hours: int = Field(default=24, gt=0)
    background_mode: Literal["thread", "inline"] = "thread"
    background_workers: int = Field(default=4, gt=0)
    log_level: str = "INFO"
    seed_inspirations: bool = True

    @field_validator("store_backend", "ai_provider", "session_backend", "background_mode", mode="before")
    @classmethod
    def _lower(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("db_url", "redis_url", "session_cookie", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("message_key", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @classmethod
    def from_env(cls) -> "Settings":
        return cls()
