# tests/test_config.py
# -*- coding: utf-8 -*-
"""
Tests de Settings (lecture de l'environnement).

Ce fichier couvre :
- valeurs par défaut,
- lecture et normalisation des variables (casse, MESSAGE_KEY vide),
- rejet explicite des valeurs invalides, avec le champ en cause.
"""

import pytest
from pydantic import ValidationError

from essaycircle.config import Settings

ENV_VARS = (
    "DB_URL", "STORE_BACKEND", "AI_PROVIDER", "MESSAGE_KEY", "SESSION_BACKEND", "REDIS_URL",
    "SESSION_COOKIE", "SESSION_TTL_HOURS", "BACKGROUND_MODE", "BACKGROUND_WORKERS",
    "LOG_LEVEL", "SEED_INSPIRATIONS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # pas de .env ni de variables héritées du poste
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = Settings.from_env()
    assert s.store_backend == "sql"
    assert s.session_ttl_hours == 24
    assert s.background_workers == 4
    assert s.message_key is None
    assert s.seed_inspirations is True


def test_reads_and_normalises_env(monkeypatch):
    monkeypatch.setenv("STORE_BACKEND", " Memory ")
    monkeypatch.setenv("SESSION_TTL_HOURS", "2")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("MESSAGE_KEY", "  ")
    monkeypatch.setenv("SEED_INSPIRATIONS", "0")

    s = Settings.from_env()
    assert s.store_backend == "memory"
    assert s.session_ttl_hours == 2
    assert s.log_level == "DEBUG"
    assert s.message_key is None
    assert s.seed_inspirations is False


def test_env_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("BACKGROUND_MODE=inline\n", encoding="utf-8")
    assert Settings.from_env().background_mode == "inline"


@pytest.mark.parametrize("name, value, field", [
    ("SESSION_TTL_HOURS", "abc", "session_ttl_hours"),
    ("BACKGROUND_WORKERS", "0", "background_workers"),
    ("STORE_BACKEND", "mongo", "store_backend"),
])
def test_invalid_values_name_the_field(monkeypatch, name, value, field):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError) as exc:
        Settings.from_env()
    assert field in {e["loc"][0] for e in exc.value.errors()}


def test_settings_are_frozen():
    s = Settings(store_backend="memory")
    with pytest.raises(ValidationError):
        s.store_backend = "sql"
    assert s.model_copy(update={"background_mode": "inline"}).background_mode == "inline"
