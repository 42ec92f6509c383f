# tests/conftest.py
# -*- coding: utf-8 -*-
"""
Fixtures partagées.

- `stores`   : paramétrée sur les deux backends ("sql" sur une SQLite temporaire, "memory"),
               chaque test qui l'utilise tourne donc deux fois ;
- `services` : services câblés sur `stores`, provider IA stub, tâches de fond exécutées inline.
"""

import pytest

from essaycircle.config import Settings
from essaycircle.container import build_services
from essaycircle.persistence import db
from essaycircle.persistence.models import Base
from essaycircle.persistence.stores import memory_stores, sql_stores
from essaycircle.services.ai_service import StubProvider
from essaycircle.services.background import InlineTaskRunner


@pytest.fixture(params=["sql", "memory"])
def stores(request, tmp_path):
    """
    Prépare un backend propre :
    - sql    : base SQLite temporaire (ex: /tmp/pytest-xxxx/test_essaycircle.db), schéma recréé
    - memory : dicts vides
    """
    if request.param == "sql":
        db.configure(f"sqlite:///{tmp_path / 'test_essaycircle.db'}")
        db.init_db(Base, drop_and_recreate=True)
        return sql_stores()
    return memory_stores()


@pytest.fixture
def settings():
    return Settings(store_backend="memory", background_mode="inline", seed_inspirations=False)


@pytest.fixture
def services(stores, settings):
    svc = build_services(settings, stores=stores, provider=StubProvider(), task_runner=InlineTaskRunner())
    yield svc
    svc.close()
