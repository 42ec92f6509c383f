# essaycircle/persistence/db.py
# -*- coding: utf-8 -*-
"""
Moteur SQLAlchemy et unité de travail.

    with get_session() as s:      # commit en sortie, rollback sur exception
        ...

L'URL vient de DB_URL (SQLite local par défaut) ; `configure(url)` rebranche
le module sur une autre base sans réimport (tests, scripts).
"""

import logging
import os
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)

DB_URL = os.getenv("DB_URL", "sqlite:///essaycircle.db")


def _make_engine(url: str):
    # SQLite + pool de threads FastAPI : la connexion doit pouvoir changer de thread
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=False, connect_args=connect_args)


engine = _make_engine(DB_URL)

# objets encore lisibles après commit : les repositories renvoient des instances détachées
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def configure(url: str) -> None:
    global engine, DB_URL
    engine.dispose()
    DB_URL = url
    engine = _make_engine(url)
    SessionLocal.configure(bind=engine)
    logger.debug("Base rebranchée sur %s", engine.url.render_as_string(hide_password=True))


@contextmanager
def get_session() -> Session:
    s = SessionLocal()
    try:
        yield s
        s.commit()
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()


def init_db(Base, drop_and_recreate: bool = False) -> None:
    """Crée le schéma manquant ; `drop_and_recreate` repart d'une base vide (dev, tests)."""
    if drop_and_recreate:
        logger.warning("Suppression du schéma existant (%s)", engine.url.render_as_string(hide_password=True))
        Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
