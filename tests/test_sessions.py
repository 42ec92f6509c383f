# tests/test_sessions.py
# -*- coding: utf-8 -*-
"""
Tests du store de sessions en mémoire (horloge simulée).

Ce fichier couvre :
- création / lecture / destruction d'une session,
- expiration à la lecture,
- purge, à chaque création, des sessions expirées jamais relues.
"""

import types

import pytest

from essaycircle.api import sessions
from essaycircle.api.sessions import MemorySessionStore


@pytest.fixture
def clock(monkeypatch):
    now = {"t": 1000.0}
    monkeypatch.setattr(sessions, "time", types.SimpleNamespace(monotonic=lambda: now["t"]))
    return now


def test_create_get_destroy(clock):
    store = MemorySessionStore(ttl_seconds=60)
    sid = store.create("u1")
    assert store.get_user_id(sid) == "u1"
    store.destroy(sid)
    assert store.get_user_id(sid) is None


def test_expired_session_is_rejected(clock):
    store = MemorySessionStore(ttl_seconds=60)
    sid = store.create("u1")
    clock["t"] += 61
    assert store.get_user_id(sid) is None
    assert sid not in store._data


def test_create_prunes_abandoned_sessions(clock):
    store = MemorySessionStore(ttl_seconds=60)
    abandoned = [store.create(f"u{i}") for i in range(5)]

    clock["t"] += 30
    alive = store.create("late")
    clock["t"] += 31
    fresh = store.create("new")

    assert not set(abandoned) & set(store._data)
    assert set(store._data) == {alive, fresh}
    assert store.get_user_id(alive) == "late"
