# essaycircle/api/sessions.py
# -*- coding: utf-8 -*-
"""
Sessions côté serveur : un identifiant opaque (cookie) -> user_id.

- MemorySessionStore : dict + expiration, mono-processus.
- RedisSessionStore  : clés "session:<sid>" avec TTL (SETEX), multi-processus.
"""

from __future__ import annotations

import json
import secrets
import threading
import time
from typing import Optional

import redis

from essaycircle.config import Settings


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


class MemorySessionStore:
    def __init__(self, ttl_seconds: int) -> None:
        self.ttl_seconds = ttl_seconds
        self._data: dict[str, tuple[float, dict]] = {}
        self._lock = threading.Lock()

    def create(self, user_id: str) -> str:
        sid = new_session_id()
        now = time.monotonic()
        with self._lock:
            # purge des sessions expirées jamais relues
            for old in [k for k, (expires_at, _) in self._data.items() if expires_at < now]:
                del self._data[old]
            self._data[sid] = (now + self.ttl_seconds, {"user_id": user_id})
        return sid

    def get_user_id(self, sid: str) -> Optional[str]:
        with self._lock:
            entry = self._data.get(sid)
            if entry is None:
                return None
            expires_at, payload = entry
            if expires_at < time.monotonic():
                del self._data[sid]
                return None
            return payload["user_id"]

    def destroy(self, sid: str) -> None:
        with self._lock:
            self._data.pop(sid, None)


class RedisSessionStore:
    def __init__(self, client, ttl_seconds: int) -> None:
        self._client = client
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int) -> "RedisSessionStore":
        return cls(redis.Redis.from_url(url, decode_responses=True), ttl_seconds)

    def create(self, user_id: str) -> str:
        sid = new_session_id()
        self._client.setex(f"session:{sid}", self.ttl_seconds, json.dumps({"user_id": user_id}))
        return sid

    def get_user_id(self, sid: str) -> Optional[str]:
        raw = self._client.get(f"session:{sid}")
        if not raw:
            return None
        return json.loads(raw).get("user_id")

    def destroy(self, sid: str) -> None:
        self._client.delete(f"session:{sid}")


def build_session_store(settings: Settings):
    ttl = settings.session_ttl_hours * 3600
    if settings.session_backend == "redis":
        return RedisSessionStore.from_url(settings.redis_url, ttl)
    return MemorySessionStore(ttl)
