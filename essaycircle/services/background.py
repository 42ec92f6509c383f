# essaycircle/services/background.py
# -*- coding: utf-8 -*-
"""
Tâches détachées ("fire-and-forget").

L'appelant n'attend pas le résultat, mais chaque tâche renvoie un Future et
ses échecs sont logués : ils restent observables sans jamais remonter à la
requête HTTP qui les a déclenchées.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Callable

from essaycircle.config import Settings

logger = logging.getLogger(__name__)


def _log_failure(label: str, fut: Future) -> None:
    exc = fut.exception()
    if exc is not None:
        logger.error("Tâche de fond '%s' en échec: %r", label, exc, exc_info=exc)


class ThreadTaskRunner:
    """Pool de threads partagé par le processus (pas de retry, pas de timeout)."""

    def __init__(self, max_workers: int = 4) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="essaycircle-bg")

    def submit(self, fn: Callable, *args, label: str | None = None) -> Future:
        fut = self._executor.submit(fn, *args)
        fut.add_done_callback(partial(_log_failure, label or getattr(fn, "__name__", "task")))
        return fut

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


class InlineTaskRunner:
    """Exécute la tâche immédiatement dans le thread appelant (tests, scripts)."""

    def submit(self, fn: Callable, *args, label: str | None = None) -> Future:
        fut: Future = Future()
        try:
            fut.set_result(fn(*args))
        except Exception as exc:
            fut.set_exception(exc)
        _log_failure(label or getattr(fn, "__name__", "task"), fut)
        return fut

    def shutdown(self, wait: bool = True) -> None:
        return None


def build_task_runner(settings: Settings):
    if settings.background_mode == "inline":
        return InlineTaskRunner()
    return ThreadTaskRunner(max_workers=settings.background_workers)
