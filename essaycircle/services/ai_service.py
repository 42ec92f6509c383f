# essaycircle/services/ai_service.py
# -*- coding: utf-8 -*-
"""
Revue automatique ("AI") des rédactions.

Deux providers, même interface `review(title, content) -> AIReviewResult` :
- StubProvider : offline, déterministe (analysis_engine), idéal pour tests/MVP.
- HuggingFaceProvider : utilise l'Inference API (si HF_TOKEN présent).

La façade AIService choisit le provider puis persiste le résultat comme une
PeerReview du relecteur synthétique "AI" (upsert sur (essay_id, "AI")).

Usage:
    svc = AIService(essays=stores.essays, peer_reviews=stores.peer_reviews)
    review = svc.analyze_essay(essay_id)      # None si la rédaction n'existe pas
    stats = svc.batch_analyze_essays()        # {"total", "success", "failed", "skipped"}
"""

from __future__ import annotations

import json
import logging
import os
from typing import Callable, Optional

import httpx

from essaycircle.persistence.models import AI_REVIEWER_ID, PeerReview
from essaycircle.persistence.repositories.contracts import EssayStore, PeerReviewStore
from essaycircle.services import analysis_engine
from essaycircle.services.analysis_engine import AIReviewResult, CATEGORIES, CorrectionObject

logger = logging.getLogger(__name__)

_SCORE_KEYS = (
    ("grammarScore", "grammar_score"),
    ("styleScore", "style_score"),
    ("clarityScore", "clarity_score"),
    ("structureScore", "structure_score"),
    ("contentScore", "content_score"),
    ("researchScore", "research_score"),
)


# -----------------------------------------------------------------------------
# Provider: Stub (déterministe, offline)
# -----------------------------------------------------------------------------

class StubProvider:
    """Délègue au moteur mock. Aucun appel réseau."""

    def review(self, title: str, content: str) -> AIReviewResult:
        return analysis_engine.analyze(title, content)


# -----------------------------------------------------------------------------
# Provider: Hugging Face Inference API
# -----------------------------------------------------------------------------

class HuggingFaceProvider:
    """
    Client simple pour l'Inference API de Hugging Face.

    Variables d'environnement supportées:
        HF_TOKEN           : token secret (obligatoire)
        HF_MODEL           : ex. 'mistralai/Mistral-7B-Instruct-v0.2'
        HF_API_URL         : URL override; sinon déduite du modèle
        HF_MAX_TOKENS      : int (par défaut 800)
        HF_TEMPERATURE     : float (par défaut 0.3)
        HF_TIMEOUT_SEC     : int/float (par défaut 30)

    Notes:
        - Toute erreur réseau ou de format est relevée telle quelle ; l'appelant
          (tâche de fond, batch) la logue et la compte.
    """

    def __init__(self) -> None:
        self.token = os.getenv("HF_TOKEN", "").strip()
        if not self.token:
            raise RuntimeError("HF_TOKEN manquant pour HuggingFaceProvider.")

        self.model = os.getenv("HF_MODEL", "mistralai/Mistral-7B-Instruct-v0.2").strip()
        self.api_url = os.getenv("HF_API_URL", f"https://api-inference.huggingface.co/models/{self.model}").strip()
        self.max_tokens = int(os.getenv("HF_MAX_TOKENS", "800"))
        self.temperature = float(os.getenv("HF_TEMPERATURE", "0.3"))
        self.timeout_sec = float(os.getenv("HF_TIMEOUT_SEC", "30"))

        self._headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    def _build_prompt(self, title: str, content: str) -> str:
        return (
            "You are an expert writing assistant. Review the essay below and answer with ONE JSON "
            "object and nothing else, with integer keys grammarScore, styleScore, clarityScore, "
            "structureScore, contentScore, researchScore (each 0-200) and a 'corrections' array. "
            "Each correction has category (grammar|style|clarity|structure|content|research), "
            "selectedText (exact substring of the content), textStartIndex, textEndIndex "
            "(character offsets in the content) and comment.\n\n"
            f"Title: {title}\n\nContent:\n{content}"
        )

    def _parse(self, text: str) -> AIReviewResult:
        start, end = text.find("{"), text.rfind("}")
        if start < 0 or end <= start:
            raise ValueError("Réponse HF sans objet JSON")
        data = json.loads(text[start:end + 1])

        scores = {}
        for wire, attr in _SCORE_KEYS:
            scores[attr] = int(data.get(wire, 100))

        corrections = []
        for raw in data.get("corrections") or []:
            try:
                c = CorrectionObject.from_dict(raw)
            except (KeyError, TypeError, ValueError):
                logger.debug("Correction HF ignorée (format): %r", raw)
                continue
            if c.category in CATEGORIES and c.text_start_index >= 0:
                corrections.append(c)

        return AIReviewResult(overall_score=sum(scores.values()), corrections=corrections, **scores)

    def review(self, title: str, content: str) -> AIReviewResult:
        payload = {
            "inputs": self._build_prompt(title, content),
            "parameters": {
                "max_new_tokens": self.max_tokens,
                "temperature": self.temperature,
                "return_full_text": False,
            },
            "options": {"wait_for_model": True},
        }

        with httpx.Client(timeout=self.timeout_sec) as client:
            resp = client.post(self.api_url, headers=self._headers, json=payload)
            resp.raise_for_status()
            data = resp.json()

        # Formats possibles : liste [{"generated_text": "..."}] ou dict variante
        if isinstance(data, list) and data and "generated_text" in data[0]:
            return self._parse(str(data[0]["generated_text"]))
        if isinstance(data, dict):
            for key in ("generated_text", "text", "content"):
                if isinstance(data.get(key), str):
                    return self._parse(data[key])
        raise ValueError("Format de réponse HF inattendu")


# -----------------------------------------------------------------------------
# Façade principale
# -----------------------------------------------------------------------------

def select_provider(name: Optional[str] = None):
    """
    AI_PROVIDER=hf -> HuggingFaceProvider (si HF_TOKEN présent), sinon StubProvider.
    """
    prov = (name or os.getenv("AI_PROVIDER", "stub")).strip().lower()
    if prov == "hf":
        try:
            return HuggingFaceProvider()
        except RuntimeError as exc:
            logger.warning("Provider HF indisponible (%s), repli sur le stub", exc)
    return StubProvider()


class AIService:
    """
    Orchestration de la revue automatique.

    Tu peux forcer un provider en passant `provider=...` dans __init__.
    `on_analyzed(author_id)` est appelé après chaque analyse réussie
    (rafraîchissement des stats de profil).
    """

    def __init__(
        self,
        essays: EssayStore,
        peer_reviews: PeerReviewStore,
        provider: Optional[object] = None,
        on_analyzed: Optional[Callable[[str], object]] = None,
    ) -> None:
        self._essays = essays
        self._reviews = peer_reviews
        self._provider = provider if provider is not None else select_provider()
        self._on_analyzed = on_analyzed

    def _run_analysis(self, essay) -> PeerReview:
        logger.info("Analyse IA de la rédaction %s", essay.id)
        result = self._provider.review(essay.title, essay.content)

        review = self._reviews.upsert(
            essay.id,
            AI_REVIEWER_ID,
            update_fields=result.score_fields(),
            create_fields={"is_submitted": True},
        )
        self._essays.update(essay.id, is_analyzed=True)
        if self._on_analyzed is not None:
            self._on_analyzed(essay.author_id)
        return review

    def analyze_essay(self, essay_id: str) -> Optional[PeerReview]:
        """(Re)lance l'analyse d'une rédaction. Renvoie None si elle n'existe pas."""
        essay = self._essays.get(essay_id)
        if essay is None:
            return None
        return self._run_analysis(essay)

    def batch_analyze_essays(self) -> dict:
        """Analyse toutes les rédactions publiques qui n'ont pas encore de revue IA."""
        essays = self._essays.list(is_public=True)
        stats = {"success": 0, "failed": 0, "skipped": 0}

        for essay in essays:
            if self._reviews.get(essay.id, AI_REVIEWER_ID) is not None:
                stats["skipped"] += 1
                continue
            try:
                self._run_analysis(essay)
                stats["success"] += 1
            except Exception:
                logger.exception("Échec de l'analyse batch pour %s", essay.id)
                stats["failed"] += 1

        logger.info("Batch IA terminé: %s sur %d rédactions", stats, len(essays))
        return {"total": len(essays), **stats}
