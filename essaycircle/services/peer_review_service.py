# essaycircle/services/peer_review_service.py
# -*- coding: utf-8 -*-
"""
Revues par les pairs.

Invariants :
- au plus une revue par (essay_id, reviewer_id) (contrainte d'unicité du store) ;
- on ne relit pas sa propre rédaction ;
- les corrections s'ajoutent en fin de liste tant que la revue n'est pas
  soumise, puis sont figées.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from essaycircle.errors import (
    ConflictError, DuplicateError, ForbiddenError, NotFoundError, RecordLockedError,
)
from essaycircle.persistence.models import PeerReview
from essaycircle.persistence.repositories.contracts import EssayStore, PeerReviewStore
from essaycircle.schemas import CorrectionIn, PeerReviewCreate, PeerReviewUpdate, parse_input

logger = logging.getLogger(__name__)

SCORE_FIELDS = (
    "grammar_score", "style_score", "clarity_score",
    "structure_score", "content_score", "research_score",
)
DEFAULT_CATEGORY_SCORE = 100


def _correction_dict(c: CorrectionIn) -> dict:
    return c.model_dump(by_alias=True)


class PeerReviewService:
    def __init__(self, peer_reviews: PeerReviewStore, essays: EssayStore) -> None:
        self._reviews = peer_reviews
        self._essays = essays

    def get_peer_reviews(self, essay_id: str) -> list[PeerReview]:
        return self._reviews.list_for_essay(essay_id)

    def get_peer_review(self, review_id: str) -> PeerReview:
        review = self._reviews.get_by_id(review_id)
        if review is None:
            raise NotFoundError("Review not found", code="REVIEW_NOT_FOUND")
        return review

    def create_peer_review(self, essay_id: str, reviewer_id: str, raw) -> Tuple[PeerReview, bool]:
        """
        Renvoie (revue, created). Si le relecteur a déjà une revue pour cette
        rédaction, elle est renvoyée telle quelle avec created=False.
        """
        essay = self._essays.get(essay_id)
        if essay is None:
            raise NotFoundError("Essay not found", code="ESSAY_NOT_FOUND")
        if essay.author_id == reviewer_id:
            raise ForbiddenError("You cannot review your own essay", code="SELF_REVIEW")

        existing = self._reviews.get(essay_id, reviewer_id)
        if existing is not None:
            return existing, False

        data = parse_input(PeerReviewCreate, raw)
        scores = {f: getattr(data, f) if getattr(data, f) is not None else DEFAULT_CATEGORY_SCORE
                  for f in SCORE_FIELDS}
        overall = data.overall_score if data.overall_score is not None else sum(scores.values())

        try:
            review = self._reviews.create(
                essay_id=essay_id,
                reviewer_id=reviewer_id,
                overall_score=overall,
                corrections=[_correction_dict(c) for c in data.corrections],
                review_comment=data.review_comment,
                is_submitted=data.is_submitted,
                **scores,
            )
        except DuplicateError:
            # insert concurrent pour la même paire : même issue qu'une revue existante
            return self._reviews.get(essay_id, reviewer_id), False
        return review, True

    def update_peer_review(self, review_id: str, raw, requesting_user_id: Optional[str] = None) -> PeerReview:
        review = self.get_peer_review(review_id)
        if requesting_user_id is not None and review.reviewer_id != requesting_user_id:
            logger.warning("Modification refusée de la revue %s par %s", review_id, requesting_user_id)
            raise ForbiddenError("You cannot edit this review", code="FORBIDDEN_ACCESS")

        data = parse_input(PeerReviewUpdate, raw)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)

        if review.is_submitted and updates.get("is_submitted") is False:
            raise ConflictError("Cannot reopen a submitted review", code="REVIEW_SUBMITTED")

        if "corrections" in updates:
            if review.is_submitted:
                raise ConflictError("Cannot change corrections of a submitted review", code="REVIEW_SUBMITTED")
            updates["corrections"] = [_correction_dict(c) for c in data.corrections]

        if "overall_score" not in updates and any(f in updates for f in SCORE_FIELDS):
            updates["overall_score"] = sum(updates.get(f, getattr(review, f)) for f in SCORE_FIELDS)

        updated = self._reviews.update(review_id, **updates)
        if updated is None:
            raise NotFoundError("Review not found", code="REVIEW_NOT_FOUND")
        return updated

    def add_correction_to_review(self, review_id: str, raw_correction,
                                 requesting_user_id: Optional[str] = None) -> PeerReview:
        review = self.get_peer_review(review_id)
        if requesting_user_id is not None and review.reviewer_id != requesting_user_id:
            raise ForbiddenError("You cannot add corrections to this review", code="FORBIDDEN_ACCESS")
        if review.is_submitted:
            raise ConflictError("Cannot add corrections to a submitted review", code="REVIEW_SUBMITTED")

        correction = parse_input(CorrectionIn, raw_correction)
        try:
            updated = self._reviews.append_correction(review_id, _correction_dict(correction))
        except RecordLockedError as exc:
            # soumise entre la lecture et l'écriture
            raise ConflictError("Cannot add corrections to a submitted review", code="REVIEW_SUBMITTED") from exc
        if updated is None:
            raise NotFoundError("Review not found", code="REVIEW_NOT_FOUND")
        return updated
