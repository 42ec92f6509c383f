# essaycircle/api/routers/essays.py
# -*- coding: utf-8 -*-
"""Rédactions et tout ce qui s'y rattache (corrections, likes, revues, analyse)."""

from typing import List, Optional

from fastapi import APIRouter, Query, Response, status

from essaycircle.api.deps import RawBody, ServicesDep, UserIdDep
from essaycircle.errors import NotFoundError
from essaycircle.schemas import (
    BatchAnalysisOut, EssayOut, LikeCountOut, LikeToggleOut, PeerReviewOut, UserCorrectionOut,
)

router = APIRouter(prefix="/api/essays", tags=["essays"])


# ---------------------------------------------------------------------
# Lecture publique
# ---------------------------------------------------------------------

@router.get("", response_model=List[EssayOut])
def list_essays(services: ServicesDep,
                is_public: Optional[str] = Query(default=None, alias="isPublic"),
                author_id: Optional[str] = Query(default=None, alias="authorId")):
    return services.essays.get_essays(is_public=is_public, author_id=author_id)


@router.get("/{essay_id}", response_model=EssayOut)
def get_essay(essay_id: str, services: ServicesDep):
    return services.essays.get_essay(essay_id)


@router.get("/{essay_id}/user-corrections", response_model=List[UserCorrectionOut])
def list_user_corrections(essay_id: str, services: ServicesDep):
    return services.user_corrections.get_corrections(essay_id)


@router.get("/{essay_id}/likes", response_model=LikeCountOut)
def count_likes(essay_id: str, services: ServicesDep):
    return {"count": len(services.likes.get_likes(essay_id))}


@router.get("/{essay_id}/peer-reviews", response_model=List[PeerReviewOut])
def list_peer_reviews(essay_id: str, services: ServicesDep):
    return services.peer_reviews.get_peer_reviews(essay_id)


# ---------------------------------------------------------------------
# Écriture (session requise)
# ---------------------------------------------------------------------

@router.post("", response_model=EssayOut, status_code=status.HTTP_201_CREATED)
def create_essay(payload: RawBody, user_id: UserIdDep, services: ServicesDep):
    return services.essays.create_essay(user_id, payload)


@router.put("/{essay_id}", response_model=EssayOut)
def update_essay(essay_id: str, payload: RawBody, user_id: UserIdDep, services: ServicesDep):
    return services.essays.update_essay(essay_id, payload, requesting_user_id=user_id)


@router.delete("/{essay_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_essay(essay_id: str, user_id: UserIdDep, services: ServicesDep):
    services.essays.delete_essay(essay_id, requesting_user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/batch-analyze", response_model=BatchAnalysisOut)
def batch_analyze(user_id: UserIdDep, services: ServicesDep):
    return services.ai.batch_analyze_essays()


@router.post("/{essay_id}/analyze", response_model=PeerReviewOut)
def analyze(essay_id: str, user_id: UserIdDep, services: ServicesDep):
    review = services.ai.analyze_essay(essay_id)
    if review is None:
        raise NotFoundError("Essay not found", code="ESSAY_NOT_FOUND")
    return review


@router.post("/{essay_id}/user-corrections", response_model=UserCorrectionOut,
             status_code=status.HTTP_201_CREATED)
def create_user_correction(essay_id: str, payload: RawBody, user_id: UserIdDep, services: ServicesDep):
    return services.user_corrections.create_correction(essay_id, user_id, payload)


@router.post("/{essay_id}/like", response_model=LikeToggleOut)
def toggle_like(essay_id: str, user_id: UserIdDep, services: ServicesDep):
    return services.likes.toggle_like(essay_id, user_id)


@router.post("/{essay_id}/peer-reviews", response_model=PeerReviewOut)
def create_peer_review(essay_id: str, payload: RawBody, response: Response,
                       user_id: UserIdDep, services: ServicesDep):
    review, created = services.peer_reviews.create_peer_review(essay_id, user_id, payload)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return review
