# essaycircle/api/routers/peer_reviews.py
# -*- coding: utf-8 -*-
from fastapi import APIRouter

from essaycircle.api.deps import RawBody, ServicesDep, UserIdDep
from essaycircle.schemas import PeerReviewOut

router = APIRouter(prefix="/api/peer-reviews", tags=["peer-reviews"])


@router.get("/{review_id}", response_model=PeerReviewOut)
def get_review(review_id: str, user_id: UserIdDep, services: ServicesDep):
    return services.peer_reviews.get_peer_review(review_id)


@router.patch("/{review_id}", response_model=PeerReviewOut)
def update_review(review_id: str, payload: RawBody, user_id: UserIdDep, services: ServicesDep):
    return services.peer_reviews.update_peer_review(review_id, payload, requesting_user_id=user_id)


@router.post("/{review_id}/corrections", response_model=PeerReviewOut)
def add_correction(review_id: str, payload: RawBody, user_id: UserIdDep, services: ServicesDep):
    return services.peer_reviews.add_correction_to_review(review_id, payload, requesting_user_id=user_id)
