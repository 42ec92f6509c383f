# essaycircle/api/routers/friendships.py
# -*- coding: utf-8 -*-
from typing import List, Optional

from fastapi import APIRouter, Query, status

from essaycircle.api.deps import RawBody, ServicesDep, UserIdDep
from essaycircle.errors import ForbiddenError
from essaycircle.schemas import FriendshipOut

router = APIRouter(prefix="/api/friendships", tags=["friendships"])


@router.get("/{target_id}", response_model=List[FriendshipOut])
def list_friendships(target_id: str, user_id: UserIdDep, services: ServicesDep,
                     status_filter: Optional[str] = Query(default=None, alias="status")):
    if target_id != user_id:
        raise ForbiddenError("You can only view your own friendships", code="FORBIDDEN_ACCESS")
    return services.friendships.get_friendships(target_id, status=status_filter)


@router.post("", response_model=FriendshipOut, status_code=status.HTTP_201_CREATED)
def create_friend_request(payload: RawBody, user_id: UserIdDep, services: ServicesDep):
    return services.friendships.create_friend_request(user_id, payload)


@router.put("/{friendship_id}", response_model=FriendshipOut)
def update_friendship(friendship_id: str, payload: RawBody, user_id: UserIdDep, services: ServicesDep):
    return services.friendships.update_friendship_status(friendship_id, user_id, payload)
