# essaycircle/api/routers/messages.py
# -*- coding: utf-8 -*-
from typing import List

from fastapi import APIRouter, Query, status

from essaycircle.api.deps import RawBody, ServicesDep, UserIdDep
from essaycircle.schemas import MessageOut

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.get("/{target_id}", response_model=List[MessageOut])
def list_messages(target_id: str, user_id: UserIdDep, services: ServicesDep,
                  unread_only: bool = Query(default=False, alias="unreadOnly")):
    return services.messages.get_user_messages(target_id, user_id, unread_only=unread_only)


@router.post("", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def send_message(payload: RawBody, user_id: UserIdDep, services: ServicesDep):
    return services.messages.send_message(user_id, payload)


@router.patch("/{message_id}/read", response_model=MessageOut)
def mark_read(message_id: str, user_id: UserIdDep, services: ServicesDep):
    return services.messages.mark_as_read(message_id, user_id)
