# essaycircle/api/routers/users.py
# -*- coding: utf-8 -*-
from typing import List

from fastapi import APIRouter

from essaycircle.api.deps import ServicesDep
from essaycircle.schemas import ProfileOut

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[ProfileOut])
def list_users(services: ServicesDep):
    return services.profiles.get_all_profiles()


@router.get("/{user_id}", response_model=ProfileOut)
def get_user(user_id: str, services: ServicesDep):
    return services.profiles.get_profile(user_id)
