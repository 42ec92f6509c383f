# essaycircle/api/routers/profiles.py
# -*- coding: utf-8 -*-
from fastapi import APIRouter, status

from essaycircle.api.deps import RawBody, ServicesDep, UserIdDep
from essaycircle.schemas import ProfileOut

router = APIRouter(prefix="/api/profile", tags=["profiles"])


@router.get("/{user_id}", response_model=ProfileOut)
def get_profile(user_id: str, services: ServicesDep):
    return services.profiles.get_profile(user_id)


@router.post("", response_model=ProfileOut, status_code=status.HTTP_201_CREATED)
def create_profile(payload: RawBody, user_id: UserIdDep, services: ServicesDep):
    return services.profiles.create_profile(user_id, payload)


@router.put("/{target_id}", response_model=ProfileOut)
def update_profile(target_id: str, payload: RawBody, user_id: UserIdDep, services: ServicesDep):
    return services.profiles.update_profile(target_id, user_id, payload)
