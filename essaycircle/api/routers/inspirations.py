# essaycircle/api/routers/inspirations.py
# -*- coding: utf-8 -*-
from typing import List, Optional

from fastapi import APIRouter, Query

from essaycircle.api.deps import ServicesDep
from essaycircle.schemas import InspirationOut

router = APIRouter(prefix="/api/inspirations", tags=["inspirations"])


@router.get("", response_model=List[InspirationOut])
def list_inspirations(services: ServicesDep,
                      category: Optional[str] = None,
                      type: Optional[str] = Query(default=None)):
    return services.inspirations.get_inspirations(category=category, type=type)


@router.get("/{inspiration_id}", response_model=InspirationOut)
def get_inspiration(inspiration_id: str, services: ServicesDep):
    return services.inspirations.get_inspiration(inspiration_id)
