# essaycircle/api/deps.py
# -*- coding: utf-8 -*-
"""Dépendances FastAPI : services, session, utilisateur courant."""

from typing import Annotated, Any, Optional

from fastapi import Body, Depends, Request

from essaycircle.container import Services
from essaycircle.errors import AuthenticationError


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_session_id(request: Request) -> Optional[str]:
    return request.cookies.get(request.app.state.settings.session_cookie)


def current_user_id(request: Request) -> str:
    """Lève AuthenticationError (401) si aucune session valide n'accompagne la requête."""
    sid = get_session_id(request)
    if not sid:
        raise AuthenticationError("Not authenticated")
    user_id = request.app.state.sessions.get_user_id(sid)
    if not user_id:
        raise AuthenticationError("Session expired or invalid")
    return user_id


ServicesDep = Annotated[Services, Depends(get_services)]
UserIdDep = Annotated[str, Depends(current_user_id)]
# corps JSON brut : la validation est faite par les services (schemas.parse_input)
RawBody = Annotated[Any, Body()]
