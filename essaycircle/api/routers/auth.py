# essaycircle/api/routers/auth.py
# -*- coding: utf-8 -*-
"""Inscription, connexion et session (cookie opaque côté client)."""

from fastapi import APIRouter, Request, Response, status

from essaycircle.api.deps import RawBody, ServicesDep, UserIdDep, get_session_id
from essaycircle.errors import NotFoundError
from essaycircle.schemas import UserOut

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _open_session(request: Request, response: Response, user_id: str) -> None:
    settings = request.app.state.settings
    sid = request.app.state.sessions.create(user_id)
    response.set_cookie(
        settings.session_cookie,
        sid,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
    )


@router.post("/signup", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def signup(payload: RawBody, request: Request, response: Response, services: ServicesDep):
    user = services.auth.register_user(payload)
    _open_session(request, response, user.id)
    return user


@router.post("/login", response_model=UserOut)
def login(payload: RawBody, request: Request, response: Response, services: ServicesDep):
    user = services.auth.login_user(payload)
    _open_session(request, response, user.id)
    return user


@router.post("/logout")
def logout(request: Request, response: Response, user_id: UserIdDep):
    request.app.state.sessions.destroy(get_session_id(request))
    response.delete_cookie(request.app.state.settings.session_cookie)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserOut)
def me(request: Request, user_id: UserIdDep, services: ServicesDep):
    try:
        return services.auth.get_current_user(user_id)
    except NotFoundError:
        # compte supprimé entre-temps : la session ne vaut plus rien
        request.app.state.sessions.destroy(get_session_id(request))
        raise
