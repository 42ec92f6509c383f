# essaycircle/schemas.py
# -*- coding: utf-8 -*-
"""
Schémas pydantic : validation des entrées et sérialisation des réponses.

Sur le fil, les clés sont en camelCase (authorId, isPublic...) ; côté Python
les champs restent en snake_case, identiques aux colonnes ORM.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Literal, Optional, Type, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from essaycircle.errors import ValidationError

Category = Literal["grammar", "style", "clarity", "structure", "content", "research"]
FriendshipStatus = Literal["pending", "accepted", "declined", "blocked"]

M = TypeVar("M", bound=BaseModel)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def validation_details(exc: PydanticValidationError) -> List[dict]:
    return [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]


def parse_input(model: Type[M], raw) -> M:
    """Valide un corps brut ; lève notre ValidationError avec le détail par champ."""
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValidationError("Invalid data", errors=[{"field": "body", "message": "Expected a JSON object"}])
    try:
        return model.model_validate(raw)
    except PydanticValidationError as exc:
        raise ValidationError("Invalid data", errors=validation_details(exc)) from exc


# ---------------------------------------------------------------------
# Entrées
# ---------------------------------------------------------------------

class SignupRequest(CamelModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1)
    display_name: str = Field(min_length=1)
    bio: Optional[str] = None


class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class EssayCreate(CamelModel):
    title: str = Field(min_length=1)
    content: str
    is_public: bool = False


class EssayUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    is_public: Optional[bool] = None


class CorrectionIn(CamelModel):
    category: Category
    selected_text: str
    text_start_index: int
    text_end_index: int
    comment: str


class UserCorrectionCreate(CamelModel):
    original_text: str
    suggested_text: str
    explanation: str
    start_index: int = Field(ge=0)
    end_index: int = Field(ge=0)


class PeerReviewCreate(CamelModel):
    grammar_score: Optional[int] = Field(default=None, ge=0)
    style_score: Optional[int] = Field(default=None, ge=0)
    clarity_score: Optional[int] = Field(default=None, ge=0)
    structure_score: Optional[int] = Field(default=None, ge=0)
    content_score: Optional[int] = Field(default=None, ge=0)
    research_score: Optional[int] = Field(default=None, ge=0)
    overall_score: Optional[int] = Field(default=None, ge=0)
    corrections: List[CorrectionIn] = Field(default_factory=list)
    review_comment: Optional[str] = None
    is_submitted: bool = False


class PeerReviewUpdate(CamelModel):
    grammar_score: Optional[int] = Field(default=None, ge=0)
    style_score: Optional[int] = Field(default=None, ge=0)
    clarity_score: Optional[int] = Field(default=None, ge=0)
    structure_score: Optional[int] = Field(default=None, ge=0)
    content_score: Optional[int] = Field(default=None, ge=0)
    research_score: Optional[int] = Field(default=None, ge=0)
    overall_score: Optional[int] = Field(default=None, ge=0)
    corrections: Optional[List[CorrectionIn]] = None
    review_comment: Optional[str] = None
    is_submitted: Optional[bool] = None


class FriendshipCreate(CamelModel):
    addressee_id: str = Field(min_length=1)


class FriendshipUpdate(CamelModel):
    status: FriendshipStatus


class MessageCreate(CamelModel):
    to_user_id: str = Field(min_length=1)
    content: str = Field(min_length=1, validation_alias=AliasChoices("content", "message"))
    type: str = Field(default="text", max_length=20)
    related_essay_id: Optional[str] = None


class ProfileCreate(CamelModel):
    display_name: str = Field(min_length=1)
    bio: Optional[str] = None
    avatar: Optional[str] = None


class ProfileUpdate(CamelModel):
    display_name: Optional[str] = Field(default=None, min_length=1)
    bio: Optional[str] = None
    avatar: Optional[str] = None


# ---------------------------------------------------------------------
# Sorties
# ---------------------------------------------------------------------

class UserOut(CamelModel):
    id: str
    username: str


class ProfileOut(CamelModel):
    id: str
    user_id: str
    username: str
    display_name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    total_essays: int
    total_words: int
    average_score: int
    streak: int
    level: int
    experience: int
    joined_at: dt.datetime
    last_active_at: dt.datetime


class EssayOut(CamelModel):
    id: str
    title: str
    content: str
    author_id: str
    author_name: str
    word_count: int
    is_public: bool
    is_analyzed: bool
    created_at: dt.datetime
    updated_at: dt.datetime


class UserCorrectionOut(CamelModel):
    id: str
    essay_id: str
    user_id: str
    user_name: str
    original_text: str
    suggested_text: str
    explanation: str
    start_index: int
    end_index: int
    likes: int
    created_at: dt.datetime


class CorrectionOut(CamelModel):
    category: str
    selected_text: str
    text_start_index: int
    text_end_index: int
    comment: str


class PeerReviewOut(CamelModel):
    id: str
    essay_id: str
    reviewer_id: str
    grammar_score: int
    style_score: int
    clarity_score: int
    structure_score: int
    content_score: int
    research_score: int
    overall_score: int
    corrections: List[CorrectionOut]
    review_comment: Optional[str] = None
    is_submitted: bool
    created_at: dt.datetime
    updated_at: dt.datetime


class FriendshipOut(CamelModel):
    id: str
    requester_id: str
    addressee_id: str
    status: str
    created_at: dt.datetime
    updated_at: dt.datetime


class MessageOut(CamelModel):
    id: str
    from_user_id: str
    to_user_id: str
    content: str
    type: str
    related_essay_id: Optional[str] = None
    is_read: bool
    created_at: dt.datetime


class InspirationOut(CamelModel):
    id: str
    title: str
    author: str
    content: str
    category: str
    type: str
    source: Optional[str] = None
    tags: List[str]
    difficulty: str
    word_count: int
    read_time: int
    is_public: bool
    created_at: dt.datetime


class LikeToggleOut(CamelModel):
    liked: bool


class LikeCountOut(CamelModel):
    count: int


class BatchAnalysisOut(CamelModel):
    message: str = "Batch analysis complete"
    total: int
    success: int
    failed: int
    skipped: int
