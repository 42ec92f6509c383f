# essaycircle/persistence/models.py
# -*- coding: utf-8 -*-
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import Integer, String, Text, DateTime, Boolean, JSON, UniqueConstraint
import datetime as dt
import uuid

AI_REVIEWER_ID = "AI"


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> dt.datetime:
    # naïf, en UTC (SQLite ne conserve pas le fuseau)
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


def friendship_pair_key(a: str, b: str) -> str:
    """Clé non orientée d'une relation (a, b) == (b, a)."""
    lo, hi = sorted((a, b))
    return f"{lo}|{hi}"


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), unique=True, index=True, nullable=False)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)

    total_essays: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_words: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    average_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    level: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    experience: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    joined_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    last_active_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)


class Essay(Base):
    __tablename__ = "essays"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    author_name: Mapped[str] = mapped_column(Text, nullable=False)
    word_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_analyzed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class UserCorrection(Base):
    __tablename__ = "user_corrections"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    essay_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    user_name: Mapped[str] = mapped_column(Text, nullable=False)
    original_text: Mapped[str] = mapped_column(Text, nullable=False)
    suggested_text: Mapped[str] = mapped_column(Text, nullable=False)
    explanation: Mapped[str] = mapped_column(Text, nullable=False)
    start_index: Mapped[int] = mapped_column(Integer, nullable=False)
    end_index: Mapped[int] = mapped_column(Integer, nullable=False)
    likes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)


class EssayLike(Base):
    __tablename__ = "essay_likes"
    __table_args__ = (UniqueConstraint("essay_id", "user_id", name="uq_like_essay_user"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    essay_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)


class Inspiration(Base):
    __tablename__ = "inspirations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), index=True, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    source: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    difficulty: Mapped[str] = mapped_column(String(20), default="intermediate", nullable=False)
    word_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    read_time: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class Friendship(Base):
    __tablename__ = "friendships"
    __table_args__ = (UniqueConstraint("pair_key", name="uq_friendship_pair"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    requester_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    addressee_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    pair_key: Mapped[str] = mapped_column(String(80), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class UserMessage(Base):
    __tablename__ = "user_messages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    from_user_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    to_user_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)  # chiffré au repos
    type: Mapped[str] = mapped_column(String(20), default="text", nullable=False)
    related_essay_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)


class PeerReview(Base):
    __tablename__ = "peer_reviews"
    __table_args__ = (UniqueConstraint("essay_id", "reviewer_id", name="uq_review_essay_reviewer"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    essay_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    reviewer_id: Mapped[str] = mapped_column(String(36), nullable=False)

    grammar_score: Mapped[int] = mapped_column(Integer, default=100, nullable=False)
    style_score: Mapped[int] = mapped_column(Integer, default=100, nullable=False)
    clarity_score: Mapped[int] = mapped_column(Integer, default=100, nullable=False)
    structure_score: Mapped[int] = mapped_column(Integer, default=100, nullable=False)
    content_score: Mapped[int] = mapped_column(Integer, default=100, nullable=False)
    research_score: Mapped[int] = mapped_column(Integer, default=100, nullable=False)
    overall_score: Mapped[int] = mapped_column(Integer, default=600, nullable=False)

    # liste ordonnée de dicts {category, selectedText, textStartIndex, textEndIndex, comment}
    corrections: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    review_comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_submitted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


# Valeurs par défaut côté Python : le store mémoire ne passe jamais par un INSERT
COLUMN_DEFAULTS = {
    User: {},
    UserProfile: {"bio": None, "avatar": None, "total_essays": 0, "total_words": 0,
                  "average_score": 0, "streak": 0, "level": 1, "experience": 0},
    Essay: {"word_count": 0, "is_public": False, "is_analyzed": False},
    UserCorrection: {"likes": 0},
    EssayLike: {},
    Inspiration: {"source": None, "tags": list, "difficulty": "intermediate",
                  "word_count": 0, "read_time": 5, "is_public": True},
    Friendship: {"status": "pending"},
    UserMessage: {"type": "text", "related_essay_id": None, "is_read": False},
    PeerReview: {"grammar_score": 100, "style_score": 100, "clarity_score": 100,
                 "structure_score": 100, "content_score": 100, "research_score": 100,
                 "overall_score": 600, "corrections": list, "review_comment": None,
                 "is_submitted": False},
}
