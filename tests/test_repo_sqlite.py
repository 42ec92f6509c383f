# tests/test_repo_sqlite.py
# -*- coding: utf-8 -*-
"""
Tests d'intégration de la couche persistence.

Chaque test tourne sur les deux backends (fixture `stores` de conftest.py) :
- "sql"    : SQLAlchemy sur une base SQLite temporaire par test,
- "memory" : stores en mémoire.

Ce fichier couvre :
- unicité username / profil par utilisateur,
- filtres et ordre des rédactions (updated_at décroissant),
- likes : unicité (essay, user), suppression,
- relations : paire non ordonnée unique, filtres par statut,
- messages : boîte (envoyés + reçus), non-lus = reçus non lus,
- revues : unicité (essay, reviewer), upsert atomique, ajout de corrections,
  verrouillage après soumission,
- instances détachées : modifier un objet renvoyé n'écrit pas dans le store,
- chargement du catalogue d'inspirations (une seule fois).
"""

import pytest

from essaycircle.errors import DuplicateError, RecordLockedError
from essaycircle.persistence.models import friendship_pair_key
from essaycircle.persistence.stores import seed_inspirations


# ---------------------------------------------------------------------
# HELPERS
# ---------------------------------------------------------------------

def new_essay(stores, author_id="u1", is_public=True, title="T", content="Some words here"):
    return stores.essays.create(
        title=title, content=content, is_public=is_public,
        author_id=author_id, author_name="Author", word_count=len(content.split()),
    )


CORRECTION = {
    "category": "grammar",
    "selectedText": "words",
    "textStartIndex": 5,
    "textEndIndex": 10,
    "comment": "typo",
}


# ---------------------------------------------------------------------
# UTILISATEURS & PROFILS
# ---------------------------------------------------------------------

def test_create_and_get_user(stores):
    u = stores.users.create("alice", "hash")
    assert u.id
    got = stores.users.get_by_username("alice")
    assert got is not None and got.id == u.id
    assert stores.users.get(u.id).username == "alice"
    assert stores.users.get("missing") is None


def test_unique_username_enforced(stores):
    stores.users.create("dup", "hash")
    with pytest.raises(DuplicateError):
        stores.users.create("dup", "other")


def test_profile_one_per_user(stores):
    stores.profiles.create("u1", username="alice", display_name="Alice")
    with pytest.raises(DuplicateError):
        stores.profiles.create("u1", username="alice2", display_name="Again")


def test_profile_defaults_and_update(stores):
    p = stores.profiles.create("u1", username="alice", display_name="Alice")
    assert (p.total_essays, p.level, p.average_score) == (0, 1, 0)

    updated = stores.profiles.update("u1", bio="Hello", total_essays=3)
    assert updated.bio == "Hello"
    assert stores.profiles.get("u1").total_essays == 3
    assert stores.profiles.update("nobody", bio="x") is None


def test_list_all_profiles(stores):
    stores.profiles.create("u1", username="a", display_name="A")
    stores.profiles.create("u2", username="b", display_name="B")
    assert {p.user_id for p in stores.profiles.list_all()} == {"u1", "u2"}


# ---------------------------------------------------------------------
# RÉDACTIONS
# ---------------------------------------------------------------------

def test_essay_filters(stores):
    new_essay(stores, author_id="u1", is_public=True)
    new_essay(stores, author_id="u1", is_public=False)
    new_essay(stores, author_id="u2", is_public=True)

    assert len(stores.essays.list()) == 3
    assert len(stores.essays.list(is_public=True)) == 2
    assert len(stores.essays.list(is_public=False)) == 1
    assert len(stores.essays.list(author_id="u1")) == 2
    assert len(stores.essays.list(is_public=True, author_id="u2")) == 1


def test_essay_list_most_recently_updated_first(stores):
    first = new_essay(stores, title="first")
    new_essay(stores, title="second")
    stores.essays.update(first.id, title="first, edited")

    titles = [e.title for e in stores.essays.list()]
    assert titles == ["first, edited", "second"]


def test_essay_update_and_delete(stores):
    e = new_essay(stores)
    assert e.is_analyzed is False

    updated = stores.essays.update(e.id, is_analyzed=True)
    assert updated.is_analyzed is True
    assert updated.updated_at >= e.updated_at

    assert stores.essays.delete(e.id) is True
    assert stores.essays.get(e.id) is None
    assert stores.essays.delete(e.id) is False
    assert stores.essays.update(e.id, title="x") is None


# ---------------------------------------------------------------------
# LIKES & CORRECTIONS UTILISATEUR
# ---------------------------------------------------------------------

def test_like_unique_per_user_and_essay(stores):
    stores.likes.create("e1", "u1")
    assert stores.likes.exists("e1", "u1")
    with pytest.raises(DuplicateError):
        stores.likes.create("e1", "u1")

    stores.likes.create("e1", "u2")
    assert len(stores.likes.list_for_essay("e1")) == 2


def test_like_delete(stores):
    stores.likes.create("e1", "u1")
    assert stores.likes.delete("e1", "u1") is True
    assert stores.likes.exists("e1", "u1") is False
    assert stores.likes.delete("e1", "u1") is False


def test_user_correction_create_and_list(stores):
    c = stores.user_corrections.create(
        essay_id="e1", user_id="u1", user_name="Alice",
        original_text="teh", suggested_text="the", explanation="typo",
        start_index=0, end_index=3,
    )
    assert c.likes == 0
    assert [x.id for x in stores.user_corrections.list_for_essay("e1")] == [c.id]
    assert stores.user_corrections.list_for_essay("other") == []
    assert stores.user_corrections.update(c.id, likes=2).likes == 2


# ---------------------------------------------------------------------
# RELATIONS
# ---------------------------------------------------------------------

def test_pair_key_is_unordered():
    assert friendship_pair_key("a", "b") == friendship_pair_key("b", "a")


def test_friendship_unique_in_both_directions(stores):
    f = stores.friendships.create("u1", "u2")
    assert f.status == "pending"
    assert stores.friendships.find_between("u2", "u1").id == f.id
    with pytest.raises(DuplicateError):
        stores.friendships.create("u2", "u1")


def test_friendship_list_and_status_filter(stores):
    f = stores.friendships.create("u1", "u2")
    stores.friendships.create("u3", "u1")
    stores.friendships.update(f.id, status="accepted")

    assert len(stores.friendships.list_for_user("u1")) == 2
    accepted = stores.friendships.list_for_user("u1", status="accepted")
    assert [x.id for x in accepted] == [f.id]
    assert stores.friendships.get(f.id).status == "accepted"
    assert stores.friendships.get("missing") is None


# ---------------------------------------------------------------------
# MESSAGES
# ---------------------------------------------------------------------

def test_message_box_and_unread(stores):
    received = stores.messages.create(from_user_id="u2", to_user_id="u1", content="c1")
    stores.messages.create(from_user_id="u1", to_user_id="u2", content="c2")

    assert len(stores.messages.list_for_user("u1")) == 2
    unread = stores.messages.list_for_user("u1", unread_only=True)
    assert [m.id for m in unread] == [received.id]

    assert stores.messages.mark_read(received.id).is_read is True
    assert stores.messages.list_for_user("u1", unread_only=True) == []
    assert stores.messages.mark_read("missing") is None


# ---------------------------------------------------------------------
# REVUES
# ---------------------------------------------------------------------

def test_peer_review_unique_per_reviewer(stores):
    r = stores.peer_reviews.create(essay_id="e1", reviewer_id="u2")
    assert (r.grammar_score, r.overall_score, r.corrections) == (100, 600, [])
    with pytest.raises(DuplicateError):
        stores.peer_reviews.create(essay_id="e1", reviewer_id="u2")

    assert stores.peer_reviews.get("e1", "u2").id == r.id
    assert stores.peer_reviews.get_by_id(r.id).reviewer_id == "u2"


def test_upsert_inserts_then_updates_in_place(stores):
    first = stores.peer_reviews.upsert(
        "e1", "AI", update_fields={"overall_score": 900}, create_fields={"is_submitted": True},
    )
    assert first.is_submitted is True
    assert first.overall_score == 900

    second = stores.peer_reviews.upsert(
        "e1", "AI", update_fields={"overall_score": 950}, create_fields={"is_submitted": False},
    )
    assert second.id == first.id
    assert second.overall_score == 950
    # create_fields ne s'appliquent qu'à la création
    assert second.is_submitted is True
    assert len(stores.peer_reviews.list_for_essay("e1")) == 1


def test_append_correction(stores):
    r = stores.peer_reviews.create(essay_id="e1", reviewer_id="u2")
    stores.peer_reviews.append_correction(r.id, CORRECTION)
    updated = stores.peer_reviews.append_correction(r.id, {**CORRECTION, "comment": "second"})
    assert [c["comment"] for c in updated.corrections] == ["typo", "second"]
    assert stores.peer_reviews.append_correction("missing", CORRECTION) is None


def test_append_correction_refused_once_submitted(stores):
    r = stores.peer_reviews.create(essay_id="e1", reviewer_id="u2", corrections=[CORRECTION],
                                   is_submitted=True)
    with pytest.raises(RecordLockedError):
        stores.peer_reviews.append_correction(r.id, CORRECTION)
    assert len(stores.peer_reviews.get_by_id(r.id).corrections) == 1


def test_returned_instances_are_detached(stores):
    r = stores.peer_reviews.create(essay_id="e1", reviewer_id="u2")
    r.corrections.append(CORRECTION)
    r.overall_score = 1
    fresh = stores.peer_reviews.get_by_id(r.id)
    assert fresh.corrections == []
    assert fresh.overall_score == 600


# ---------------------------------------------------------------------
# INSPIRATIONS
# ---------------------------------------------------------------------

def test_seed_inspirations_runs_once(stores):
    created = seed_inspirations(stores)
    assert created > 0
    assert stores.inspirations.count() == created
    assert seed_inspirations(stores) == 0


def test_inspiration_filters_and_visibility(stores):
    seed_inspirations(stores)
    hidden = stores.inspirations.create(
        title="Draft", author="Me", content="hidden text", category="writing", type="excerpt",
        is_public=False,
    )
    public = stores.inspirations.list()
    assert hidden.id not in {i.id for i in public}
    assert hidden.id in {i.id for i in stores.inspirations.list(public_only=False)}

    quotes = stores.inspirations.list(type="quote")
    assert quotes and all(i.type == "quote" for i in quotes)
    lit = stores.inspirations.list(category="literature")
    assert lit and all(i.category == "literature" for i in lit)
