# tests/test_api.py
# -*- coding: utf-8 -*-
"""
Tests HTTP (FastAPI TestClient) sur des stores en mémoire, tâches de fond inline.

Ce fichier couvre :
- cycle de session : signup (cookie), me, logout, login,
- routes protégées sans session -> 401,
- format des erreurs ({message, code, errors?}) et codes HTTP (400/401/403/404/409),
- sérialisation camelCase des réponses,
- parcours complet : rédaction publique -> analyse -> revue, likes, corrections,
  messages, relations, profils, inspirations.
"""

import pytest
from fastapi.testclient import TestClient

from essaycircle.api.app import create_app
from essaycircle.config import Settings

SAMPLE = "However, it's very important. In conclusion, this matters."


# ---------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------

@pytest.fixture
def app():
    settings = Settings(store_backend="memory", background_mode="inline", session_backend="memory")
    return create_app(settings)


def client_for(app, username, display_name=None):
    """Client avec son propre cookie de session, déjà inscrit."""
    c = TestClient(app)
    r = c.post("/api/auth/signup", json={
        "username": username, "password": "secret", "displayName": display_name or username.capitalize(),
    })
    assert r.status_code == 201, r.text
    c.user_id = r.json()["id"]
    return c


@pytest.fixture
def alice(app):
    return client_for(app, "alice")


@pytest.fixture
def bob(app):
    return client_for(app, "bob")


@pytest.fixture
def anon(app):
    return TestClient(app)


def post_essay(client, is_public=True, content=SAMPLE):
    r = client.post("/api/essays", json={"title": "Demo", "content": content, "isPublic": is_public})
    assert r.status_code == 201, r.text
    return r.json()


# ---------------------------------------------------------------------
# SESSION
# ---------------------------------------------------------------------

def test_signup_sets_session(alice):
    r = alice.get("/api/auth/me")
    assert r.status_code == 200
    assert r.json() == {"id": alice.user_id, "username": "alice"}


def test_signup_duplicate_username(app, alice):
    r = TestClient(app).post("/api/auth/signup", json={"username": "alice", "password": "x", "displayName": "A"})
    assert r.status_code == 409
    assert r.json()["code"] == "USERNAME_TAKEN"


def test_signup_validation_error(anon):
    r = anon.post("/api/auth/signup", json={"username": "abc"})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Invalid data"
    assert {e["field"] for e in body["errors"]} >= {"password", "displayName"}


def test_malformed_json_is_a_400(anon):
    r = anon.post("/api/auth/login", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400


def test_logout_then_login(alice):
    assert alice.post("/api/auth/logout").status_code == 200
    assert alice.get("/api/auth/me").status_code == 401

    bad = alice.post("/api/auth/login", json={"username": "alice", "password": "nope"})
    assert bad.status_code == 401
    assert bad.json()["code"] == "INVALID_CREDENTIALS"

    ok = alice.post("/api/auth/login", json={"username": "alice", "password": "secret"})
    assert ok.status_code == 200
    assert alice.get("/api/auth/me").json()["id"] == alice.user_id


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/auth/me"),
        ("post", "/api/auth/logout"),
        ("post", "/api/essays"),
        ("post", "/api/essays/batch-analyze"),
        ("post", "/api/essays/x/analyze"),
        ("post", "/api/essays/x/like"),
        ("get", "/api/messages/x"),
        ("get", "/api/friendships/x"),
        ("get", "/api/peer-reviews/x"),
    ],
)
def test_protected_routes_require_session(anon, method, path):
    kwargs = {"json": {}} if method == "post" else {}
    r = getattr(anon, method)(path, **kwargs)
    assert r.status_code == 401


def test_forged_session_cookie_is_rejected(app):
    c = TestClient(app, cookies={app.state.settings.session_cookie: "forged"})
    assert c.get("/api/auth/me").status_code == 401


# ---------------------------------------------------------------------
# RÉDACTIONS
# ---------------------------------------------------------------------

def test_public_essay_flow(alice, anon):
    essay = post_essay(alice)
    assert essay["authorId"] == alice.user_id
    assert essay["authorName"] == "Alice"
    assert essay["wordCount"] == 8

    fetched = anon.get(f"/api/essays/{essay['id']}").json()
    assert fetched["isAnalyzed"] is True

    [review] = anon.get(f"/api/essays/{essay['id']}/peer-reviews").json()
    assert review["reviewerId"] == "AI"
    assert review["overallScore"] == 920
    assert review["isSubmitted"] is True
    assert review["corrections"][0] == {
        "category": "grammar",
        "selectedText": "However",
        "textStartIndex": 0,
        "textEndIndex": 7,
        "comment": review["corrections"][0]["comment"],
    }


def test_essay_listing_filters(alice, bob, anon):
    post_essay(alice, is_public=True)
    post_essay(alice, is_public=False)
    post_essay(bob, is_public=True)

    assert len(anon.get("/api/essays").json()) == 3
    assert len(anon.get("/api/essays", params={"isPublic": "true"}).json()) == 2
    assert len(anon.get("/api/essays", params={"authorId": bob.user_id}).json()) == 1


def test_missing_essay_is_404(anon):
    r = anon.get("/api/essays/nope")
    assert r.status_code == 404
    assert r.json() == {"message": "Essay not found", "code": "ESSAY_NOT_FOUND"}


def test_update_and_delete_essay(alice, bob):
    essay = post_essay(alice, is_public=False)

    assert bob.put(f"/api/essays/{essay['id']}", json={"title": "stolen"}).status_code == 403

    r = alice.put(f"/api/essays/{essay['id']}", json={"content": "three little words"})
    assert r.status_code == 200
    assert r.json()["wordCount"] == 3

    assert bob.delete(f"/api/essays/{essay['id']}").status_code == 403
    assert alice.delete(f"/api/essays/{essay['id']}").status_code == 204
    assert alice.get(f"/api/essays/{essay['id']}").status_code == 404


def test_analyze_routes(alice):
    essay = post_essay(alice, is_public=False)
    r = alice.post(f"/api/essays/{essay['id']}/analyze")
    assert r.status_code == 200
    assert r.json()["overallScore"] == 920

    assert alice.post("/api/essays/missing/analyze").status_code == 404

    post_essay(alice, is_public=True)
    batch = alice.post("/api/essays/batch-analyze").json()
    assert batch == {"message": "Batch analysis complete", "total": 1, "success": 0, "failed": 0, "skipped": 1}


def test_like_toggle_and_count(alice, bob, anon):
    essay = post_essay(alice)
    url = f"/api/essays/{essay['id']}"

    assert bob.post(f"{url}/like").json() == {"liked": True}
    assert anon.get(f"{url}/likes").json() == {"count": 1}
    assert bob.post(f"{url}/like").json() == {"liked": False}
    assert anon.get(f"{url}/likes").json() == {"count": 0}


def test_user_corrections(alice, bob, anon):
    essay = post_essay(alice)
    url = f"/api/essays/{essay['id']}/user-corrections"
    r = bob.post(url, json={
        "originalText": "it's", "suggestedText": "its", "explanation": "possessive",
        "startIndex": 9, "endIndex": 13,
    })
    assert r.status_code == 201
    assert r.json()["userName"] == "Bob"

    bad = bob.post(url, json={
        "originalText": "x", "suggestedText": "y", "explanation": "z",
        "startIndex": 0, "endIndex": 999,
    })
    assert bad.status_code == 400

    assert len(anon.get(url).json()) == 1


# ---------------------------------------------------------------------
# REVUES
# ---------------------------------------------------------------------

def test_peer_review_lifecycle(alice, bob):
    essay = post_essay(alice, is_public=False)
    url = f"/api/essays/{essay['id']}/peer-reviews"

    assert alice.post(url, json={}).status_code == 403

    created = bob.post(url, json={"grammarScore": 150})
    assert created.status_code == 201
    review = created.json()
    assert review["overallScore"] == 650

    again = bob.post(url, json={})
    assert again.status_code == 200
    assert again.json()["id"] == review["id"]

    correction = {
        "category": "clarity", "selectedText": "this",
        "textStartIndex": 45, "textEndIndex": 49, "comment": "vague",
    }
    r = bob.post(f"/api/peer-reviews/{review['id']}/corrections", json=correction)
    assert r.status_code == 200
    assert r.json()["corrections"] == [correction]

    assert alice.patch(f"/api/peer-reviews/{review['id']}", json={"styleScore": 1}).status_code == 403
    r = bob.patch(f"/api/peer-reviews/{review['id']}", json={"isSubmitted": True})
    assert r.json()["isSubmitted"] is True

    reopen = bob.patch(f"/api/peer-reviews/{review['id']}", json={"isSubmitted": False})
    assert reopen.status_code == 409
    assert reopen.json()["code"] == "REVIEW_SUBMITTED"

    locked = bob.post(f"/api/peer-reviews/{review['id']}/corrections", json=correction)
    assert locked.status_code == 409
    assert bob.get(f"/api/peer-reviews/{review['id']}").json()["corrections"] == [correction]


# ---------------------------------------------------------------------
# RELATIONS & MESSAGES
# ---------------------------------------------------------------------

def test_friendships(alice, bob):
    assert alice.post("/api/friendships", json={"addresseeId": alice.user_id}).status_code == 409

    r = alice.post("/api/friendships", json={"addresseeId": bob.user_id})
    assert r.status_code == 201
    fid = r.json()["id"]

    assert bob.post("/api/friendships", json={"addresseeId": alice.user_id}).status_code == 409
    assert alice.put(f"/api/friendships/{fid}", json={"status": "accepted"}).status_code == 403
    assert bob.put(f"/api/friendships/{fid}", json={"status": "accepted"}).json()["status"] == "accepted"

    mine = alice.get(f"/api/friendships/{alice.user_id}", params={"status": "accepted"}).json()
    assert [f["id"] for f in mine] == [fid]
    assert alice.get(f"/api/friendships/{bob.user_id}").status_code == 403


def test_messages(alice, bob):
    r = alice.post("/api/messages", json={"toUserId": bob.user_id, "content": "hello bob"})
    assert r.status_code == 201
    mid = r.json()["id"]
    assert r.json()["content"] == "hello bob"

    assert alice.get(f"/api/messages/{bob.user_id}").status_code == 403

    inbox = bob.get(f"/api/messages/{bob.user_id}", params={"unreadOnly": "true"}).json()
    assert [m["content"] for m in inbox] == ["hello bob"]

    assert alice.patch(f"/api/messages/{mid}/read").status_code == 403
    assert bob.patch(f"/api/messages/{mid}/read").json()["isRead"] is True
    assert bob.get(f"/api/messages/{bob.user_id}", params={"unreadOnly": "true"}).json() == []


# ---------------------------------------------------------------------
# PROFILS & INSPIRATIONS
# ---------------------------------------------------------------------

def test_profiles(alice, bob, anon):
    profile = anon.get(f"/api/profile/{alice.user_id}").json()
    assert profile["userId"] == alice.user_id
    assert profile["displayName"] == "Alice"

    assert bob.put(f"/api/profile/{alice.user_id}", json={"bio": "x"}).status_code == 403
    r = alice.put(f"/api/profile/{alice.user_id}", json={"bio": "Writer."})
    assert r.json()["bio"] == "Writer."

    r = alice.put(f"/api/profile/{alice.user_id}", json={"displayName": None})
    assert r.status_code == 200
    assert r.json()["displayName"] == "Alice"

    assert alice.post("/api/profile", json={"displayName": "Twice"}).status_code == 409
    assert {p["username"] for p in anon.get("/api/users").json()} == {"alice", "bob"}
    assert anon.get(f"/api/users/{bob.user_id}").json()["username"] == "bob"
    assert anon.get("/api/users/ghost").status_code == 404


def test_inspirations(anon):
    items = anon.get("/api/inspirations").json()
    assert items
    first = anon.get(f"/api/inspirations/{items[0]['id']}").json()
    assert first["title"] == items[0]["title"]

    quotes = anon.get("/api/inspirations", params={"type": "quote"}).json()
    assert quotes and all(q["type"] == "quote" for q in quotes)
    assert anon.get("/api/inspirations/missing").status_code == 404
