# essaycircle/persistence/repositories/peer_reviews_repo.py
# -*- coding: utf-8 -*-
from sqlalchemy import select, and_
from sqlalchemy.exc import IntegrityError
from essaycircle.errors import DuplicateError, RecordLockedError
from essaycircle.persistence.db import get_session
from essaycircle.persistence.models import PeerReview, utcnow


def _by_pair(essay_id: str, reviewer_id: str):
    return select(PeerReview).where(
        and_(PeerReview.essay_id == essay_id, PeerReview.reviewer_id == reviewer_id)
    ).limit(1)


class PeerReviewRepository:
    def list_for_essay(self, essay_id: str) -> list[PeerReview]:
        with get_session() as s:
            stmt = (select(PeerReview)
                    .where(PeerReview.essay_id == essay_id)
                    .order_by(PeerReview.created_at.desc()))
            rows = list(s.scalars(stmt))
            for r in rows:
                s.expunge(r)
            return rows

    def get(self, essay_id: str, reviewer_id: str) -> PeerReview | None:
        with get_session() as s:
            r = s.scalar(_by_pair(essay_id, reviewer_id))
            if not r:
                return None
            s.expunge(r)
            return r

    def get_by_id(self, review_id: str) -> PeerReview | None:
        with get_session() as s:
            r = s.get(PeerReview, review_id)
            if not r:
                return None
            s.expunge(r)
            return r

    def create(self, **fields) -> PeerReview:
        try:
            with get_session() as s:
                r = PeerReview(**fields)
                s.add(r)
                s.flush(); s.refresh(r); s.expunge(r)
                return r
        except IntegrityError as exc:
            raise DuplicateError(
                f"revue déjà présente ({fields.get('essay_id')}, {fields.get('reviewer_id')})"
            ) from exc

    def update(self, review_id: str, **fields) -> PeerReview | None:
        with get_session() as s:
            r = s.get(PeerReview, review_id)
            if not r:
                return None
            for k, v in fields.items():
                setattr(r, k, v)
            r.updated_at = utcnow()
            s.flush(); s.refresh(r); s.expunge(r)
            return r

    def upsert(self, essay_id: str, reviewer_id: str, update_fields: dict,
               create_fields: dict | None = None) -> PeerReview:
        """
        INSERT, et sur conflit de la contrainte (essay_id, reviewer_id) : UPDATE.
        `create_fields` ne s'applique qu'à la création (ex. is_submitted=True).
        L'id et created_at d'une revue existante sont conservés.
        """
        try:
            with get_session() as s:
                rec = s.scalar(_by_pair(essay_id, reviewer_id))
                if rec:
                    for k, v in update_fields.items():
                        setattr(rec, k, v)
                    rec.updated_at = utcnow()
                    s.flush(); s.refresh(rec); s.expunge(rec)
                    return rec
                r = PeerReview(essay_id=essay_id, reviewer_id=reviewer_id,
                               **{**(create_fields or {}), **update_fields})
                s.add(r); s.flush(); s.refresh(r); s.expunge(r)
                return r
        except IntegrityError:
            # un insert concurrent a gagné la course : on met à jour sa ligne
            with get_session() as s:
                rec = s.scalar(_by_pair(essay_id, reviewer_id))
                for k, v in update_fields.items():
                    setattr(rec, k, v)
                rec.updated_at = utcnow()
                s.flush(); s.refresh(rec); s.expunge(rec)
                return rec

    def append_correction(self, review_id: str, correction: dict) -> PeerReview | None:
        with get_session() as s:
            r = s.scalar(select(PeerReview).where(PeerReview.id == review_id).with_for_update())
            if not r:
                return None
            if r.is_submitted:
                raise RecordLockedError(f"revue {review_id} déjà soumise")
            # nouvelle liste : la colonne JSON n'est pas mutable-trackée
            r.corrections = [*(r.corrections or []), dict(correction)]
            r.updated_at = utcnow()
            s.flush(); s.refresh(r); s.expunge(r)
            return r
