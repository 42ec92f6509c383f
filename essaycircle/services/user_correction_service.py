# essaycircle/services/user_correction_service.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from essaycircle.errors import NotFoundError, ValidationError
from essaycircle.persistence.models import UserCorrection
from essaycircle.persistence.repositories.contracts import (
    EssayStore, ProfileStore, UserCorrectionStore,
)
from essaycircle.schemas import UserCorrectionCreate, parse_input


class UserCorrectionService:
    """Suggestions manuelles d'un lecteur sur une rédaction."""

    def __init__(self, corrections: UserCorrectionStore, essays: EssayStore,
                 profiles: ProfileStore) -> None:
        self._corrections = corrections
        self._essays = essays
        self._profiles = profiles

    def get_corrections(self, essay_id: str) -> list[UserCorrection]:
        return self._corrections.list_for_essay(essay_id)

    def create_correction(self, essay_id: str, user_id: str, raw) -> UserCorrection:
        data = parse_input(UserCorrectionCreate, raw)
        essay = self._essays.get(essay_id)
        if essay is None:
            raise NotFoundError("Essay not found", code="ESSAY_NOT_FOUND")

        # les indices référencent le contenu tel qu'il est au moment de la création
        if not (data.start_index <= data.end_index <= len(essay.content)):
            raise ValidationError("Invalid data", errors=[{
                "field": "endIndex",
                "message": f"span [{data.start_index}, {data.end_index}) outside essay content "
                           f"(length {len(essay.content)})",
            }])

        profile = self._profiles.get(user_id)
        return self._corrections.create(
            essay_id=essay_id,
            user_id=user_id,
            user_name=profile.display_name if profile else "Anonymous",
            **data.model_dump(),
        )
