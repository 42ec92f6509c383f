# essaycircle/services/analysis_engine.py
# -*- coding: utf-8 -*-
"""
Moteur d'analyse "mock" : critique déterministe d'une rédaction.

Fonction pure de (title, content). Elle tient la place d'un vrai modèle et
expose la même interface que les providers IA (voir ai_service.py) :

    result = analyze(title, content)
    result.overall_score, result.corrections
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

CATEGORIES: Tuple[str, ...] = ("grammar", "style", "clarity", "structure", "content", "research")

# (sous-chaîne, catégorie, commentaire) : seule la première occurrence compte
TRIGGERS: Tuple[Tuple[str, str, str], ...] = (
    ("However", "grammar",
     "Add a comma after transitional words at the beginning of a sentence. Should be: 'However,'"),
    ("it's", "grammar",
     "Incorrect use of contraction. Use 'its' (possessive) instead of 'it's' (it is)."),
    ("very important", "style",
     "Replace weak intensifiers with stronger, more precise vocabulary. Consider: 'crucial' or 'essential'"),
    ("In conclusion", "style",
     "Vary your transitional phrases to avoid repetitive language. Try: 'To conclude' or 'Ultimately'"),
    ("this", "clarity",
     "Vague pronoun reference. Specify what 'this' refers to for better clarity."),
)

STRUCTURE_SPAN = 100
STRUCTURE_COMMENT = ("The opening paragraph would benefit from a clear thesis statement "
                     "to guide readers through your argument.")
CONTENT_COMMENT = ("Your main arguments are well-developed. Consider adding more specific "
                   "examples or evidence to strengthen your claims.")
RESEARCH_COMMENT = ("Consider citing authoritative sources to support your key points. "
                    "This would add credibility to your arguments.")

# score = max(plancher, base - pénalité * nb_problèmes)
SCORE_RULES: Dict[str, Tuple[int, int, int]] = {
    "grammar": (180, 20, 120),
    "style": (170, 15, 120),
    "clarity": (175, 20, 130),
    "structure": (180, 15, 140),
}
CONTENT_SCORE = 165
RESEARCH_SCORE = 155


@dataclass(frozen=True)
class CorrectionObject:
    """Commentaire catégorisé, ancré sur [text_start_index, text_end_index) du contenu."""
    category: str
    selected_text: str
    text_start_index: int
    text_end_index: int
    comment: str

    def to_dict(self) -> dict:
        """Forme stockée (JSON) et exposée par l'API."""
        return {
            "category": self.category,
            "selectedText": self.selected_text,
            "textStartIndex": self.text_start_index,
            "textEndIndex": self.text_end_index,
            "comment": self.comment,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CorrectionObject":
        return cls(
            category=data["category"],
            selected_text=data["selectedText"],
            text_start_index=int(data["textStartIndex"]),
            text_end_index=int(data["textEndIndex"]),
            comment=data["comment"],
        )


@dataclass(frozen=True)
class AIReviewResult:
    grammar_score: int
    style_score: int
    clarity_score: int
    structure_score: int
    content_score: int
    research_score: int
    overall_score: int
    corrections: List[CorrectionObject] = field(default_factory=list)

    def score_fields(self) -> dict:
        """Colonnes de PeerReview correspondantes (corrections sérialisées)."""
        return {
            "grammar_score": self.grammar_score,
            "style_score": self.style_score,
            "clarity_score": self.clarity_score,
            "structure_score": self.structure_score,
            "content_score": self.content_score,
            "research_score": self.research_score,
            "overall_score": self.overall_score,
            "corrections": [c.to_dict() for c in self.corrections],
        }


def _category_score(category: str, issues: int) -> int:
    base, penalty, floor = SCORE_RULES[category]
    return max(floor, base - penalty * issues)


def analyze(title: str, content: str) -> AIReviewResult:
    """
    Critique déterministe de la rédaction.

    1. Déclencheurs (première occurrence via find) -> grammar/grammar/style/style/clarity
    2. Premier paragraphe (avant le premier double saut de ligne) -> 1 correction structure
       sur ses 100 premiers caractères
    3. Deux corrections content/research sans ancrage (0, 0), toujours présentes
    4. Sous-scores avec planchers, content/research constants, overall = somme

    `title` n'influence pas le résultat du moteur mock ; il fait partie de
    l'interface pour les providers réels.
    """
    corrections: List[CorrectionObject] = []

    for needle, category, comment in TRIGGERS:
        start = content.find(needle)
        if start >= 0:
            corrections.append(CorrectionObject(category, needle, start, start + len(needle), comment))

    first_paragraph = content.split("\n\n")[0]
    if first_paragraph:
        end = min(STRUCTURE_SPAN, len(first_paragraph))
        corrections.append(CorrectionObject("structure", first_paragraph[:end], 0, end, STRUCTURE_COMMENT))

    corrections.append(CorrectionObject("content", "", 0, 0, CONTENT_COMMENT))
    corrections.append(CorrectionObject("research", "", 0, 0, RESEARCH_COMMENT))

    counts = {cat: sum(1 for c in corrections if c.category == cat) for cat in SCORE_RULES}
    grammar = _category_score("grammar", counts["grammar"])
    style = _category_score("style", counts["style"])
    clarity = _category_score("clarity", counts["clarity"])
    structure = _category_score("structure", counts["structure"])

    return AIReviewResult(
        grammar_score=grammar,
        style_score=style,
        clarity_score=clarity,
        structure_score=structure,
        content_score=CONTENT_SCORE,
        research_score=RESEARCH_SCORE,
        overall_score=grammar + style + clarity + structure + CONTENT_SCORE + RESEARCH_SCORE,
        corrections=[c for c in corrections if c.text_start_index >= 0],
    )


def count_words(content: str) -> int:
    """Nombre de tokens non vides séparés par des blancs."""
    return len(content.split())


# --- Démo locale (facultative) ---
if __name__ == "__main__":
    res = analyze("Demo", "However, it's very important. In conclusion, this matters.")
    print(f"overall={res.overall_score}  corrections={len(res.corrections)}")
    for c in res.corrections:
        print(f"  [{c.category}] {c.selected_text!r} {c.text_start_index}-{c.text_end_index}")
