# scripts/seed_local_data.py
# -*- coding: utf-8 -*-
"""
Seed local pour EssayCircle : crée des comptes de démo, leurs rédactions et quelques revues.

Caractéristiques :
- Réexécutable : un compte existant est réutilisé, ses rédactions ne sont pas dupliquées
- Paramétrable via CLI : nb d'utilisateurs, nb de rédactions par utilisateur, part publique
- Option (--with-ai) pour lancer l'analyse automatique (provider selon AI_PROVIDER)
- Option (--wipe) pour drop+recreate le schéma (utile en dev)

Utilise :
- essaycircle/config.py              -> Settings.from_env()
- essaycircle/persistence/stores.py  -> build_stores()
- essaycircle/container.py           -> build_services()

Exemples :
    # 3 comptes, 2 rédactions chacun, sans analyse
    python scripts/seed_local_data.py

    # 5 comptes, 4 rédactions, moitié publiques, avec analyse IA
    python scripts/seed_local_data.py --users 5 --essays 4 --public-rate 0.5 --with-ai

    # Recommencer à zéro
    python scripts/seed_local_data.py --wipe
"""

from __future__ import annotations

import argparse
import random

from essaycircle.config import Settings
from essaycircle.container import build_services
from essaycircle.errors import ConflictError
from essaycircle.logging_config import configure_logging
from essaycircle.persistence.stores import build_stores

DEMO_PASSWORD = "demo-password"

TOPICS = [
    ("On reading slowly", "Reading slowly is a habit that most of us lost. However, the rewards are real. "
                          "It is clear that attention grows with practice.\n\nIn conclusion, read less but better."),
    ("Cities and trees", "Trees cool the streets in summer. The city i live in plants very few of them.\n\n"
                         "Planting more would be a cheap way to make summers bearable."),
    ("Why I write", "I write to find out what I think. Writing is obviously slower than talking, "
                    "but it leaves a trace.\n\nA trace can be corrected; a conversation cannot."),
    ("The value of boredom", "Boredom gets a bad reputation. Nevertheless it is the soil of most ideas.\n\n"
                             "Phones took it away from us, and we should take it back."),
    ("Learning a second language", "A second language changes the way you hear the first one. "
                                   "Everyone knows that grammar is the hard part.\n\nVocabulary comes with time."),
]


# -------------------------------------------------------------------
# Seeding
# -------------------------------------------------------------------

def ensure_user(services, username: str, display_name: str):
    """Inscrit le compte, ou le retrouve s'il existe déjà."""
    try:
        return services.auth.register_user({
            "username": username,
            "password": DEMO_PASSWORD,
            "displayName": display_name,
        })
    except ConflictError:
        return services.auth.login_user({"username": username, "password": DEMO_PASSWORD})


def seed(services, *, users: int, essays: int, public_rate: float, with_ai: bool) -> None:
    print(f"➡️  Seeding {users} user(s), {essays} rédaction(s) chacun"
          f" | publiques ~{int(public_rate * 100)}% | AI={'on' if with_ai else 'off'}")

    accounts = []
    total_essays = 0
    for i in range(1, users + 1):
        u = ensure_user(services, f"writer{i}", f"Writer {i}")
        accounts.append(u)
        print(f"   • User {u.id}  {u.username}")

        if services.essays.get_essays(author_id=u.id):
            continue
        for title, content in random.sample(TOPICS, k=min(essays, len(TOPICS))):
            services.essays.create_essay(u.id, {
                "title": title,
                "content": content,
                "isPublic": random.random() < public_rate,
            })
            total_essays += 1

    # Chaque compte relit une rédaction publique d'un autre compte
    public = services.essays.get_essays(is_public=True)
    for reviewer in accounts:
        candidates = [e for e in public if e.author_id != reviewer.id]
        if not candidates:
            continue
        essay = random.choice(candidates)
        services.peer_reviews.create_peer_review(essay.id, reviewer.id, {
            "grammarScore": random.randint(70, 100),
            "reviewComment": "Nice flow, a few rough edges.",
        })

    if with_ai:
        counters = services.ai.batch_analyze_essays()
        print(f"   • Analyse IA : {counters}")

    print(f"✅ Terminé : {len(accounts)} user(s), {total_essays} rédaction(s) créées.")


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------

def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Seed local data for EssayCircle")
    p.add_argument("--users", type=int, default=3, help="Nombre d'utilisateurs (défaut: 3)")
    p.add_argument("--essays", type=int, default=2, help="Rédactions par utilisateur (défaut: 2)")
    p.add_argument("--public-rate", type=float, default=0.7, help="Part de rédactions publiques (0..1, défaut: 0.7)")
    p.add_argument("--seed", type=int, default=None, help="Seed du générateur aléatoire pour reproductibilité")
    p.add_argument("--with-ai", action="store_true", help="Analyser les rédactions publiques (Stub/HF selon env)")
    p.add_argument("--wipe", action="store_true", help="Drop + recreate la base avant seeding")
    return p.parse_args()


def main():
    args = parse_args()

    if args.seed is not None:
        random.seed(args.seed)

    # l'analyse doit être terminée avant la fin du script
    settings = Settings.from_env().model_copy(update={"background_mode": "inline"})
    configure_logging(settings.log_level)

    if args.wipe:
        print("⚠️  Wipe : drop & recreate le schéma…")
    stores = build_stores(settings, drop_and_recreate=bool(args.wipe))
    services = build_services(settings, stores=stores)

    try:
        seed(
            services,
            users=max(1, args.users),
            essays=max(1, args.essays),
            public_rate=min(1.0, max(0.0, args.public_rate)),
            with_ai=bool(args.with_ai),
        )
    finally:
        services.close()


if __name__ == "__main__":
    main()
