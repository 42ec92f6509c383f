# essaycircle/persistence/seed_data.py
# -*- coding: utf-8 -*-
"""Catalogue d'inspirations chargé au démarrage (lecture seule côté API)."""

INSPIRATIONS = [
    {
        "title": "On the Art of Writing",
        "author": "Stephen King",
        "content": (
            "The scariest moment is always just before you start. After that, things can only get better.\n\n"
            "When you write a story, you're telling yourself the story. When you rewrite, your main job "
            "is taking out all the things that are not the story."
        ),
        "category": "literature",
        "type": "excerpt",
        "source": "On Writing: A Memoir of the Craft",
        "tags": ["writing", "creativity", "craft"],
        "difficulty": "intermediate",
        "read_time": 2,
    },
    {
        "title": "The Power of Observation",
        "author": "Maya Angelou",
        "content": (
            "There is no greater agony than bearing an untold story inside you.\n\n"
            "To be able to write, one must be a reader, observing the world through a different lens."
        ),
        "category": "literature",
        "type": "excerpt",
        "source": "The Heart of a Woman",
        "tags": ["observation", "empathy", "storytelling"],
        "difficulty": "intermediate",
        "read_time": 2,
    },
    {
        "title": "The Scientific Method",
        "author": "Carl Sagan",
        "content": (
            "Science is not only compatible with spirituality; it is a profound source of spirituality.\n\n"
            "The more we learn about the universe, the more we realize how much we don't know."
        ),
        "category": "science",
        "type": "excerpt",
        "source": "The Demon-Haunted World",
        "tags": ["science", "wonder", "universe"],
        "difficulty": "intermediate",
        "read_time": 2,
    },
    {
        "title": "The Examined Life",
        "author": "Socrates",
        "content": (
            "The unexamined life is not worth living.\n\n"
            "Wisdom begins with knowing that we know nothing."
        ),
        "category": "philosophy",
        "type": "quote",
        "source": "Apology (Plato)",
        "tags": ["philosophy", "wisdom", "self-knowledge"],
        "difficulty": "advanced",
        "read_time": 1,
    },
    {
        "title": "Brevity",
        "author": "William Strunk Jr.",
        "content": (
            "Vigorous writing is concise. A sentence should contain no unnecessary words, "
            "a paragraph no unnecessary sentences."
        ),
        "category": "writing",
        "type": "quote",
        "source": "The Elements of Style",
        "tags": ["style", "concision"],
        "difficulty": "beginner",
        "read_time": 1,
    },
]
