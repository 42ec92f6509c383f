# essaycircle/main.py
# -*- coding: utf-8 -*-
"""
Point d'entrée ASGI.

    uvicorn essaycircle.main:app --reload
"""

from essaycircle.api.app import create_app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("essaycircle.main:app", host="0.0.0.0", port=8000)
