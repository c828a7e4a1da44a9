"""
HTTP surface for the feeds.

    GET /favicon.ico   -> 301 to GitHub's favicon
    GET /{language}    -> RSS for a tracked language, 404 otherwise

Endpoints are plain `def` so FastAPI runs them in its threadpool; the
store lock is a threading.Lock and must not block the event loop.
"""

import logging
from typing import Callable

from fastapi import FastAPI, status
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from src.feed.models import LanguageFeed
from src.feed.rss import render_rss
from src.feed.store import FeedStore

logger = logging.getLogger(__name__)

FAVICON_URL = "https://github.githubassets.com/favicons/favicon.png"


def create_app(
    store: FeedStore,
    renderer: Callable[[LanguageFeed], str] = render_rss,
) -> FastAPI:
    app = FastAPI(title="GitHub releases feeds", docs_url=None, redoc_url=None, openapi_url=None)

    # registered before /{language} so it wins the route match
    @app.get("/favicon.ico")
    def favicon():
        return RedirectResponse(url=FAVICON_URL, status_code=status.HTTP_301_MOVED_PERMANENTLY)

    @app.get("/{language}")
    def language_feed(language: str):
        language = language.lower()
        if language not in store:
            return PlainTextResponse(f"language {language} not found", status_code=status.HTTP_404_NOT_FOUND)
        try:
            body = store.render(language, renderer)
        except Exception as e:
            logger.error(f"rendering feed for {language} failed: {e}")
            return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(content=body, media_type="application/xml")

    return app
