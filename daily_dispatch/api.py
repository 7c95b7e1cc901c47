"""HTTP read API over the article cache."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config.sites import SiteStore
from .storage.cache import ArticleCache
from .storage.factory import get_article_cache, get_site_store

logger = structlog.get_logger()


def create_app(
    cache: ArticleCache = None,
    site_store: SiteStore = None,
    initial_refresh: bool = True,
    initial_refresh_delay: float = None,
) -> FastAPI:
    """Build the app. The first refresh is scheduled once the server starts."""
    cache = cache or get_article_cache()
    site_store = site_store or get_site_store()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if initial_refresh:
            cache.schedule_initial_refresh(initial_refresh_delay)
        yield
        await cache.close()

    app = FastAPI(title="Daily Dispatch", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.get("/health")
    def health_check():
        snapshot = cache.get()
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "articles": len(snapshot.items),
            "refreshing": cache.is_refreshing,
        }

    @app.get("/api/news")
    def get_news():
        return cache.get().to_dict()

    # async so the refresh task lands on the server's event loop
    @app.post("/api/news/refresh")
    async def refresh_news():
        return cache.refresh()

    @app.get("/api/sites")
    def get_sites():
        return {"sites": site_store.load()}

    @app.post("/api/sites")
    async def save_sites(request: Request):
        try:
            body = await request.json()
        except ValueError:
            body = None
        sites = body.get("sites") if isinstance(body, dict) else None
        if not isinstance(sites, str):
            return JSONResponse(status_code=400, content={"error": "sites must be a string"})

        try:
            site_store.save(sites)
        except OSError as e:
            logger.error("sites_save_failed", path=str(site_store.path), error=str(e))
            return JSONResponse(status_code=500, content={"error": "could not save sites"})
        return {"ok": True}

    return app
