# league_heatmap/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from league_heatmap.api import routes_league
from league_heatmap.core.config import settings
from league_heatmap.middleware.cache_log import CacheHeaderLogMiddleware

logging.basicConfig(
    level=logging.DEBUG if settings.IS_LOCAL else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if not settings.IS_LOCAL:
        settings.validate_at_startup()
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.add_middleware(CacheHeaderLogMiddleware)

logger.info("CORS allow_origins = %s", settings.CORS_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1):5173$",
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
    max_age=600,
)

# Routers
app.include_router(routes_league.router)


@app.get("/health")
def health():
    return {"ok": True, "env": settings.APP_ENV}
