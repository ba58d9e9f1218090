"""FastAPI application exposing the faculty performance API."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, SEED_DEMO_DATA
from .db import get_session, init_db
from .db.fixtures import seed_dev_data
from .routers import reports as reports_router
from .routers import teachers as teachers_router
from .routes.upload import router as upload_router

LOGGER = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(_: FastAPI):  # pragma: no cover - exercised indirectly
    init_db()
    if SEED_DEMO_DATA:
        with get_session() as session:
            added = seed_dev_data(session)
        LOGGER.info("Seeded %d demo teachers", added)
    LOGGER.info("Database ready")
    yield


app = FastAPI(title="Faculty Deliberation Service", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(teachers_router.router)
app.include_router(reports_router.router)
app.include_router(upload_router)


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}
