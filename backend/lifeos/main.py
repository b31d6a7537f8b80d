# backend/lifeos/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from lifeos.api.endpoints import (
    ai,
    auth,
    content_ideas,
    daily_summary,
    focus_sessions,
    health,
    notes,
    tasks,
)
from lifeos.core.config import settings
from lifeos.core.logging import setup_logging
from lifeos.db.mongo import close_mongo_connection, connect_to_mongo

setup_logging()
logger = logging.getLogger(__name__)

if not settings.is_production:
    logger.warning("Running in %s mode", settings.ENVIRONMENT)


# DB connect / disconnect
@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_mongo()
    yield
    await close_mongo_connection()


app = FastAPI(title="AI Life OS", lifespan=lifespan)

# --- middleware ---

# 1. CORS for the web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 2. Session cookie: only holds the OAuth state between login and callback
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.JWT_SECRET_KEY,
    https_only=settings.is_production,
    # lax so the cookie survives the Google redirect
    same_site="lax",
    max_age=3600,
)


@app.get("/")
async def read_root():
    return {"message": "Backend is running!"}


app.include_router(health.router)
app.include_router(auth.router)
app.include_router(tasks.router)
app.include_router(notes.router)
app.include_router(focus_sessions.router)
app.include_router(content_ideas.router)
app.include_router(daily_summary.router)
app.include_router(ai.router)
