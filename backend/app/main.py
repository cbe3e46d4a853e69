import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.routers import health, auth, users, matches, favorites, watched, movies
from app.core.config import get_settings
from app.db import Base, engine
from app import models  # ensure models are imported

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="CineMatch API",
    description="Match with friends, share favorite movies and get a movie of the day",
    version="1.0.0",
    debug=settings.DEBUG,
)

origins_env = settings.CORS_ALLOW_ORIGINS or ""
origins = [o.strip() for o in origins_env.split(",") if o.strip()] or [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(matches.router)
app.include_router(favorites.router)
app.include_router(watched.router)
app.include_router(movies.router)


@app.on_event("startup")
def init_db():
    # idempotent; disable when migrations own the schema
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured")
