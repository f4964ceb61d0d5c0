# app/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from app.core.config import get_settings
from app.core.database import Base, engine
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.auth.routes import router as auth_router
from app.ticket.routes import router as ticket_router

settings = get_settings()
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
)

origins = settings.cors_origins
if origins == ["*"]:
    logger.warning("CORS_ORIGINS is \"*\": cross-origin browsers will not send the session cookie")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    # browsers refuse credentialed requests against a wildcard origin
    allow_credentials=origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie=settings.SESSION_COOKIE,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
)

register_exception_handlers(app)

# Routers
app.include_router(auth_router)
app.include_router(ticket_router)

logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "success", "message": "ok"}
