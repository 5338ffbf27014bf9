from __future__ import annotations

import logging
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .api import auth_router, groups_router, public_router, tables_router, users_router
from .core.config import settings
from .core.db import SessionLocal, engine
from .core.exceptions import ErrorMessages, PokerNightError, StoreError
from .models.db import Base
from .services.user_service import UserService


def configure_logging() -> None:
    """Configure structured logging for the application."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Set specific log levels for third-party libraries
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)
configure_logging()


def create_app() -> FastAPI:
    app = FastAPI(title="Poker Night", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log incoming requests."""
        logger.info(f"Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.info(f"Response: {request.method} {request.url.path} - Status: {response.status_code}")
        return response

    @app.exception_handler(PokerNightError)
    async def handle_domain_error(request: Request, exc: PokerNightError):
        logger.info(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(SQLAlchemyError)
    async def handle_store_error(request: Request, exc: SQLAlchemyError):
        # Failures outside commit/flush, mostly reads. get_db closes the session.
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        err = StoreError(ErrorMessages.STORE_FAILURE, details={"reason": str(exc)})
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    app.include_router(auth_router)
    app.include_router(tables_router)
    app.include_router(groups_router)
    app.include_router(users_router)
    app.include_router(public_router)

    @app.get("/")
    def root():
        return {"ok": True, "service": "poker-night", "docs": "/docs"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.on_event("startup")
    def startup():
        logger.info("Starting application...")
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created/verified")

        db = SessionLocal()
        try:
            admin = UserService.ensure_admin(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
            logger.info(f"Admin user available: '{admin.username}'")
        finally:
            db.close()

        logger.info("Application startup complete")

    return app


app = create_app()
