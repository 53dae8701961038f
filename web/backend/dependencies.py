#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from typing import Generator, Optional

from fastapi import Header, HTTPException
from sqlalchemy.orm import Session

from core.config_loader import AppConfig, get_config
from database import database


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    yield from database.get_db()


def get_app_config() -> AppConfig:
    """Application configuration (overridable in tests)."""
    return get_config()


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """
    Identity of the caller, set by the authentication gateway in X-User-Id.

    Raises:
        HTTPException: 401 if the header is missing or blank.
    """
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()
