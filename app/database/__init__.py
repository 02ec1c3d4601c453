"""Database configuration, models, and session management."""

from app.database.config import engine, Base, AsyncSessionLocal, get_db
from app.database import models

__all__ = ["engine", "Base", "AsyncSessionLocal", "get_db", "models"]
