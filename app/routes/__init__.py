"""API route modules for FastAPI endpoints."""

from app.routes.index import router as index_router
from app.routes.issues import router as issues_router

__all__ = ["index_router", "issues_router"]
