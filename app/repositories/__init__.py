"""Data access modules, one per aggregate."""

from app.repositories import issues

__all__ = ["issues"]
