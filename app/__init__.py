"""FastAPI Issue Tracker Application.

A FastAPI application for managing issues with:
- Create, list, search, view, update and logical delete
- Issue creator records stored alongside each issue
- SQLAlchemy ORM with async support
"""
