"""Business rules for the issue lifecycle.

Each mutating operation runs as one unit of work on the caller's session:
it commits once on success and rolls back before re-raising on any error.
"""

import logging
import unicodedata
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import models
from app.database.models import SUMMARY_UNIQUE_INDEX
from app.exceptions import (
    ConflictError,
    InvalidInputError,
    InvalidStateError,
    IssueNotFoundError,
)
from app.repositories import issues as issue_repo
from app.schemas import (
    CREATOR_NAME_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    KEYWORD_MAX_LENGTH,
    SUMMARY_MAX_LENGTH,
    IssueForm,
)

logger = logging.getLogger(__name__)


def normalize_summary(summary: str) -> str:
    """NFKC-normalize a summary and strip surrounding whitespace."""
    return unicodedata.normalize("NFKC", summary).strip()


def _require_text(value: Optional[str], field: str, max_length: int) -> str:
    if value is None or not value.strip():
        raise InvalidInputError(f"{field} is required")
    if len(value) > max_length:
        raise InvalidInputError(f"{field} must be at most {max_length} characters")
    return value


def _is_summary_conflict(exc: IntegrityError) -> bool:
    """True when the active-summary unique index rejected the write."""
    message = str(exc.orig)
    # PostgreSQL names the index, SQLite names the column
    return SUMMARY_UNIQUE_INDEX in message or "issues.summary" in message


def _require_issue_id(issue_id: Optional[int]) -> int:
    if issue_id is None:
        raise InvalidInputError("issue id is required")
    if issue_id < 0:
        raise InvalidInputError("issue id must not be negative")
    return issue_id


async def find_issues(db: AsyncSession, keyword: Optional[str]) -> list[models.Issue]:
    """List active issues, filtered by ``keyword`` when one is given."""
    if keyword is not None and len(keyword) > KEYWORD_MAX_LENGTH:
        raise InvalidInputError(f"keyword must be at most {KEYWORD_MAX_LENGTH} characters")

    if keyword is None or not keyword.strip():
        return await issue_repo.find_all_active(db)
    # Stored summaries are NFKC-normalized, descriptions are stored as typed
    return await issue_repo.search(
        db, keyword, summary_keyword=unicodedata.normalize("NFKC", keyword)
    )


async def create_issue_with_creator(
    db: AsyncSession, summary: Optional[str], description: Optional[str], creator_name: Optional[str]
) -> models.Issue:
    """
    Create an issue together with its creator record.

    Both rows are committed together or not at all.

    Raises:
        InvalidInputError: If a field is missing, blank or too long
        ConflictError: If an active issue already has the same summary
    """
    summary = _require_text(
        normalize_summary(summary) if summary is not None else None, "summary", SUMMARY_MAX_LENGTH
    )
    description = _require_text(description, "description", DESCRIPTION_MAX_LENGTH)
    creator_name = _require_text(creator_name, "creator name", CREATOR_NAME_MAX_LENGTH)

    try:
        if await issue_repo.find_by_summary(db, summary) is not None:
            raise ConflictError("an issue with the same summary already exists")

        try:
            issue = await issue_repo.insert(db, summary, description)
        except IntegrityError as exc:
            # Lost a race against a concurrent insert of the same summary
            if _is_summary_conflict(exc):
                raise ConflictError("an issue with the same summary already exists") from exc
            raise

        await issue_repo.insert_creator(db, issue.id, creator_name)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(f"Created issue {issue.id}", extra={"issue_id": issue.id})
    return issue


async def find_detail_by_id(
    db: AsyncSession, issue_id: Optional[int]
) -> Optional[tuple[models.Issue, Optional[str]]]:
    """Return ``(issue, creator_name)`` for an active issue, or None."""
    _require_issue_id(issue_id)
    return await issue_repo.find_detail_by_id(db, issue_id)


async def update_issue(db: AsyncSession, form: IssueForm) -> bool:
    """
    Update an issue's summary, description and creator name.

    Returns:
        True if any row changed, False if the stored values were already equal

    Raises:
        InvalidInputError: If the id or a field is invalid
        ConflictError: If another active issue has the requested summary
        IssueNotFoundError: If no issue has this id
        InvalidStateError: If the issue has been deleted
    """
    issue_id = _require_issue_id(form.id)
    summary = _require_text(
        normalize_summary(form.summary) if form.summary is not None else None,
        "summary",
        SUMMARY_MAX_LENGTH,
    )
    description = _require_text(form.description, "description", DESCRIPTION_MAX_LENGTH)
    creator_name = form.creator_name
    if creator_name is not None:
        _require_text(creator_name, "creator name", CREATOR_NAME_MAX_LENGTH)

    try:
        duplicate = await issue_repo.find_by_summary(db, summary)
        if duplicate is not None and duplicate.id != issue_id:
            raise ConflictError("an issue with the same summary already exists")

        existing = await issue_repo.find_by_id(db, issue_id)
        if existing is None:
            raise IssueNotFoundError(f"issue {issue_id} does not exist")
        if existing.is_deleted:
            raise InvalidStateError(f"issue {issue_id} has been deleted")

        fields_differ = existing.summary != summary or existing.description != description
        try:
            updated_rows = await issue_repo.update_issue(db, issue_id, summary, description)
        except IntegrityError as exc:
            if _is_summary_conflict(exc):
                raise ConflictError("an issue with the same summary already exists") from exc
            raise

        # The conditional update also skips rows when the summary was taken after our check
        if not updated_rows and fields_differ:
            if await issue_repo.find_summary_holder(db, summary, exclude_id=issue_id) is not None:
                raise ConflictError("an issue with the same summary already exists")

        updated_creator_rows = 0
        if creator_name is not None:
            updated_creator_rows = await issue_repo.update_creator(db, issue_id, creator_name)

        await db.commit()
    except Exception:
        await db.rollback()
        raise

    changed = updated_rows > 0 or updated_creator_rows > 0
    logger.info(
        f"Update of issue {issue_id} {'applied' if changed else 'changed nothing'}",
        extra={"issue_id": issue_id, "issue_rows": updated_rows, "creator_rows": updated_creator_rows},
    )
    return changed


async def delete_issue(db: AsyncSession, issue_id: Optional[int]) -> bool:
    """Logically delete an issue. Returns False if there was no active issue to flag."""
    _require_issue_id(issue_id)

    try:
        deleted_rows = await issue_repo.delete_issue(db, issue_id)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    if deleted_rows:
        logger.info(f"Deleted issue {issue_id}", extra={"issue_id": issue_id})
    else:
        logger.info(f"No active issue {issue_id} to delete", extra={"issue_id": issue_id})
    return deleted_rows > 0
