"""Data access for issues and their creators.

Functions take the caller's session and never commit; the service layer owns
the transaction boundaries.
"""

from typing import Optional

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.database import models
from app.database.models import utcnow


async def find_by_summary(db: AsyncSession, summary: str) -> Optional[models.Issue]:
    """Return the active issue holding ``summary``, if any."""
    result = await db.execute(
        select(models.Issue)
        .where(models.Issue.summary == summary, models.Issue.is_deleted.is_(False))
        .limit(1)
    )
    return result.scalars().first()


async def insert(db: AsyncSession, summary: str, description: str) -> models.Issue:
    now = utcnow()
    issue = models.Issue(
        summary=summary,
        description=description,
        created_at=now,
        updated_at=now,
        is_deleted=False,
    )
    db.add(issue)
    # Flush so the generated id is available to the caller
    await db.flush()
    return issue


async def insert_creator(db: AsyncSession, issue_id: int, creator_name: str) -> models.IssueCreator:
    creator = models.IssueCreator(issue_id=issue_id, creator_name=creator_name)
    db.add(creator)
    await db.flush()
    return creator


async def find_by_id(db: AsyncSession, issue_id: int) -> Optional[models.Issue]:
    """Return the issue with ``issue_id`` whether or not it is deleted."""
    result = await db.execute(
        select(models.Issue)
        .where(models.Issue.id == issue_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def find_detail_by_id(
    db: AsyncSession, issue_id: int
) -> Optional[tuple[models.Issue, Optional[str]]]:
    """Return ``(issue, creator_name)`` for an active issue."""
    result = await db.execute(
        select(models.Issue, models.IssueCreator.creator_name)
        .outerjoin(models.IssueCreator, models.IssueCreator.issue_id == models.Issue.id)
        .where(models.Issue.id == issue_id, models.Issue.is_deleted.is_(False))
        .execution_options(populate_existing=True)
    )
    row = result.first()
    if row is None:
        return None
    return row[0], row[1]


async def find_all_active(db: AsyncSession) -> list[models.Issue]:
    result = await db.execute(
        select(models.Issue)
        .where(models.Issue.is_deleted.is_(False))
        .order_by(models.Issue.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def find_summary_holder(
    db: AsyncSession, summary: str, exclude_id: int
) -> Optional[models.Issue]:
    """Return an active issue other than ``exclude_id`` that holds ``summary``."""
    result = await db.execute(
        select(models.Issue)
        .where(
            models.Issue.summary == summary,
            models.Issue.id != exclude_id,
            models.Issue.is_deleted.is_(False),
        )
        .limit(1)
    )
    return result.scalars().first()


async def search(
    db: AsyncSession, keyword: Optional[str], summary_keyword: Optional[str] = None
) -> list[models.Issue]:
    """Substring search over summary and description of active issues.

    ``summary_keyword`` is matched against summaries instead of ``keyword``
    when given.
    """
    if not keyword:
        return await find_all_active(db)

    result = await db.execute(
        select(models.Issue)
        .where(
            models.Issue.is_deleted.is_(False),
            or_(
                models.Issue.summary.contains(summary_keyword or keyword, autoescape=True),
                models.Issue.description.contains(keyword, autoescape=True),
            ),
        )
        .order_by(models.Issue.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def update_issue(db: AsyncSession, issue_id: int, summary: str, description: str) -> int:
    """Update summary and description in a single conditional statement.

    Nothing is written when the issue is deleted, when the values are
    unchanged, or when another active issue already holds ``summary``.
    """
    other = aliased(models.Issue)
    summary_taken = (
        select(other.id)
        .where(
            other.summary == summary,
            other.id != issue_id,
            other.is_deleted.is_(False),
        )
        .exists()
    )
    result = await db.execute(
        update(models.Issue)
        .where(
            models.Issue.id == issue_id,
            models.Issue.is_deleted.is_(False),
            or_(models.Issue.summary != summary, models.Issue.description != description),
            ~summary_taken,
        )
        .values(summary=summary, description=description, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def update_creator(db: AsyncSession, issue_id: int, creator_name: str) -> int:
    result = await db.execute(
        update(models.IssueCreator)
        .where(
            models.IssueCreator.issue_id == issue_id,
            models.IssueCreator.creator_name != creator_name,
        )
        .values(creator_name=creator_name)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def delete_issue(db: AsyncSession, issue_id: int) -> int:
    """Flag an active issue as deleted. Returns 0 if there was nothing to flag."""
    result = await db.execute(
        update(models.Issue)
        .where(models.Issue.id == issue_id, models.Issue.is_deleted.is_(False))
        .values(is_deleted=True)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount
