from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, false, text
from app.database.config import Base


SUMMARY_UNIQUE_INDEX = "uq_issues_active_summary"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Issue(Base):
    __tablename__ = "issues"
    __table_args__ = (
        # At most one active issue per summary
        Index(
            SUMMARY_UNIQUE_INDEX,
            "summary",
            unique=True,
            postgresql_where=text("NOT is_deleted"),
            sqlite_where=text("is_deleted = 0"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    summary = Column(String(256), nullable=False)
    description = Column(String(1000), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    is_deleted = Column(Boolean, nullable=False, default=False, server_default=false())


class IssueCreator(Base):
    __tablename__ = "issues_creator"

    issue_id = Column(Integer, ForeignKey("issues.id"), primary_key=True)
    creator_name = Column(String(256), nullable=False)
    registered_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
