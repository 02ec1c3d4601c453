from typing import Optional

from fastapi import APIRouter, HTTPException, status, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas import (
    IssueActionResult,
    IssueCreate,
    IssueDetailResponse,
    IssueForm,
    IssueResponse,
    IssueUpdate,
)
from app.database.config import get_db
from app.database import models
from app.exceptions import IssueServiceError
from app.services import issues as issue_service

router = APIRouter(prefix="/issues", tags=["issues"])


def _http_error(exc: IssueServiceError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=str(exc))


def _detail_response(issue: models.Issue, creator_name: Optional[str]) -> IssueDetailResponse:
    return IssueDetailResponse(
        id=issue.id,
        summary=issue.summary,
        description=issue.description,
        creator_name=creator_name,
        created_at=issue.created_at,
        updated_at=issue.updated_at,
    )


@router.get("", response_model=list[IssueResponse])
async def list_issues(keyword: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    """List active issues, optionally filtered by keyword."""
    try:
        return await issue_service.find_issues(db, keyword)
    except IssueServiceError as exc:
        raise _http_error(exc) from exc


@router.get("/creationForm", response_model=IssueForm, response_model_exclude_none=True)
async def show_creation_form():
    """Blank creation form"""
    return IssueForm(summary="", description="", creator_name="")


@router.post("", response_model=IssueDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_issue(payload: IssueCreate, db: AsyncSession = Depends(get_db)):
    """Create new issue with its creator"""
    try:
        issue = await issue_service.create_issue_with_creator(
            db, payload.summary, payload.description, payload.creator_name
        )
    except IssueServiceError as exc:
        raise _http_error(exc) from exc

    return _detail_response(issue, payload.creator_name)


@router.get("/{issue_id}", response_model=IssueDetailResponse, status_code=status.HTTP_200_OK)
async def get_issue(issue_id: int, db: AsyncSession = Depends(get_db)):
    """Get issue detail by ID"""
    try:
        detail = await issue_service.find_detail_by_id(db, issue_id)
    except IssueServiceError as exc:
        raise _http_error(exc) from exc

    if not detail:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Issue not found"
        )

    return _detail_response(*detail)


@router.post("/{issue_id}/update", response_model=IssueActionResult)
async def update_issue(issue_id: int, payload: IssueUpdate, db: AsyncSession = Depends(get_db)):
    """Update issue by ID"""
    form = IssueForm(
        id=issue_id,
        summary=payload.summary,
        description=payload.description,
        creator_name=payload.creator_name,
    )
    try:
        updated = await issue_service.update_issue(db, form)
    except IssueServiceError as exc:
        raise _http_error(exc) from exc

    if updated:
        return IssueActionResult(success=True, message="Issue updated")
    return IssueActionResult(success=False, message="No changes to apply")


@router.post("/{issue_id}/delete", response_model=IssueActionResult)
async def delete_issue(issue_id: int, db: AsyncSession = Depends(get_db)):
    """Logically delete issue by ID"""
    try:
        deleted = await issue_service.delete_issue(db, issue_id)
    except IssueServiceError as exc:
        raise _http_error(exc) from exc

    if deleted:
        return IssueActionResult(success=True, message="Issue deleted")
    return IssueActionResult(success=False, message="Issue was not found or already deleted")
