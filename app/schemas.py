from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

SUMMARY_MAX_LENGTH = 256
DESCRIPTION_MAX_LENGTH = 1000
CREATOR_NAME_MAX_LENGTH = 256
KEYWORD_MAX_LENGTH = 256


class IssueCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str = Field(max_length=SUMMARY_MAX_LENGTH)
    description: str = Field(max_length=DESCRIPTION_MAX_LENGTH)
    creator_name: str = Field(alias="creatorName", max_length=CREATOR_NAME_MAX_LENGTH)


class IssueUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str = Field(max_length=SUMMARY_MAX_LENGTH)
    description: str = Field(max_length=DESCRIPTION_MAX_LENGTH)
    creator_name: Optional[str] = Field(None, alias="creatorName", max_length=CREATOR_NAME_MAX_LENGTH)


class IssueForm(BaseModel):
    """Issue form as handled by the service; every field may be missing."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    creator_name: Optional[str] = Field(None, alias="creatorName")


class IssueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    summary: str
    description: str
    created_at: datetime
    updated_at: datetime
    is_deleted: bool


class IssueDetailResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    summary: str
    description: str
    creator_name: Optional[str] = Field(None, alias="creatorName")
    created_at: datetime
    updated_at: datetime


class IssueActionResult(BaseModel):
    success: bool
    message: str
