"""
Issue Model
Database schema for civic issues reported by citizens
"""
from enum import Enum
from typing import List, Optional

from beanie import Document, PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

from civiceye.models.common import CamelModel, UTCDateTime
from civiceye.utils.dates import utcnow


SUPPORTED_LANGUAGES = ("en", "hi", "kn")


class IssueStatus(str, Enum):
    REPORTED = "Reported"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    REJECTED = "Rejected"


class IssueLocation(BaseModel):
    """GPS position of the reported issue"""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None


class Issue(Document):
    """
    Issue document model.

    hype_points always equals len(hyped_by); the two are only ever
    changed together in a single conditional update.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    issue_type: str = Field(alias="issueType")
    location: IssueLocation
    status: IssueStatus = IssueStatus.REPORTED
    citizen_id: Optional[PydanticObjectId] = Field(default=None, alias="citizenId")
    language: str = "en"
    hype_points: int = Field(default=0, ge=0, alias="hypePoints")
    hyped_by: List[PydanticObjectId] = Field(default_factory=list, alias="hypedBy")
    created_at: UTCDateTime = Field(default_factory=utcnow, alias="createdAt")
    updated_at: UTCDateTime = Field(default_factory=utcnow, alias="updatedAt")

    class Settings:
        name = "issues"
        indexes = ["title", "language", "createdAt"]


class IssueCreate(CamelModel):
    """Schema for reporting an issue"""
    title: Optional[str] = "Untitled"
    description: Optional[str] = None
    location: Optional[IssueLocation] = None
    issue_type: Optional[str] = None
    language: Optional[str] = "en"

    @field_validator("language")
    @classmethod
    def default_language(cls, value):
        return value if value in SUPPORTED_LANGUAGES else "en"


class IssueSummary(CamelModel):
    """Issue as listed to citizens"""
    id: PydanticObjectId = Field(alias="_id")
    title: str
    description: str
    type: str
    location: IssueLocation
    reported_by: str
    reported_at: UTCDateTime
    status: IssueStatus
    hype_points: int
    user_has_hyped: bool


class IssueListResponse(BaseModel):
    issues: List[IssueSummary]


class IssueCreatedResponse(BaseModel):
    message: str
    issue: Issue


class HypeResult(CamelModel):
    """Outcome of a hype request; duplicates are a success, not an error"""
    message: str
    hype_points: int
    user_has_hyped: bool = True
