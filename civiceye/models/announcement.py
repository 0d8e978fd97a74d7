"""
Announcement Model
Database schema and API payloads for public announcements
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from beanie import Document, PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pymongo import ASCENDING, DESCENDING, IndexModel

from civiceye.models.common import CamelModel, UTCDateTime
from civiceye.utils.dates import blank_to_none, to_naive_utc, utcnow


class AnnouncementCategory(str, Enum):
    EMERGENCY = "Emergency"
    MAINTENANCE = "Maintenance"
    GENERAL = "General"
    FESTIVAL = "Festival"
    TRAFFIC = "Traffic"
    UTILITY = "Utility"


class AnnouncementPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class Announcement(Document):
    """Announcement document model"""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    location: str
    pincode: str
    category: AnnouncementCategory = AnnouncementCategory.GENERAL
    priority: AnnouncementPriority = AnnouncementPriority.MEDIUM
    scheduled_date: Optional[datetime] = Field(default=None, alias="scheduledDate")
    expiry_date: Optional[datetime] = Field(default=None, alias="expiryDate")  # None = never expires
    is_active: bool = Field(default=True, alias="isActive")  # soft-delete flag
    created_by: Optional[PydanticObjectId] = Field(default=None, alias="createdBy")  # Admin id
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=utcnow, alias="updatedAt")

    @field_validator("scheduled_date", "expiry_date", "created_at", "updated_at")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)

    class Settings:
        name = "announcements"
        indexes = [
            IndexModel([("pincode", ASCENDING), ("createdAt", DESCENDING)]),
            IndexModel([("category", ASCENDING), ("createdAt", DESCENDING)]),
            IndexModel([("priority", ASCENDING), ("createdAt", DESCENDING)]),
            IndexModel([("isActive", ASCENDING), ("createdAt", DESCENDING)]),
        ]


class AnnouncementCreate(CamelModel):
    """Schema for creating an announcement.

    Required fields are checked by the service so that a missing field
    produces a 400 with a readable message instead of a schema error.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    pincode: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    scheduled_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None

    @field_validator("scheduled_date", "expiry_date", mode="before")
    @classmethod
    def blank_dates(cls, value):
        return blank_to_none(value)

    @field_validator("scheduled_date", "expiry_date")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)


class AnnouncementUpdate(AnnouncementCreate):
    """Partial update. Empty text values leave the stored value unchanged."""
    is_active: Optional[bool] = None


class CreatorSummary(BaseModel):
    """Display projection of the admin who created an announcement"""
    model_config = ConfigDict(populate_by_name=True)

    id: PydanticObjectId = Field(alias="_id")
    name: str
    email: str

    class Settings:
        projection = {"_id": 1, "name": 1, "email": 1}


class AnnouncementRead(CamelModel):
    """Announcement as returned to clients"""
    id: PydanticObjectId = Field(alias="_id")
    title: str
    description: str
    location: str
    pincode: str
    category: AnnouncementCategory
    priority: AnnouncementPriority
    scheduled_date: Optional[UTCDateTime] = None
    expiry_date: Optional[UTCDateTime] = None
    is_active: bool
    created_by: Optional[CreatorSummary] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime


class Pagination(CamelModel):
    current: int
    pages: int
    total: int
    has_next: bool
    has_prev: bool


class AnnouncementTally(BaseModel):
    """Projection used to compute statistics"""
    model_config = ConfigDict(populate_by_name=True)

    category: AnnouncementCategory = AnnouncementCategory.GENERAL
    priority: AnnouncementPriority = AnnouncementPriority.MEDIUM
    is_active: bool = Field(default=True, alias="isActive")

    class Settings:
        projection = {"category": 1, "priority": 1, "isActive": 1}


class CategoryTally(BaseModel):
    category: AnnouncementCategory
    count: int = 1


class PriorityTally(BaseModel):
    priority: AnnouncementPriority
    count: int = 1


class AnnouncementStats(CamelModel):
    total: int = 0
    active: int = 0
    by_category: List[CategoryTally] = []
    by_priority: List[PriorityTally] = []


class AnnouncementListResponse(BaseModel):
    success: bool = True
    data: List[AnnouncementRead]
    pagination: Pagination


class AnnouncementResponse(BaseModel):
    success: bool = True
    data: AnnouncementRead


class AnnouncementMutationResponse(BaseModel):
    success: bool = True
    message: str
    data: AnnouncementRead


class AnnouncementStatsResponse(BaseModel):
    success: bool = True
    data: AnnouncementStats


class MessageResponse(BaseModel):
    success: bool = True
    message: str
