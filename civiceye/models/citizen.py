"""
Citizen Model
Database schema for citizen accounts
"""
from datetime import datetime
from typing import Optional
from pydantic import ConfigDict, EmailStr, Field
from beanie import Document, PydanticObjectId

from civiceye.models.common import CamelModel
from civiceye.utils.dates import utcnow


class Citizen(Document):
    """Citizen document model"""
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(alias="fullName")
    email: EmailStr
    phone: Optional[str] = None
    password_hash: str = Field(alias="passwordHash")
    is_active: bool = Field(default=True, alias="isActive")
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")

    class Settings:
        name = "citizens"
        indexes = ["email"]


class CitizenRegister(CamelModel):
    """Citizen registration request"""
    full_name: str
    email: EmailStr
    phone: Optional[str] = None
    password: str = Field(min_length=6)


class CitizenName(CamelModel):
    """Projection used to label issues with their reporter"""
    id: PydanticObjectId = Field(alias="_id")
    full_name: str = "Anonymous"

    class Settings:
        projection = {"_id": 1, "fullName": 1}
