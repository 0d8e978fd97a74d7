"""
Admin Model
Database schema for administrator accounts
"""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from beanie import Document

from civiceye.utils.dates import utcnow


class Admin(Document):
    """Administrator document model"""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: EmailStr
    password_hash: str = Field(alias="passwordHash")
    is_active: bool = Field(default=True, alias="isActive")
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")

    class Settings:
        name = "admins"
        indexes = ["email"]


class AdminRegister(BaseModel):
    """Admin registration request"""
    name: str
    email: EmailStr
    password: str = Field(min_length=6)
