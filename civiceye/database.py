"""
Database Setup
Registers Beanie document models on a Motor database
"""
from beanie import init_beanie

from civiceye.models.admin import Admin
from civiceye.models.announcement import Announcement
from civiceye.models.citizen import Citizen
from civiceye.models.issue import Issue

DOCUMENT_MODELS = [Admin, Citizen, Announcement, Issue]


async def init_db(database) -> None:
    """Initialize Beanie with every document model"""
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
