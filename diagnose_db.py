import asyncio
import logging

from motor.motor_asyncio import AsyncIOMotorClient

from civiceye.config import settings
from civiceye.database import init_db
from civiceye.models.admin import Admin
from civiceye.models.announcement import Announcement
from civiceye.models.issue import Issue
from civiceye.services.announcement_query import AnnouncementQuery, build_filters
from civiceye.services.hype import ensure_hype_fields
from civiceye.utils.dates import utcnow
from civiceye.utils.logger import setup_logging

logger = logging.getLogger("diagnose_db")


async def diagnose():
    logger.info("Target URL: %s...", settings.MONGODB_URL[:30])
    logger.info("Database: %s", settings.MONGODB_DB_NAME)

    client = AsyncIOMotorClient(settings.MONGODB_URL, serverSelectionTimeoutMS=5000)
    try:
        await client.admin.command("ping")
        logger.info("MongoDB ping successful")

        await init_db(client[settings.MONGODB_DB_NAME])

        now = utcnow()
        total = await Announcement.find().count()
        live = await Announcement.find(*build_filters(AnnouncementQuery(), now)).count()
        logger.info("Announcements: %d total, %d live", total, live)
        logger.info("Admins: %d", await Admin.find().count())

        missing = await Issue.find({"hypePoints": {"$exists": False}}).count()
        logger.info("Issues: %d total, %d missing hype fields", await Issue.find().count(), missing)
        if missing:
            await ensure_hype_fields()
    except Exception:
        logger.exception("Connection error")
        logger.error("Check the IP allow-list, the credentials in DB_URL, and that port 27017 is reachable.")
    finally:
        client.close()


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    asyncio.run(diagnose())
