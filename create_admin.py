"""
Create an administrator account.

    python create_admin.py --email admin@civiceye.in --password secret --name "City Admin"
"""
import argparse
import asyncio
import logging

from motor.motor_asyncio import AsyncIOMotorClient

from civiceye.config import settings
from civiceye.database import init_db
from civiceye.models.admin import Admin
from civiceye.api.routes.auth import get_password_hash
from civiceye.utils.logger import setup_logging

logger = logging.getLogger("create_admin")


async def create_admin(email: str, password: str, name: str) -> Admin:
    client = AsyncIOMotorClient(settings.MONGODB_URL)
    try:
        await init_db(client[settings.MONGODB_DB_NAME])

        existing_admin = await Admin.find_one({"email": email})
        if existing_admin:
            logger.info("Admin '%s' already exists", email)
            return existing_admin

        admin = Admin(name=name, email=email, password_hash=get_password_hash(password))
        await admin.insert()
        logger.info("Admin '%s' created", email)
        return admin
    finally:
        client.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a CivicEye administrator")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--name", default="System Admin")
    args = parser.parse_args()

    setup_logging(settings.LOG_LEVEL)
    asyncio.run(create_admin(args.email, args.password, args.name))


if __name__ == "__main__":
    main()
