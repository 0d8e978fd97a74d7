"""
Hype Service
At-most-once upvotes on issues and the startup backfill of hype fields
"""
import logging
from typing import Optional

from beanie import PydanticObjectId, UpdateResponse
from pymongo.errors import PyMongoError

from civiceye.errors import NotFound, ServerError, Unauthorized
from civiceye.models.issue import HypeResult, Issue
from civiceye.utils.ids import parse_object_id


logger = logging.getLogger(__name__)

ISSUE_NOT_FOUND_MESSAGE = "Issue not found"

# Fields added after the first issues were stored
BACKFILL_DEFAULTS = (
    ("hypePoints", 0),
    ("hypedBy", []),
    ("language", "en"),
)


class HypeService:
    """Idempotent per-citizen hype counter"""

    async def hype_issue(self, issue_id: str, citizen_id: Optional[PydanticObjectId]) -> HypeResult:
        """
        Hype an issue on behalf of a citizen.

        The membership check and the increment happen in one
        find_one_and_update, so concurrent duplicates from the same
        citizen can only ever add one point. A citizen who already hyped
        the issue gets an "Already hyped" success, not an error.
        """
        if not citizen_id:
            raise Unauthorized("Unauthorized")

        object_id = parse_object_id(issue_id)
        if object_id is None:
            raise NotFound(ISSUE_NOT_FOUND_MESSAGE)

        try:
            updated = await Issue.find_one(
                {"_id": object_id, "hypedBy": {"$ne": citizen_id}}
            ).update(
                {"$addToSet": {"hypedBy": citizen_id}, "$inc": {"hypePoints": 1}},
                response_type=UpdateResponse.NEW_DOCUMENT,
            )

            if updated:
                logger.info("Citizen %s hyped issue %s", citizen_id, object_id)
                return HypeResult(message="Hype added", hype_points=updated.hype_points)

            existing = await Issue.get(object_id)
        except PyMongoError as exc:
            logger.exception("Error hyping issue %s", issue_id)
            raise ServerError("Internal server error") from exc

        if not existing:
            raise NotFound(ISSUE_NOT_FOUND_MESSAGE)

        return HypeResult(message="Already hyped", hype_points=existing.hype_points)


async def ensure_hype_fields() -> int:
    """
    Backfill hype and language fields on issues that predate them.

    Only documents missing a field are touched, so running it on every
    start is safe. Failures are logged and swallowed; the server keeps
    serving either way.
    """
    touched = 0
    try:
        for field, default in BACKFILL_DEFAULTS:
            result = await Issue.find({field: {"$exists": False}}).update(
                {"$set": {field: default}}
            )
            touched += result.modified_count if result else 0
    except Exception:
        logger.exception("Failed to ensure hype and language fields")
        return touched

    if touched:
        logger.info("Backfilled hype fields on %d issue updates", touched)
    return touched


hype_service = HypeService()
