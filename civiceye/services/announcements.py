"""
Announcement Service
Listing, lookup and admin management of announcements
"""
import logging
import re
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Iterable, Type

from beanie import PydanticObjectId
from pymongo.errors import PyMongoError

from civiceye.errors import NotFound, ServerError, ValidationError
from civiceye.models.admin import Admin
from civiceye.models.announcement import (
    Announcement,
    AnnouncementCategory,
    AnnouncementCreate,
    AnnouncementListResponse,
    AnnouncementPriority,
    AnnouncementRead,
    AnnouncementStats,
    AnnouncementTally,
    AnnouncementUpdate,
    CategoryTally,
    CreatorSummary,
    PriorityTally,
)
from civiceye.services.announcement_query import (
    AnnouncementQuery,
    build_filters,
    build_pagination,
    build_sort,
)
from civiceye.utils.dates import utcnow
from civiceye.utils.ids import parse_object_id


logger = logging.getLogger(__name__)

PINCODE_PATTERN = re.compile(r"^[1-9][0-9]{5}$")

MAX_LENGTHS = {
    "title": 200,
    "description": 2000,
    "location": 100,
}

NOT_FOUND_MESSAGE = "Announcement not found"
REQUIRED_FIELDS_MESSAGE = (
    "Please provide all required fields: title, description, location, and pincode"
)
INVALID_PINCODE_MESSAGE = "Please provide a valid 6-digit pincode"


@contextmanager
def storage_errors(action: str):
    """Log storage failures in full and surface a generic server error."""
    try:
        yield
    except PyMongoError as exc:
        logger.exception("Error %s", action)
        raise ServerError(f"Server error while {action}") from exc


def validate_pincode(pincode: str) -> str:
    pincode = pincode.strip()
    if not PINCODE_PATTERN.match(pincode):
        raise ValidationError(INVALID_PINCODE_MESSAGE)
    return pincode


def clean_text(field: str, value: str) -> str:
    value = value.strip()
    limit = MAX_LENGTHS[field]
    if len(value) > limit:
        raise ValidationError(f"{field} cannot be longer than {limit} characters")
    return value


def parse_choice(enum_cls: Type[Enum], field: str, value: str) -> Enum:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {field}. Allowed values: {allowed}")


class AnnouncementService:
    """Announcement query engine and admin operations"""

    async def list_announcements(self, query: AnnouncementQuery) -> AnnouncementListResponse:
        """Return one page of live announcements plus pagination metadata"""
        now = utcnow()
        filters = build_filters(query, now)

        with storage_errors("fetching announcements"):
            announcements = await (
                Announcement.find(*filters)
                .sort(build_sort(query))
                .skip(query.skip)
                .limit(query.limit)
                .to_list()
            )
            total = await Announcement.find(*filters).count()
            data = await self._to_read(announcements)

        return AnnouncementListResponse(
            data=data,
            pagination=build_pagination(total, query.page, query.limit),
        )

    async def get_announcement(self, announcement_id: str) -> AnnouncementRead:
        """Fetch by id. Inactive or expired announcements are still returned."""
        with storage_errors("fetching announcement"):
            announcement = await self._get_document(announcement_id)
            return (await self._to_read([announcement]))[0]

    async def create_announcement(
        self, data: AnnouncementCreate, actor_id: PydanticObjectId
    ) -> AnnouncementRead:
        title = (data.title or "").strip()
        description = (data.description or "").strip()
        location = (data.location or "").strip()
        pincode = (data.pincode or "").strip()

        if not title or not description or not location or not pincode:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        announcement = Announcement(
            title=clean_text("title", title),
            description=clean_text("description", description),
            location=clean_text("location", location),
            pincode=validate_pincode(pincode),
            category=parse_choice(AnnouncementCategory, "category", data.category)
            if data.category else AnnouncementCategory.GENERAL,
            priority=parse_choice(AnnouncementPriority, "priority", data.priority)
            if data.priority else AnnouncementPriority.MEDIUM,
            scheduled_date=data.scheduled_date,
            expiry_date=data.expiry_date,
            created_by=actor_id,
        )

        with storage_errors("creating announcement"):
            await announcement.insert()
            logger.info("Announcement %s created by admin %s", announcement.id, actor_id)
            return (await self._to_read([announcement]))[0]

    async def update_announcement(
        self, announcement_id: str, data: AnnouncementUpdate, actor_id: PydanticObjectId
    ) -> AnnouncementRead:
        """
        Apply a partial update.

        Empty text values are ignored rather than clearing the field.
        Dates are cleared when their key is sent with an empty value.
        """
        with storage_errors("updating announcement"):
            announcement = await self._get_document(announcement_id)

        for field in ("title", "description", "location"):
            value = getattr(data, field)
            if value and value.strip():
                setattr(announcement, field, clean_text(field, value))

        if data.pincode:
            announcement.pincode = validate_pincode(data.pincode)
        if data.category:
            announcement.category = parse_choice(AnnouncementCategory, "category", data.category)
        if data.priority:
            announcement.priority = parse_choice(AnnouncementPriority, "priority", data.priority)

        if "scheduled_date" in data.model_fields_set:
            announcement.scheduled_date = data.scheduled_date
        if "expiry_date" in data.model_fields_set:
            announcement.expiry_date = data.expiry_date
        if data.is_active is not None:
            announcement.is_active = data.is_active

        announcement.updated_at = utcnow()

        with storage_errors("updating announcement"):
            await announcement.save()
            logger.info("Announcement %s updated by admin %s", announcement.id, actor_id)
            return (await self._to_read([announcement]))[0]

    async def delete_announcement(self, announcement_id: str, actor_id: PydanticObjectId) -> None:
        """Soft delete. Deleting an inactive announcement again is a no-op success."""
        with storage_errors("deleting announcement"):
            announcement = await self._get_document(announcement_id)
            announcement.is_active = False
            announcement.updated_at = utcnow()
            await announcement.save()
        logger.info("Announcement %s deactivated by admin %s", announcement.id, actor_id)

    async def get_stats(self) -> AnnouncementStats:
        """
        Totals over every announcement, live or not.

        by_category and by_priority hold one entry per document with a
        count of 1; consumers rely on their length matching total.
        """
        with storage_errors("fetching statistics"):
            tallies = await Announcement.find_all().project(AnnouncementTally).to_list()

        return AnnouncementStats(
            total=len(tallies),
            active=sum(1 for t in tallies if t.is_active),
            by_category=[CategoryTally(category=t.category) for t in tallies],
            by_priority=[PriorityTally(priority=t.priority) for t in tallies],
        )

    async def _get_document(self, announcement_id: str) -> Announcement:
        object_id = parse_object_id(announcement_id)
        announcement = await Announcement.get(object_id) if object_id else None
        if not announcement:
            raise NotFound(NOT_FOUND_MESSAGE)
        return announcement

    async def _creators(self, announcements: Iterable[Announcement]) -> Dict[PydanticObjectId, CreatorSummary]:
        ids = list({a.created_by for a in announcements if a.created_by})
        if not ids:
            return {}
        admins = await Admin.find({"_id": {"$in": ids}}).project(CreatorSummary).to_list()
        return {admin.id: admin for admin in admins}

    async def _to_read(self, announcements) -> list:
        creators = await self._creators(announcements)
        return [
            AnnouncementRead(
                **a.model_dump(exclude={"created_by", "revision_id"}),
                created_by=creators.get(a.created_by),
            )
            for a in announcements
        ]


announcement_service = AnnouncementService()
