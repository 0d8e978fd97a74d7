"""
Announcement Query Builder
Turns list query parameters into a MongoDB filter, sort and page window
"""
import math
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel
from pymongo import ASCENDING, DESCENDING

from civiceye.models.announcement import Pagination


ALL_SENTINEL = "All"
DEFAULT_SORT_FIELD = "createdAt"
# Keeps skip = (page - 1) * limit inside a BSON int64
MAX_PAGE = 10 ** 9
LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

SORTABLE_FIELDS = {
    "createdAt",
    "updatedAt",
    "scheduledDate",
    "expiryDate",
    "title",
    "location",
    "pincode",
    "category",
    "priority",
}


def coerce_positive_int(value: Any, default: int, maximum: Optional[int] = None) -> int:
    """
    Parse a query value as an integer >= 1.

    Only the leading integer is read, so "2.5" and "12abc" give 2 and 12.
    Values with no leading digits fall back to default.
    """
    if value is None:
        return default
    match = LEADING_INT.match(str(value))
    if match is None:
        return default
    number = int(match.group(1))
    number = max(number, 1)
    if maximum is not None:
        number = min(number, maximum)
    return number


class AnnouncementQuery(BaseModel):
    """Normalized list parameters"""
    pincode: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = 10
    sort_by: str = DEFAULT_SORT_FIELD
    sort_order: str = "desc"

    @classmethod
    def from_params(
        cls,
        *,
        pincode: Optional[str] = None,
        category: Optional[str] = None,
        priority: Optional[str] = None,
        search: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        default_limit: int = 10,
        max_limit: Optional[int] = None,
    ) -> "AnnouncementQuery":
        return cls(
            pincode=pincode.strip() if pincode else None,
            category=category if category and category != ALL_SENTINEL else None,
            priority=priority if priority and priority != ALL_SENTINEL else None,
            search=search or None,
            page=coerce_positive_int(page, 1, MAX_PAGE),
            limit=coerce_positive_int(limit, default_limit, max_limit),
            sort_by=sort_by if sort_by in SORTABLE_FIELDS else DEFAULT_SORT_FIELD,
            sort_order=sort_order or "desc",
        )

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def build_filters(query: AnnouncementQuery, now: datetime) -> List[Dict[str, Any]]:
    """
    Build the AND-ed list of clauses for the list endpoint.

    The active flag and the expiry window are always present; `now` is
    captured once by the caller so find and count see the same snapshot.
    """
    filters: List[Dict[str, Any]] = [
        {"isActive": True},
        {"$or": [{"expiryDate": None}, {"expiryDate": {"$gt": now}}]},
    ]

    if query.pincode:
        filters.append({"pincode": query.pincode})

    if query.category:
        filters.append({"category": query.category})

    if query.priority:
        filters.append({"priority": query.priority})

    if query.search:
        pattern = {"$regex": re.escape(query.search), "$options": "i"}
        filters.append({
            "$or": [
                {"title": pattern},
                {"description": pattern},
                {"location": pattern},
            ]
        })

    return filters


def build_sort(query: AnnouncementQuery) -> List[Tuple[str, int]]:
    # "desc" is descending, anything else ascending; _id keeps pages stable on ties
    direction = DESCENDING if query.sort_order == "desc" else ASCENDING
    return [(query.sort_by, direction), ("_id", direction)]


def build_pagination(total: int, page: int, limit: int) -> Pagination:
    pages = math.ceil(total / limit) if limit > 0 else 0
    return Pagination(
        current=page,
        pages=pages,
        total=total,
        has_next=page < pages,
        has_prev=page > 1,
    )
