from typing import Any, Optional

from beanie import PydanticObjectId
from bson.errors import InvalidId


def parse_object_id(value: Any) -> Optional[PydanticObjectId]:
    """Return the ObjectId for a 24-hex string, or None when malformed."""
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError):
        return None
