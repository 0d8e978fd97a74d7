"""
Common Schemas
Base model for camelCase API payloads
"""
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from civiceye.utils.dates import to_utc_iso


# Stored naive in UTC, sent as "...Z"
UTCDateTime = Annotated[datetime, PlainSerializer(to_utc_iso, return_type=str, when_used="json")]


class CamelModel(BaseModel):
    """Schema whose wire names are camelCase"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
