# blog_api/utils/datetime_utils.py
"""
Central timestamp handling for everything written to and read from MongoDB.

- All timestamps handed around the app are timezone-aware UTC datetimes.
- MongoDB keeps UTC and hands back naive datetimes; those are re-labelled as UTC on read.
- Conversions recurse into dicts and lists, so a whole document
  (a post with its embedded comments) can be converted in one call.
"""

import logging
from datetime import datetime, date, timezone, time
from typing import Any

logger = logging.getLogger(__name__)


class DateTimeUtils:
    """Timestamp helpers shared by the services."""

    @staticmethod
    def now() -> datetime:
        """Current time as a UTC timezone-aware datetime."""
        return datetime.now(timezone.utc)

    @staticmethod
    def for_mongo(obj: Any) -> Any:
        """
        Prepares a value for storage.

        - date -> datetime at 00:00:00 UTC (BSON has no date-only type)
        - naive datetime -> UTC-aware datetime
        - aware datetime -> same instant in UTC
        - dict/list -> converted recursively
        """
        try:
            if isinstance(obj, date) and not isinstance(obj, datetime):
                return datetime.combine(obj, time.min).replace(tzinfo=timezone.utc)

            elif isinstance(obj, datetime):
                if obj.tzinfo is None:
                    return obj.replace(tzinfo=timezone.utc)
                return obj.astimezone(timezone.utc)

            elif isinstance(obj, dict):
                return {k: DateTimeUtils.for_mongo(v) for k, v in obj.items()}

            elif isinstance(obj, list):
                return [DateTimeUtils.for_mongo(item) for item in obj]

            return obj

        except Exception as e:
            logger.error(f"MongoDB conversion failed: {obj!r} ({type(obj)}) - {e}")
            raise ValueError(f"Value cannot be stored in MongoDB: {obj!r}")

    @staticmethod
    def from_mongo(obj: Any) -> Any:
        """
        Normalizes a value read from MongoDB.

        Naive datetimes are UTC by MongoDB's contract and get tzinfo=UTC;
        aware ones are moved to UTC. dict/list values are converted recursively.
        """
        try:
            if isinstance(obj, datetime):
                if obj.tzinfo is None:
                    return obj.replace(tzinfo=timezone.utc)
                return obj.astimezone(timezone.utc)

            elif isinstance(obj, dict):
                return {k: DateTimeUtils.from_mongo(v) for k, v in obj.items()}

            elif isinstance(obj, list):
                return [DateTimeUtils.from_mongo(item) for item in obj]

            return obj

        except Exception as e:
            # Reading must not fail because of one odd value; keep the original.
            logger.error(f"MongoDB read conversion failed: {obj!r} ({type(obj)}) - {e}")
            return obj
