"""Trip lifecycle stages relevant to cancellation."""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class TripStatus(str, Enum):
    """Trip lifecycle stages."""

    SCHEDULED = "scheduled"
    WAITING = "waiting"
    ASSIGNED = "assigned"
    ARRIVING = "arriving"
    PICKED_UP = "picked_up"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    OTHER = "other"

    @classmethod
    def parse(cls, value: "str | TripStatus") -> "TripStatus":
        """Coerce a status string, mapping anything unrecognized to OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning(f"Unrecognized trip status {value!r}, treating as 'other'")
            return cls.OTHER
