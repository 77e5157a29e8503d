from pydantic import Field
from datetime import datetime
from typing import Optional


class TimestampMixin:
    """Mixin for adding timestamp fields to documents.

    ``updated_at`` stays unset until the first mutation after creation.
    """

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None
