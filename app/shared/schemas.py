from pydantic import BaseModel
from typing import Optional


class IdResponse(BaseModel):
    """Response carrying the id of a newly created document."""

    id: str
    message: Optional[str] = None
