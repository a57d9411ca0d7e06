from typing import Optional
from pydantic import BaseModel, ConfigDict


class Pagination(BaseModel):
    """Offset pagination metadata taken from GitLab's X-* response headers."""

    model_config = ConfigDict(frozen=True)

    page: Optional[int] = None
    per_page: Optional[int] = None
    next_page: Optional[int] = None
    prev_page: Optional[int] = None
    total: Optional[int] = None
    total_pages: Optional[int] = None
