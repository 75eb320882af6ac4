from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.schemas.base import CamelModel, PartialUpdate


class NumberItem(CamelModel):
    value: str = Field(min_length=1, max_length=50)
    label: str = Field(min_length=1, max_length=100)


class LandingPageUpsert(PartialUpdate):
    header: Optional[str] = Field(default=None, max_length=200)
    subtitle: Optional[str] = Field(default=None, max_length=500)
    numbers: Optional[List[NumberItem]] = None


class LandingPageOut(CamelModel):
    landing_page_id: str
    header: str
    subtitle: str
    numbers: List[NumberItem] = []
    created_at: datetime
    updated_at: datetime
