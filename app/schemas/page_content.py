from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, Field

from app.models.page_content import PageType
from app.schemas.base import CamelModel
from app.schemas.landing_page import NumberItem


class PageItem(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=1000)


class ButtonText(CamelModel):
    button_text: str = Field(min_length=1, max_length=100)


class PageContentUpsert(CamelModel):
    page_type: PageType
    title: Optional[str] = Field(default=None, max_length=200)
    slug: Optional[Annotated[str, AfterValidator(str.lower)]] = Field(default=None, max_length=200)
    content: Optional[str] = Field(default=None, max_length=5050)
    subtitle: Optional[str] = Field(default=None, max_length=500)
    items: Optional[List[PageItem]] = None
    numbers: Optional[List[NumberItem]] = None
    btn_txt: Optional[List[ButtonText]] = None


class PageContentOut(CamelModel):
    page_content_id: str
    page_type: str
    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    subtitle: Optional[str] = None
    items: List[PageItem] = []
    numbers: List[NumberItem] = []
    btn_txt: List[ButtonText] = []
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
