from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import ConfigDict, Field, field_validator

from app.schemas.base import CamelModel


class ContentItem(CamelModel):
    model_config = ConfigDict(extra="forbid")

    item: Optional[str] = Field(default=None, max_length=500)


# Tried in order: text, list of text, list of {item}, free-form object
SectionContent = Union[
    Annotated[str, Field(max_length=2000)],
    List[Annotated[str, Field(max_length=500)]],
    List[ContentItem],
    Dict[str, Any],
]


class Section(CamelModel):
    section_id: Optional[str] = None
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[SectionContent] = None
    order: Optional[int] = Field(default=None, ge=1)


class InvestmentCardUpsert(CamelModel):
    card_id: Optional[str] = None
    company_name: Optional[str] = Field(default=None, max_length=200)
    company_logo: Optional[str] = Field(default=None, max_length=500)
    sections: Optional[List[Section]] = None
    is_deleted: Optional[bool] = None

    @field_validator("sections")
    @classmethod
    def unique_orders(cls, sections: Optional[List[Section]]) -> Optional[List[Section]]:
        if sections:
            orders = [s.order for s in sections if s.order is not None]
            if len(orders) != len(set(orders)):
                raise ValueError("Section orders must be unique within a card")
        return sections


class InvestmentCardOut(CamelModel):
    card_id: str
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    sections: List[Section] = []
    is_deleted: bool
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
