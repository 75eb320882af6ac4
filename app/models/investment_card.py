from typing import Any, Dict, List, Optional

from sqlalchemy import JSON
from sqlmodel import Column, Field

from app.models.base import ContentBase


class InvestmentCard(ContentBase, table=True):
    """
    Portfolio company card.

    ``sections`` is a JSON array of {sectionId, title, content, order} where
    content is text, a list of text, a list of objects or an object.
    """

    __tablename__ = "investment_card"

    card_id: str = Field(unique=True, index=True, max_length=36)
    company_name: Optional[str] = Field(default=None, max_length=200, index=True)
    company_logo: Optional[str] = Field(default=None, max_length=500)
    sections: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, default=[]))


__all__ = ["InvestmentCard"]
