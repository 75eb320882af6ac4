from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, EmailStr, Field

from app.schemas.base import CamelModel

Email = Annotated[EmailStr, AfterValidator(str.lower)]


class FooterContact(CamelModel):
    email: Optional[Email] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None, max_length=500)


class FooterLink(CamelModel):
    text: Optional[str] = Field(default=None, max_length=100)
    url: Optional[str] = Field(default=None, max_length=500)


class FooterSection(CamelModel):
    title: Optional[str] = Field(default=None, max_length=100)
    links: List[FooterLink] = Field(default_factory=list)


class SocialMediaLink(CamelModel):
    platform: Optional[str] = Field(default=None, max_length=50)
    url: Optional[str] = Field(default=None, max_length=500)
    icon: Optional[str] = Field(default=None, max_length=100)


class FooterUpsert(CamelModel):
    """Create-or-update body. Everything optional; creation checks completeness."""

    company_name: Optional[str] = Field(default=None, max_length=200)
    company_description: Optional[str] = Field(default=None, max_length=1000)
    contact: Optional[FooterContact] = None
    sections: Optional[List[FooterSection]] = None
    social_media: Optional[List[SocialMediaLink]] = None
    back_to_top_text: Optional[str] = Field(default=None, max_length=100)
    copyright_text: Optional[str] = Field(default=None, max_length=500)
    legal_links: Optional[List[FooterLink]] = None


class FooterOut(CamelModel):
    footer_id: str
    company_name: str
    company_description: str
    contact: FooterContact
    sections: List[FooterSection] = []
    social_media: List[SocialMediaLink] = []
    back_to_top_text: str
    copyright_text: str
    legal_links: List[FooterLink] = []
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
