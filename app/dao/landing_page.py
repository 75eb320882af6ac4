from typing import Any, Dict, Optional, Tuple

from sqlmodel import Session

from app.core.ids import generate_uuid
from app.dao import base
from app.models.landing_page import LandingPage


def get_landing_page(session: Session) -> Optional[LandingPage]:
    return base.find_one(session, LandingPage, base.live(LandingPage))


def count_landing_pages(session: Session) -> int:
    return base.count(session, LandingPage)


def create_or_update_landing_page(session: Session, changes: Dict[str, Any]) -> Tuple[LandingPage, bool]:
    """Returns (landing_page, created)."""
    page = get_landing_page(session)
    if page is not None:
        return base.apply_changes(session, page, changes), False

    page = LandingPage(landing_page_id=generate_uuid(), **changes)
    return base.insert(session, page), True
