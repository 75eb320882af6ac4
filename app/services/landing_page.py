from typing import Optional, Tuple

from sqlmodel import Session

from app.core.errors import ValidationFailed
from app.core.logging_config import get_logger
from app.core.sanitizer import sanitize_document
from app.dao import landing_page as landing_page_dao
from app.models.landing_page import LandingPage
from app.schemas.base import to_changes
from app.schemas.landing_page import LandingPageUpsert

logger = get_logger(__name__)

REQUIRED_ON_CREATE = ("header", "subtitle", "numbers")


def get_landing_page(session: Session) -> Optional[LandingPage]:
    return landing_page_dao.get_landing_page(session)


def create_or_update_landing_page(session: Session, payload: LandingPageUpsert) -> Tuple[LandingPage, bool]:
    """
    Partial update of the live landing page, or create it.

    Creation needs header, subtitle and numbers; updates may send any subset.
    """
    changes = {key: value for key, value in to_changes(payload).items() if value is not None}
    changes = {key: sanitize_document(value) for key, value in changes.items()}

    if landing_page_dao.get_landing_page(session) is None:
        if any(field not in changes for field in REQUIRED_ON_CREATE):
            raise ValidationFailed(
                "All fields (header, subtitle, numbers) are required for creating a new landing page"
            )

    page, created = landing_page_dao.create_or_update_landing_page(session, changes)
    logger.info("Landing page saved", landing_page_id=page.landing_page_id, created=created)
    return page, created
