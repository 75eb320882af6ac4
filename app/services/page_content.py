from typing import List, Optional, Tuple

from sqlmodel import Session

from app.core.logging_config import get_logger
from app.core.sanitizer import normalize_slug, sanitize_document
from app.dao import page_content as page_content_dao
from app.models.page_content import PageContent, PageType
from app.schemas.base import to_changes
from app.schemas.page_content import PageContentUpsert

logger = get_logger(__name__)


def get_page_content(session: Session, page_type: PageType) -> Optional[PageContent]:
    return page_content_dao.get_page_content(session, page_type.value)


def get_all_page_content(session: Session) -> List[PageContent]:
    pages = page_content_dao.get_all_page_content(session)
    logger.info("Retrieved all page content", count=len(pages))
    return pages


def create_or_update_page_content(session: Session, payload: PageContentUpsert) -> Tuple[PageContent, bool]:
    """Upsert the live record for the payload's page type. Returns (page_content, created)."""
    changes = to_changes(payload)
    page_type = PageType(changes.pop("page_type"))
    changes = {key: sanitize_document(value) for key, value in changes.items() if value is not None}
    if changes.get("slug"):
        changes["slug"] = normalize_slug(changes["slug"])

    page, created = page_content_dao.create_or_update_page_content(session, page_type.value, changes)
    logger.info(
        "Page content saved",
        page_type=page_type.value,
        title=page.title or "Untitled",
        created=created,
    )
    return page, created
