from typing import Any, Dict, List, Optional, Tuple

from sqlmodel import Session

from app.core.ids import generate_uuid
from app.dao import base
from app.models.page_content import PageContent


def get_page_content(session: Session, page_type: str) -> Optional[PageContent]:
    return base.find_one(session, PageContent, PageContent.page_type == page_type, base.live(PageContent))


def get_all_page_content(session: Session) -> List[PageContent]:
    return base.find_many(
        session,
        PageContent,
        base.live(PageContent),
        order_by=(PageContent.page_type.asc(),),
    )


def create_or_update_page_content(
    session: Session, page_type: str, changes: Dict[str, Any]
) -> Tuple[PageContent, bool]:
    """Upsert the live record for ``page_type``. Returns (page_content, created)."""
    page = get_page_content(session, page_type)
    if page is not None:
        return base.apply_changes(session, page, changes), False

    page = PageContent(page_content_id=generate_uuid(), page_type=page_type, **changes)
    return base.insert(session, page), True
