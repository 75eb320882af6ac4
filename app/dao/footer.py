from typing import Any, Dict, Optional, Tuple

from sqlmodel import Session

from app.core.ids import generate_uuid
from app.dao import base
from app.models.footer import Footer


def get_footer(session: Session) -> Optional[Footer]:
    return base.find_one(session, Footer, base.live(Footer))


def create_or_update_footer(session: Session, changes: Dict[str, Any]) -> Tuple[Footer, bool]:
    """
    Update the live footer with ``changes`` or create it.

    ``contact`` is merged key by key into the stored contact.

    Returns:
        (footer, created)
    """
    footer = get_footer(session)
    if footer is not None:
        if "contact" in changes:
            changes = {**changes, "contact": {**(footer.contact or {}), **changes["contact"]}}
        return base.apply_changes(session, footer, changes), False

    footer = Footer(footer_id=generate_uuid(), **changes)
    return base.insert(session, footer), True
