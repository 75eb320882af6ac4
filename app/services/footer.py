from typing import Optional, Tuple

from sqlmodel import Session

from app.core.errors import ValidationFailed
from app.core.logging_config import get_logger
from app.core.sanitizer import sanitize_document
from app.dao import footer as footer_dao
from app.models.footer import Footer
from app.schemas.base import to_changes
from app.schemas.footer import FooterUpsert

logger = get_logger(__name__)

# Must all be present when no live footer exists yet
REQUIRED_ON_CREATE = {
    "company_name": "companyName",
    "company_description": "companyDescription",
    "contact": "contact",
    "back_to_top_text": "backToTopText",
    "copyright_text": "copyrightText",
}
REQUIRED_CONTACT_FIELDS = ("email", "phone", "address")


def get_footer(session: Session) -> Optional[Footer]:
    return footer_dao.get_footer(session)


def _check_complete(changes: dict) -> None:
    missing = [wire for name, wire in REQUIRED_ON_CREATE.items() if not changes.get(name)]
    contact = changes.get("contact") or {}
    missing += [f"contact.{key}" for key in REQUIRED_CONTACT_FIELDS if contact and not contact.get(key)]
    if missing:
        raise ValidationFailed(f"Missing required fields for creating footer content: {', '.join(missing)}")


def create_or_update_footer(session: Session, payload: FooterUpsert) -> Tuple[Footer, bool]:
    """Update the live footer (partial) or create it. Returns (footer, created)."""
    changes = {key: value for key, value in to_changes(payload).items() if value is not None}
    changes = {key: sanitize_document(value) for key, value in changes.items()}

    if footer_dao.get_footer(session) is None:
        _check_complete(changes)

    footer, created = footer_dao.create_or_update_footer(session, changes)
    logger.info("Footer content saved", footer_id=footer.footer_id, created=created)
    return footer, created
