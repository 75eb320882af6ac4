from typing import List, Optional

from sqlmodel import Session

from app.core.errors import NotFound
from app.core.logging_config import get_logger
from app.core.sanitizer import sanitize_section_content, sanitize_text
from app.dao import investment_card as card_dao
from app.models.investment_card import InvestmentCard
from app.schemas.base import to_changes
from app.schemas.investment_card import InvestmentCardUpsert

logger = get_logger(__name__)


def _sanitize_sections(sections: List[dict]) -> List[dict]:
    cleaned = []
    for section in sections:
        section = dict(section)
        if section.get("title"):
            section["title"] = sanitize_text(section["title"])
        if section.get("content") is not None:
            section["content"] = sanitize_section_content(section["content"])
        cleaned.append(section)
    return cleaned


def create_or_update_investment_card(session: Session, payload: InvestmentCardUpsert) -> InvestmentCard:
    """
    One entry point for create, partial update and soft delete.

    - isDeleted=true with cardId: soft delete the live card (404 if none)
    - cardId of an existing card, deleted or not: partial update
    - otherwise: create, keeping a supplied cardId
    """
    changes = to_changes(payload)
    card_id = changes.get("card_id")

    if changes.get("is_deleted") is True and card_id:
        card = card_dao.soft_delete_investment_card(session, card_id)
        if card is None:
            raise NotFound("Investment card not found")
        logger.info("Investment card deleted", card_id=card_id, company_name=card.company_name)
        return card

    changes = {key: value for key, value in changes.items() if value is not None}
    if changes.get("company_name"):
        changes["company_name"] = sanitize_text(changes["company_name"])
    if changes.get("company_logo"):
        changes["company_logo"] = sanitize_text(changes["company_logo"])
    if "sections" in changes:
        changes["sections"] = _sanitize_sections(changes["sections"])

    existing = card_dao.get_investment_card_including_deleted(session, card_id) if card_id else None
    if existing is not None:
        card = card_dao.update_investment_card(session, existing, changes)
        logger.info("Investment card updated", card_id=card.card_id)
    else:
        card = card_dao.create_investment_card(session, changes)
        logger.info("Investment card created", card_id=card.card_id, company_name=card.company_name)
    return card


def get_all_investment_cards(session: Session) -> List[InvestmentCard]:
    return card_dao.get_all_investment_cards(session)


def get_investment_card(session: Session, card_id: str) -> Optional[InvestmentCard]:
    return card_dao.get_investment_card_by_id(session, card_id)
