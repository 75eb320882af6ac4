from typing import Any, Dict, List, Optional

from sqlmodel import Session

from app.core.ids import generate_uuid
from app.dao import base
from app.models.investment_card import InvestmentCard


def get_all_investment_cards(session: Session) -> List[InvestmentCard]:
    return base.find_many(
        session,
        InvestmentCard,
        base.live(InvestmentCard),
        order_by=(InvestmentCard.created_at.asc(), InvestmentCard.id.asc()),
    )


def get_investment_card_by_id(session: Session, card_id: str) -> Optional[InvestmentCard]:
    return base.find_one(session, InvestmentCard, InvestmentCard.card_id == card_id, base.live(InvestmentCard))


def get_investment_card_including_deleted(session: Session, card_id: str) -> Optional[InvestmentCard]:
    return base.find_one(session, InvestmentCard, InvestmentCard.card_id == card_id)


def with_section_ids(sections: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Copy of ``sections`` where every section has a sectionId."""
    return [{**section, "sectionId": section.get("sectionId") or generate_uuid()} for section in sections]


def create_investment_card(session: Session, data: Dict[str, Any]) -> InvestmentCard:
    data = dict(data)
    card_id = data.pop("card_id", None) or generate_uuid()
    if "sections" in data:
        data["sections"] = with_section_ids(data["sections"] or [])
    card = InvestmentCard(card_id=card_id, **data)
    return base.insert(session, card)


def update_investment_card(session: Session, card: InvestmentCard, changes: Dict[str, Any]) -> InvestmentCard:
    changes = dict(changes)
    changes.pop("card_id", None)
    if "sections" in changes:
        changes["sections"] = with_section_ids(changes["sections"] or [])
    if changes.get("is_deleted") is False:
        changes["deleted_at"] = None
    return base.apply_changes(session, card, changes)


def soft_delete_investment_card(session: Session, card_id: str) -> Optional[InvestmentCard]:
    card = get_investment_card_by_id(session, card_id)
    if card is None:
        return None
    return base.soft_delete(session, card)
