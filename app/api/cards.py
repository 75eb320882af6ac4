from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.api.responses import ok
from app.core.errors import BadRequest, NotFound
from app.core.rate_limit import GENERAL, rate_limit
from app.db import get_session
from app.middleware.audit import security_audit
from app.schemas.investment_card import InvestmentCardOut, InvestmentCardUpsert
from app.services import investment_card as card_service

router = APIRouter(dependencies=[Depends(rate_limit(GENERAL))])


@router.get("/getAllInvestmentCards")
def get_all_investment_cards(session: Session = Depends(get_session)) -> Any:
    cards = card_service.get_all_investment_cards(session)
    return ok("Investment cards retrieved successfully", [InvestmentCardOut.model_validate(c) for c in cards])


@router.get("/getInvestmentCardById")
def get_investment_card_by_id(
    card_id: Optional[str] = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
) -> Any:
    if not card_id:
        raise BadRequest("Card ID is required")
    card = card_service.get_investment_card(session, card_id)
    if card is None:
        raise NotFound("Investment card not found")
    return ok("Investment card retrieved successfully", InvestmentCardOut.model_validate(card))


@router.post("/createOrUpdateInvestmentCard", dependencies=[Depends(security_audit)])
def create_or_update_investment_card(payload: InvestmentCardUpsert, session: Session = Depends(get_session)) -> Any:
    """
    Create, partially update, or soft delete (``isDeleted: true`` with
    ``cardId``) an investment card.
    """
    card = card_service.create_or_update_investment_card(session, payload)
    return ok("Investment card created or updated successfully", InvestmentCardOut.model_validate(card))
