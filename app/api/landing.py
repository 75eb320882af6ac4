from typing import Any

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.responses import ok
from app.core.rate_limit import GENERAL, LANDING_PAGE, rate_limit
from app.db import get_session
from app.middleware.audit import security_audit
from app.schemas.landing_page import LandingPageOut, LandingPageUpsert
from app.services import landing_page as landing_page_service

router = APIRouter(dependencies=[Depends(rate_limit(GENERAL))])


@router.get("/getlandingpage")
def get_landing_page(session: Session = Depends(get_session)) -> Any:
    page = landing_page_service.get_landing_page(session)
    if page is None:
        return ok("No landing page found")
    return ok("Landing page retrieved successfully", LandingPageOut.model_validate(page))


@router.post(
    "/createOrUpdatelandingpage",
    dependencies=[Depends(rate_limit(LANDING_PAGE)), Depends(security_audit)],
)
def create_or_update_landing_page(payload: LandingPageUpsert, session: Session = Depends(get_session)) -> Any:
    """
    Partial update of the landing page; creates it when none exists, in which
    case header, subtitle and numbers are all required.
    """
    page, _ = landing_page_service.create_or_update_landing_page(session, payload)
    return ok("Landing page created or updated successfully", LandingPageOut.model_validate(page))
