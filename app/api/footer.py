from typing import Any

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.responses import ok
from app.core.rate_limit import GENERAL, rate_limit
from app.db import get_session
from app.middleware.audit import security_audit
from app.schemas.footer import FooterOut, FooterUpsert
from app.services import footer as footer_service

router = APIRouter(dependencies=[Depends(rate_limit(GENERAL))])


@router.get("/getFooter")
def get_footer(session: Session = Depends(get_session)) -> Any:
    footer = footer_service.get_footer(session)
    if footer is None:
        return ok("No footer content found")
    return ok("Footer content retrieved successfully", FooterOut.model_validate(footer))


@router.post("/createOrUpdateFooter", dependencies=[Depends(security_audit)])
def create_or_update_footer(payload: FooterUpsert, session: Session = Depends(get_session)) -> Any:
    """Update the footer with the given fields, or create it when none exists."""
    footer, _ = footer_service.create_or_update_footer(session, payload)
    return ok("Footer content created or updated successfully", FooterOut.model_validate(footer))
