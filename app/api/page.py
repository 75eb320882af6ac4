from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.api.responses import ok
from app.core.errors import BadRequest, ValidationFailed
from app.core.rate_limit import GENERAL, PAGE_CONTENT, rate_limit
from app.db import get_session
from app.middleware.audit import security_audit
from app.models.page_content import PageType
from app.schemas.page_content import PageContentOut, PageContentUpsert
from app.services import page_content as page_content_service

router = APIRouter(dependencies=[Depends(rate_limit(GENERAL))])


def _parse_page_type(value: Optional[str]) -> PageType:
    if not value:
        raise BadRequest("Page type is required")
    try:
        return PageType(value)
    except ValueError:
        raise ValidationFailed(f"Invalid page type. Valid types are: {', '.join(PageType.values())}") from None


@router.get("/getPageContent")
def get_page_content(
    page_type: Optional[str] = Query(default=None, alias="pageType"),
    session: Session = Depends(get_session),
) -> Any:
    page_type = _parse_page_type(page_type)
    page = page_content_service.get_page_content(session, page_type)
    if page is None:
        return ok(f"No {page_type.value} page content found")
    return ok(f"{page_type.value} page content retrieved successfully", PageContentOut.model_validate(page))


@router.get("/getAllPageContent")
def get_all_page_content(session: Session = Depends(get_session)) -> Any:
    pages = page_content_service.get_all_page_content(session)
    return ok("All page content retrieved successfully", [PageContentOut.model_validate(p) for p in pages])


@router.post(
    "/createOrUpdatePageContent",
    dependencies=[Depends(rate_limit(PAGE_CONTENT)), Depends(security_audit)],
)
def create_or_update_page_content(payload: PageContentUpsert, session: Session = Depends(get_session)) -> Any:
    page, _ = page_content_service.create_or_update_page_content(session, payload)
    return ok(
        f"{page.page_type} page content created or updated successfully",
        PageContentOut.model_validate(page),
    )
