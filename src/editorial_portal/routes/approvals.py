"""Approval routes, restricted to the approver roles."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from editorial_portal.auth.gate import require_view
from editorial_portal.routes.deps import PortalContext, get_portal, get_submitter, require_identity
from editorial_portal.services import approvals as approvals_svc
from editorial_portal.services.approvals import ApprovalQueueView, DecisionView, ReviewDetailView
from editorial_portal.workflow.consensus import DecisionSubmitter

router = APIRouter(
    prefix="/approvals",
    tags=["approvals"],
    dependencies=[Depends(require_view("approvals"))],
)

Portal = Annotated[PortalContext, Depends(get_portal)]
Submitter = Annotated[DecisionSubmitter, Depends(get_submitter)]


class DecisionForm(BaseModel):
    status: str | None = None
    comments: str | None = None


@router.get("/")
async def approval_queue(portal: Portal, submitter: Submitter) -> ApprovalQueueView:
    """Pending articles, flagging the ones this role already reviewed."""
    return await approvals_svc.approval_queue(
        portal.articles,
        portal.approvals,
        require_identity(portal),
        submitter,
    )


@router.get("/articles/{article_id}")
async def review_detail(article_id: int, portal: Portal, submitter: Submitter) -> ReviewDetailView:
    return await approvals_svc.review_detail(
        portal.articles,
        portal.approvals,
        require_identity(portal),
        submitter,
        article_id,
    )


@router.post("/articles/{article_id}/decision")
async def submit_decision(
    article_id: int,
    form: DecisionForm,
    portal: Portal,
    submitter: Submitter,
) -> DecisionView:
    return await approvals_svc.submit_decision(
        portal.articles,
        portal.approvals,
        require_identity(portal),
        submitter,
        article_id,
        form.status,
        form.comments,
    )
