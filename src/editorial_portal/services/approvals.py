"""Approver screens: pending queue, review detail and decision submission."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel

from editorial_portal.errors import PortalError, SessionExpiredError
from editorial_portal.models.approval import ApprovalDecision, ApprovalOutcome
from editorial_portal.models.article import Article
from editorial_portal.workflow.consensus import (
    ReviewState,
    load_history,
    review_state,
    reviewed_map,
    reviewing_role,
)
from editorial_portal.workflow.lifecycle import accepts_decisions

if TYPE_CHECKING:
    from editorial_portal.backend.approvals import ApprovalApi
    from editorial_portal.backend.articles import ArticleApi
    from editorial_portal.models.approval import ApprovalStatus
    from editorial_portal.models.identity import Identity
    from editorial_portal.workflow.consensus import DecisionSubmitter

logger = logging.getLogger(__name__)


class PendingArticle(BaseModel):
    article: Article
    author_name: str
    review_state: ReviewState
    decision_enabled: bool


class ApprovalQueueView(BaseModel):
    role: str | None
    articles: list[PendingArticle]


class ReviewDetailView(BaseModel):
    role: str | None
    article: Article
    status_label: str
    status_class: str
    history: list[ApprovalDecision]
    review_state: ReviewState
    decision_open: bool
    decision_enabled: bool


class DecisionView(BaseModel):
    """Response after a decision: show the message, refresh, retire the form.

    ``detail`` is None when the decision was recorded but the article could not
    be re-read; the outcome is still reported so the decision is not resubmitted.
    """

    message: str
    outcome: ApprovalOutcome
    refresh_article: bool
    retire_decision_ui: bool
    detail: ReviewDetailView | None = None


async def approval_queue(
    articles: ArticleApi,
    approvals: ApprovalApi,
    identity: Identity,
    submitter: DecisionSubmitter,
) -> ApprovalQueueView:
    """Pending articles with the "already reviewed by my role" map."""
    role = reviewing_role(identity)
    pending = await articles.list_pending()
    states = await reviewed_map(approvals, [article.id for article in pending], role)
    return ApprovalQueueView(
        role=role,
        articles=[
            PendingArticle(
                article=article,
                author_name=article.author_name,
                review_state=states[article.id],
                decision_enabled=(
                    states[article.id] is ReviewState.NOT_REVIEWED
                    and not submitter.is_submitting(article.id, role)
                ),
            )
            for article in pending
        ],
    )


async def review_detail(
    articles: ArticleApi,
    approvals: ApprovalApi,
    identity: Identity,
    submitter: DecisionSubmitter,
    article_id: int,
) -> ReviewDetailView:
    role = reviewing_role(identity)
    article = await articles.get(article_id)
    history = await load_history(approvals, article_id)
    state = review_state(history, role)
    decision_open = accepts_decisions(article.status) and state is ReviewState.NOT_REVIEWED
    return ReviewDetailView(
        role=role,
        article=article,
        status_label=article.display_status,
        status_class=article.status_class,
        history=history,
        review_state=state,
        decision_open=decision_open,
        decision_enabled=decision_open and not submitter.is_submitting(article_id, role),
    )


async def submit_decision(
    articles: ArticleApi,
    approvals: ApprovalApi,
    identity: Identity,
    submitter: DecisionSubmitter,
    article_id: int,
    status: ApprovalStatus | str | None,
    comments: str | None = None,
) -> DecisionView:
    """Submit a decision, then re-read the article whose status may have moved."""
    role = reviewing_role(identity)
    result = await submitter.submit(approvals, article_id, status, comments, role_name=role)
    detail: ReviewDetailView | None = None
    try:
        detail = await review_detail(articles, approvals, identity, submitter, article_id)
    except SessionExpiredError:
        raise
    except PortalError as exc:
        logger.warning("Decision recorded but refresh failed — article=%s: %s", article_id, exc.message)
    return DecisionView(
        message=result.message,
        outcome=result.outcome,
        refresh_article=result.refresh_article,
        retire_decision_ui=result.retire_decision_ui,
        detail=detail,
    )
