"""Tests for the approver screens."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from editorial_portal.errors import NotFoundOrForbidden, SessionExpiredError, ValidationError
from editorial_portal.models.approval import ApprovalDecision, ApprovalOutcome, ApprovalStatus
from editorial_portal.models.article import Article
from editorial_portal.models.identity import Identity, RoleRef
from editorial_portal.services import approvals as svc
from editorial_portal.workflow.consensus import DecisionSubmitter, ReviewState

EDITOR = Identity(subject="ed", user_id=2, roles=(RoleRef(role_name="Editor"),))


def _apis(make_article, *, status=3, history=None):
    articles = MagicMock()
    articles.get = AsyncMock(return_value=Article.model_validate(make_article(5, status=status)))
    articles.list_pending = AsyncMock(
        return_value=[Article.model_validate(make_article(i, status=3)) for i in (5, 6)],
    )
    approvals = MagicMock()
    approvals.history = AsyncMock(return_value=history or [])
    approvals.process = AsyncMock(
        return_value=ApprovalOutcome(current_approval_percentage=33.33, article_status="En Revision"),
    )
    return articles, approvals


class TestApprovalQueue:
    async def test_marks_reviewed_articles(self, make_article):
        articles, approvals = _apis(make_article)

        async def history(article_id):
            if article_id == 5:
                return [ApprovalDecision(role_name="Editor", status=ApprovalStatus.APPROVED)]
            return [ApprovalDecision(role_name="Revisor Legal", status=ApprovalStatus.APPROVED)]

        approvals.history = AsyncMock(side_effect=history)

        view = await svc.approval_queue(articles, approvals, EDITOR, DecisionSubmitter())

        assert view.role == "Editor"
        states = {item.article.id: item.review_state for item in view.articles}
        assert states == {5: ReviewState.REVIEWED, 6: ReviewState.NOT_REVIEWED}
        enabled = {item.article.id: item.decision_enabled for item in view.articles}
        assert enabled == {5: False, 6: True}
        assert view.articles[0].author_name == "Alicia Núñez"


class TestReviewDetail:
    async def test_decision_open_for_unreviewed_article_in_review(self, make_article):
        articles, approvals = _apis(make_article)

        view = await svc.review_detail(articles, approvals, EDITOR, DecisionSubmitter(), 5)

        assert view.review_state is ReviewState.NOT_REVIEWED
        assert view.decision_open is True
        assert view.decision_enabled is True

    async def test_decision_closed_once_role_reviewed(self, make_article):
        history = [ApprovalDecision(role_name="Editor", status=ApprovalStatus.REJECTED, comments="Fuentes")]
        articles, approvals = _apis(make_article, history=history)

        view = await svc.review_detail(articles, approvals, EDITOR, DecisionSubmitter(), 5)

        assert view.review_state is ReviewState.REVIEWED
        assert view.decision_open is False
        assert view.history == history

    async def test_decision_closed_when_not_in_review(self, make_article):
        articles, approvals = _apis(make_article, status=2)

        view = await svc.review_detail(articles, approvals, EDITOR, DecisionSubmitter(), 5)

        assert view.decision_open is False
        assert view.status_label == "Publicado"


class TestSubmitDecision:
    async def test_submit_then_refresh(self, make_article):
        articles, approvals = _apis(make_article)

        view = await svc.submit_decision(articles, approvals, EDITOR, DecisionSubmitter(), 5, "APPROVED")

        approvals.process.assert_awaited_once()
        assert view.message == (
            "Articulo aprobado correctamente. Porcentaje de aprobacion: 33.33% - Estado: En Revision"
        )
        assert view.refresh_article is True
        assert view.retire_decision_ui is True
        assert articles.get.await_count == 1

    async def test_rejection_without_comment_makes_no_call(self, make_article):
        articles, approvals = _apis(make_article)

        with pytest.raises(ValidationError):
            await svc.submit_decision(articles, approvals, EDITOR, DecisionSubmitter(), 5, "REJECTED", " ")

        approvals.process.assert_not_awaited()

    async def test_outcome_survives_failed_refresh(self, make_article):
        articles, approvals = _apis(make_article)
        articles.get = AsyncMock(side_effect=NotFoundOrForbidden("Articulo no encontrado"))

        view = await svc.submit_decision(articles, approvals, EDITOR, DecisionSubmitter(), 5, "APPROVED")

        approvals.process.assert_awaited_once()
        assert view.detail is None
        assert view.refresh_article is True
        assert view.outcome.current_approval_percentage == pytest.approx(33.33)
        assert "33.33%" in view.message

    async def test_expired_session_during_refresh_propagates(self, make_article):
        articles, approvals = _apis(make_article)
        articles.get = AsyncMock(side_effect=SessionExpiredError("expirada"))

        with pytest.raises(SessionExpiredError):
            await svc.submit_decision(articles, approvals, EDITOR, DecisionSubmitter(), 5, "APPROVED")
