"""Approval consensus tracker.

Tracks, from the point of view of one reviewing role, whether that role has
already decided on an article, validates new decisions locally and turns the
backend's outcome into what the review screen shows next.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from editorial_portal.errors import PortalError, SessionExpiredError, ValidationError
from editorial_portal.models.approval import ApprovalRequest, ApprovalStatus
from editorial_portal.models.role import is_approver_role

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from editorial_portal.models.approval import ApprovalDecision, ApprovalOutcome
    from editorial_portal.models.identity import Identity

logger = logging.getLogger(__name__)

MISSING_STATUS_MESSAGE = "Debe seleccionar una accion (Aprobar o Rechazar)"
MISSING_COMMENTS_MESSAGE = "Debe proporcionar un comentario al rechazar el articulo"
IN_FLIGHT_MESSAGE = "La decision ya se esta procesando"


class ReviewState(StrEnum):
    NOT_REVIEWED = "not_reviewed"
    REVIEWED = "reviewed"


class HistorySource(Protocol):
    async def history(self, article_id: int) -> list[ApprovalDecision]: ...


class DecisionSink(Protocol):
    async def process(self, request: ApprovalRequest) -> ApprovalOutcome: ...


def reviewing_role(identity: Identity | None) -> str | None:
    """Role under which this identity reviews: first approver role, else primary."""
    if identity is None:
        return None
    for role in identity.roles:
        if is_approver_role(role.role_name):
            return role.role_name
    return identity.primary_role


def review_state(history: Iterable[ApprovalDecision], role_name: str | None) -> ReviewState:
    if role_name and any(decision.role_name == role_name for decision in history):
        return ReviewState.REVIEWED
    return ReviewState.NOT_REVIEWED


async def load_history(source: HistorySource, article_id: int) -> list[ApprovalDecision]:
    """Read an article's history; an unavailable history counts as empty.

    An article legitimately has no history before its first review, so
    failures here are logged and never surfaced. A rejected credential is
    the exception and still propagates.
    """
    try:
        return await source.history(article_id)
    except SessionExpiredError:
        raise
    except PortalError as exc:
        logger.info("No approval history for article %s: %s", article_id, exc.message)
        return []


async def reviewed_map(
    source: HistorySource,
    article_ids: Sequence[int],
    role_name: str | None,
) -> dict[int, ReviewState]:
    """Resolve review state for many articles with one history read each.

    Reads run concurrently and all settle before the map is built; a failed
    read only degrades its own article to NOT_REVIEWED.
    """
    if not role_name:
        return dict.fromkeys(article_ids, ReviewState.NOT_REVIEWED)

    histories = await asyncio.gather(*(load_history(source, article_id) for article_id in article_ids))
    return {
        article_id: review_state(history, role_name)
        for article_id, history in zip(article_ids, histories, strict=True)
    }


def validate_decision(
    article_id: int,
    status: ApprovalStatus | str | None,
    comments: str | None = None,
) -> ApprovalRequest:
    """Build the outgoing request or raise ValidationError without any I/O."""
    if not status:
        raise ValidationError(MISSING_STATUS_MESSAGE, field="status")
    try:
        decision = ApprovalStatus(status)
    except ValueError as exc:
        raise ValidationError(MISSING_STATUS_MESSAGE, field="status") from exc

    trimmed = (comments or "").strip()
    if decision is ApprovalStatus.REJECTED and not trimmed:
        raise ValidationError(MISSING_COMMENTS_MESSAGE, field="comments")
    return ApprovalRequest(article_id=article_id, status=decision, comments=trimmed or None)


def outcome_message(status: ApprovalStatus, outcome: ApprovalOutcome) -> str:
    message = f"Articulo {status.past_tense} correctamente."
    if outcome.current_approval_percentage is not None:
        message += f" Porcentaje de aprobacion: {outcome.current_approval_percentage:g}%"
    if outcome.article_status:
        message += f" - Estado: {outcome.article_status}"
    return message


@dataclass(frozen=True)
class DecisionResult:
    """What the review screen does after a successful decision."""

    outcome: ApprovalOutcome
    message: str
    refresh_article: bool = True
    retire_decision_ui: bool = True


class DecisionSubmitter:
    """Fire-once submission of approval decisions.

    While a decision for an (article, role) pair is in flight the control is
    reported disabled and a second submission is refused locally.
    """

    def __init__(self) -> None:
        self._in_flight: set[tuple[int, str | None]] = set()

    def is_submitting(self, article_id: int, role_name: str | None = None) -> bool:
        return (article_id, role_name) in self._in_flight

    async def submit(
        self,
        sink: DecisionSink,
        article_id: int,
        status: ApprovalStatus | str | None,
        comments: str | None = None,
        *,
        role_name: str | None = None,
    ) -> DecisionResult:
        request = validate_decision(article_id, status, comments)
        key = (article_id, role_name)
        if key in self._in_flight:
            raise ValidationError(IN_FLIGHT_MESSAGE, field="status")

        self._in_flight.add(key)
        try:
            outcome = await sink.process(request)
        finally:
            self._in_flight.discard(key)

        logger.info(
            "Decision recorded — article=%s role=%s status=%s percentage=%s",
            article_id,
            role_name,
            request.status.value,
            outcome.current_approval_percentage,
        )
        return DecisionResult(outcome=outcome, message=outcome_message(request.status, outcome))
