"""Approval service endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from editorial_portal.backend.client import parse_list, parse_model
from editorial_portal.models.approval import ApprovalDecision, ApprovalOutcome, ApprovalRequest

if TYPE_CHECKING:
    from editorial_portal.backend.client import BackendClient

_BASE = "/api/v1/approvals"


class ApprovalApi:
    def __init__(self, client: BackendClient) -> None:
        self._client = client

    async def history(self, article_id: int) -> list[ApprovalDecision]:
        """Fetch the append-only decision history of an article."""
        data = await self._client.get(self._client.article_url(f"{_BASE}/article/{article_id}"))
        return parse_list(ApprovalDecision, data)

    async def process(self, request: ApprovalRequest) -> ApprovalOutcome:
        """Submit one decision; the backend computes the resulting percentage."""
        data = await self._client.post(self._client.article_url(_BASE), request.model_dump())
        return parse_model(ApprovalOutcome, data or {})
