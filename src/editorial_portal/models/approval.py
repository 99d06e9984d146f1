"""Approval decision models exchanged with the approvals service."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer


class ApprovalStatus(StrEnum):
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def past_tense(self) -> str:
        return "aprobado" if self is ApprovalStatus.APPROVED else "rechazado"


class ApprovalDecision(BaseModel):
    """One entry of an article's append-only approval history."""

    model_config = ConfigDict(populate_by_name=True)

    article_id: int | None = Field(default=None, alias="articleId")
    approver_username: str | None = Field(default=None, alias="approverUsername")
    role_name: str | None = Field(default=None, alias="roleName")
    status: ApprovalStatus
    comments: str | None = None
    timestamp: datetime | None = None


class ApprovalRequest(BaseModel):
    """Outgoing decision. ``comments`` is left out entirely when unset."""

    model_config = ConfigDict(populate_by_name=True)

    article_id: int = Field(alias="articleId")
    status: ApprovalStatus
    comments: str | None = None

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        body: dict[str, Any] = {"articleId": self.article_id, "status": self.status.value}
        if self.comments:
            body["comments"] = self.comments
        return body


class ApprovalOutcome(BaseModel):
    """Result of processing a decision; not persisted client-side."""

    model_config = ConfigDict(populate_by_name=True)

    current_approval_percentage: float | None = Field(default=None, alias="currentApprovalPercentage")
    article_status: str | None = Field(default=None, alias="articleStatus")
