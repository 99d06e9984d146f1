"""Article models as returned by the article service."""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

UNKNOWN_LABEL = "Desconocido"


class ArticleStatus(IntEnum):
    DRAFT = 1
    PUBLISHED = 2
    IN_REVIEW = 3
    FLAGGED = 4

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def css_class(self) -> str:
        return f"status-{_STATUS_SLUGS[self]}"


_STATUS_LABELS = {
    ArticleStatus.DRAFT: "Borrador",
    ArticleStatus.PUBLISHED: "Publicado",
    ArticleStatus.IN_REVIEW: "En Revision",
    ArticleStatus.FLAGGED: "Marcado",
}

_STATUS_SLUGS = {
    ArticleStatus.DRAFT: "draft",
    ArticleStatus.PUBLISHED: "published",
    ArticleStatus.IN_REVIEW: "review",
    ArticleStatus.FLAGGED: "flagged",
}


def status_label(status_id: int | None) -> str:
    """Return the display label for a raw status id."""
    try:
        return ArticleStatus(status_id).label
    except ValueError:
        return UNKNOWN_LABEL


def status_css_class(status_id: int | None) -> str:
    try:
        return ArticleStatus(status_id).css_class
    except ValueError:
        return "status-unknown"


class AuthorRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="idUser")
    username: str | None = None
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")

    @property
    def display_name(self) -> str:
        if self.first_name or self.last_name:
            return f"{self.first_name or ''} {self.last_name or ''}".strip()
        return self.username or UNKNOWN_LABEL


class Article(BaseModel):
    """A transient copy of an article; always re-fetched, never cached."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(alias="idArticle")
    title: str
    content: str = ""
    author: AuthorRef | None = None
    # Known ids become ArticleStatus members; unknown ids are kept as plain ints.
    status: int
    status_name: str | None = Field(default=None, alias="statusName")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @model_validator(mode="before")
    @classmethod
    def _flatten_status(cls, data: Any) -> Any:
        """Accept the nested ``{"idArticleStatus", "statusName"}`` wire shape."""
        if isinstance(data, dict) and isinstance(data.get("status"), dict):
            nested = data["status"]
            data = {**data, "status": nested.get("idArticleStatus")}
            if nested.get("statusName") and not data.get("statusName"):
                data["statusName"] = nested["statusName"]
        return data

    @field_validator("status")
    @classmethod
    def _known_status(cls, value: int) -> int:
        try:
            return ArticleStatus(value)
        except ValueError:
            return value

    @property
    def author_name(self) -> str:
        return self.author.display_name if self.author else UNKNOWN_LABEL

    @property
    def display_status(self) -> str:
        return self.status_name or status_label(self.status)

    @property
    def status_class(self) -> str:
        return status_css_class(self.status)


class ArticleDraft(BaseModel):
    """Payload for creating or updating an article."""

    title: str
    content: str
