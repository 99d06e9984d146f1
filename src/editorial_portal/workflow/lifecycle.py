"""Article lifecycle policy: which actions an article's status permits.

The status predicates are pure and carry no identity; ownership is a
separate precondition checked by the caller through ``is_owner`` or
``available_actions``. Always evaluate against a freshly fetched article.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

from editorial_portal.models.article import ArticleStatus

if TYPE_CHECKING:
    from editorial_portal.models.article import Article
    from editorial_portal.models.identity import Identity

_AUTHOR_MUTABLE = frozenset({ArticleStatus.DRAFT, ArticleStatus.FLAGGED})


def _as_status(status: ArticleStatus | int | None) -> ArticleStatus | None:
    if status is None:
        return None
    try:
        return ArticleStatus(status)
    except ValueError:
        return None


def can_edit(status: ArticleStatus | int | None) -> bool:
    return _as_status(status) in _AUTHOR_MUTABLE


def can_send_to_review(status: ArticleStatus | int | None) -> bool:
    # Anything editable is also re-submittable.
    return _as_status(status) in _AUTHOR_MUTABLE


def can_delete(status: ArticleStatus | int | None) -> bool:
    """Only drafts can be deleted; a flagged article must be revised."""
    return _as_status(status) is ArticleStatus.DRAFT


def accepts_decisions(status: ArticleStatus | int | None) -> bool:
    return _as_status(status) is ArticleStatus.IN_REVIEW


def is_public(status: ArticleStatus | int | None) -> bool:
    return _as_status(status) is ArticleStatus.PUBLISHED


def is_owner(identity: Identity | None, article: Article) -> bool:
    if identity is None or article.author is None:
        return False
    return identity.user_id == article.author.user_id


@dataclass(frozen=True)
class ArticleActions:
    """Action buttons an author may be offered for one article."""

    edit: bool = False
    send_to_review: bool = False
    delete: bool = False

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


NO_ACTIONS = ArticleActions()


def available_actions(identity: Identity | None, article: Article) -> ArticleActions:
    """Combine ownership with the status predicates."""
    if not is_owner(identity, article):
        return NO_ACTIONS
    return ArticleActions(
        edit=can_edit(article.status),
        send_to_review=can_send_to_review(article.status),
        delete=can_delete(article.status),
    )
