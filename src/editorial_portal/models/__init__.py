"""Data models for articles, approvals and identities."""

from editorial_portal.models.approval import ApprovalDecision, ApprovalOutcome, ApprovalRequest, ApprovalStatus
from editorial_portal.models.article import Article, ArticleDraft, ArticleStatus, AuthorRef
from editorial_portal.models.identity import Identity, LoginResult, RoleRef, TokenPayload
from editorial_portal.models.role import APPROVER_ROLES, Role

__all__ = [
    "APPROVER_ROLES",
    "ApprovalDecision",
    "ApprovalOutcome",
    "ApprovalRequest",
    "ApprovalStatus",
    "Article",
    "ArticleDraft",
    "ArticleStatus",
    "AuthorRef",
    "Identity",
    "LoginResult",
    "Role",
    "RoleRef",
    "TokenPayload",
]
