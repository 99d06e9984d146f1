"""Backend service clients."""

from editorial_portal.backend.approvals import ApprovalApi
from editorial_portal.backend.articles import ArticleApi
from editorial_portal.backend.auth import AuthApi
from editorial_portal.backend.client import BackendClient

__all__ = [
    "ApprovalApi",
    "ArticleApi",
    "AuthApi",
    "BackendClient",
]
