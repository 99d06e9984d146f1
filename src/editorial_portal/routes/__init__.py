"""Portal web routes."""

from editorial_portal.routes import approvals, articles, auth, dashboard, public

__all__ = ["approvals", "articles", "auth", "dashboard", "public"]
