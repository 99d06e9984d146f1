"""Public reading routes. No authentication required."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from editorial_portal.models.article import Article
from editorial_portal.routes.deps import PortalContext, get_portal
from editorial_portal.services import public as public_svc

router = APIRouter(prefix="/public", tags=["public"])


@router.get("/articles")
async def list_published(portal: Annotated[PortalContext, Depends(get_portal)]) -> list[Article]:
    return await public_svc.published_articles(portal.articles)


@router.get("/articles/{article_id}")
async def published_detail(
    article_id: int,
    portal: Annotated[PortalContext, Depends(get_portal)],
) -> Article:
    return await public_svc.published_article(portal.articles, article_id)
