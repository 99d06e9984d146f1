"""Reporter article routes: list, create, view, edit, delete, send to review."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from editorial_portal.auth.gate import require_view
from editorial_portal.routes.deps import PortalContext, get_portal, require_identity
from editorial_portal.services import articles as articles_svc
from editorial_portal.services.articles import ArticleDetailView, ArticleView

router = APIRouter(
    prefix="/articles",
    tags=["articles"],
    dependencies=[Depends(require_view("articles"))],
)

Portal = Annotated[PortalContext, Depends(get_portal)]


class ArticleForm(BaseModel):
    title: str = ""
    content: str = ""


@router.get("/")
async def list_articles(portal: Portal) -> list[ArticleView]:
    """List the signed-in author's own articles."""
    return await articles_svc.list_own_articles(portal.articles, require_identity(portal))


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_article(form: ArticleForm, portal: Portal) -> ArticleView:
    return await articles_svc.create_article(portal.articles, require_identity(portal), form.title, form.content)


@router.get("/{article_id}")
async def article_detail(article_id: int, portal: Portal) -> ArticleDetailView:
    return await articles_svc.article_detail(portal.articles, portal.approvals, portal.identity, article_id)


@router.put("/{article_id}")
async def update_article(article_id: int, form: ArticleForm, portal: Portal) -> ArticleView:
    return await articles_svc.update_article(
        portal.articles,
        require_identity(portal),
        article_id,
        form.title,
        form.content,
    )


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(article_id: int, portal: Portal) -> Response:
    await articles_svc.delete_article(portal.articles, require_identity(portal), article_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{article_id}/send-to-review")
async def send_to_review(article_id: int, portal: Portal) -> ArticleView:
    return await articles_svc.send_to_review(portal.articles, require_identity(portal), article_id)
