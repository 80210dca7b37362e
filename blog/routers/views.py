from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from blog.dependencies import current_session, get_article_store
from blog.repositories import ArticleStore
from blog.schemas import ArticleListItem, ArticleResponse
from blog.services import article_service
from blog.sessions import Session
from blog.templating import templates

router = APIRouter(tags=["views"])


@router.get("/articles", response_class=HTMLResponse)
async def article_list(
    request: Request,
    store: ArticleStore = Depends(get_article_store),
    session: Session | None = Depends(current_session),
):
    articles = [
        ArticleListItem.model_validate(a) for a in await article_service.list_articles(store)
    ]
    return templates.TemplateResponse(
        request, "article_list.html", {"articles": articles, "session": session}
    )


@router.get("/articles/{article_id}", response_class=HTMLResponse)
async def article_detail(
    request: Request,
    article_id: int,
    store: ArticleStore = Depends(get_article_store),
    session: Session | None = Depends(current_session),
):
    article = ArticleResponse.model_validate(
        await article_service.get_article(store, article_id)
    )
    return templates.TemplateResponse(
        request, "article.html", {"article": article, "session": session}
    )


@router.get("/new-article", response_class=HTMLResponse)
async def new_article(
    request: Request,
    id: int | None = None,
    store: ArticleStore = Depends(get_article_store),
    session: Session | None = Depends(current_session),
):
    """Blank form without ``id``; edit form prefilled from the article with it."""
    article = None
    if id is not None:
        article = ArticleResponse.model_validate(await article_service.get_article(store, id))
    return templates.TemplateResponse(
        request, "new_article.html", {"article": article, "session": session}
    )
