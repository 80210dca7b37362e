from fastapi import APIRouter, Depends, Response

from blog.dependencies import get_article_store
from blog.repositories import ArticleStore
from blog.schemas import ArticleCreate, ArticleResponse, ArticleUpdate
from blog.services import article_service

router = APIRouter(prefix="/api/articles", tags=["articles"])

@router.post("", status_code=201, response_model=ArticleResponse)
async def create_article(data: ArticleCreate, store: ArticleStore = Depends(get_article_store)):
    return await article_service.create_article(store, data)

@router.get("", response_model=list[ArticleResponse])
async def list_articles(store: ArticleStore = Depends(get_article_store)):
    return await article_service.list_articles(store)

@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(article_id: int, store: ArticleStore = Depends(get_article_store)):
    return await article_service.get_article(store, article_id)

@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: int, data: ArticleUpdate, store: ArticleStore = Depends(get_article_store)
):
    return await article_service.update_article(store, article_id, data)

@router.delete("/{article_id}", status_code=200)
async def delete_article(article_id: int, store: ArticleStore = Depends(get_article_store)):
    await article_service.delete_article(store, article_id)
    return Response(status_code=200)
