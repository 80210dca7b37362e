"""
Article service — business logic for the Article aggregate.

Design notes
------------
- Every function takes an ``ArticleStore`` as its first argument; the
  router builds one around the request's ``AsyncSession`` so the
  transaction boundary stays with the ``get_db`` dependency.
- Lookups that miss raise ``NotFoundError`` rather than returning None;
  the exception handler in ``blog.main`` turns that into a 404.
- ``update_article`` reads with a row lock and writes in the same
  transaction, so two concurrent updates to one article cannot interleave
  their read-modify-write cycles.
- Any authenticated principal may modify any article; there is no
  ownership column.
"""
import logging

from blog.exceptions import NotFoundError
from blog.models import Article
from blog.repositories import ArticleStore
from blog.schemas import ArticleCreate, ArticleUpdate

logger = logging.getLogger(__name__)


async def create_article(store: ArticleStore, data: ArticleCreate) -> Article:
    """Persist a new article immediately and return it with its id assigned."""
    article = await store.create(Article(title=data.title, content=data.content))
    logger.info("Article created: id=%s", article.id)
    return article


async def list_articles(store: ArticleStore) -> list[Article]:
    """Return every article in store order (ascending id); may be empty."""
    return await store.find_all()


async def get_article(store: ArticleStore, article_id: int) -> Article:
    article = await store.find_by_id(article_id)
    if article is None:
        raise NotFoundError(article_id)
    return article


async def delete_article(store: ArticleStore, article_id: int) -> None:
    """
    Delete the article identified by *article_id*.

    Deleting an id that does not exist is a no-op, not an error.
    """
    deleted = await store.delete_by_id(article_id)
    if deleted:
        logger.info("Article deleted: id=%s", article_id)
    else:
        logger.debug("Delete of missing article ignored: id=%s", article_id)


async def update_article(
    store: ArticleStore, article_id: int, data: ArticleUpdate
) -> Article:
    """
    Replace title and content of an existing article in place.

    The identifier is unchanged and the returned object is the same
    instance the store loaded, so callers observe exactly what was written.
    """
    article = await store.find_by_id(article_id, for_update=True)
    if article is None:
        raise NotFoundError(article_id)

    article.update(data.title, data.content)
    await store.save(article)
    logger.info("Article updated: id=%s", article_id)
    return article
