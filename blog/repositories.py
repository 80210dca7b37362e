"""
Persistence ports and their SQLAlchemy implementations.

Each entity gets an explicit store interface listing exactly the operations
the services use. The SQLAlchemy stores work inside the caller's
``AsyncSession``: they flush so ids are assigned, but never commit; the
transaction boundary belongs to ``get_db``.
"""
from abc import ABC, abstractmethod

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.exceptions import DuplicateAccountError
from blog.models import Account, Article


# ---------------------------------------------------------------------------
# Ports
# ---------------------------------------------------------------------------

class ArticleStore(ABC):
    """Port for article persistence."""

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article and return it with its generated id."""
        ...

    @abstractmethod
    async def find_all(self) -> list[Article]:
        ...

    @abstractmethod
    async def find_by_id(self, article_id: int, *, for_update: bool = False) -> Article | None:
        """Return the article or None. ``for_update`` takes a row lock."""
        ...

    @abstractmethod
    async def delete_by_id(self, article_id: int) -> bool:
        """Delete if present. Returns True if a row was removed."""
        ...

    @abstractmethod
    async def save(self, article: Article) -> Article:
        """Write pending field changes of a loaded article."""
        ...


class AccountStore(ABC):
    """Port for account persistence."""

    @abstractmethod
    async def create(self, account: Account) -> Account:
        ...

    @abstractmethod
    async def find_by_id(self, account_id: int) -> Account | None:
        ...

    @abstractmethod
    async def find_by_email(self, email: str) -> Account | None:
        ...


# ---------------------------------------------------------------------------
# SQLAlchemy implementations
# ---------------------------------------------------------------------------

class SQLAlchemyArticleStore(ArticleStore):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, article: Article) -> Article:
        self._session.add(article)
        await self._session.flush()
        return article

    async def find_all(self) -> list[Article]:
        result = await self._session.execute(select(Article).order_by(Article.id))
        return list(result.scalars().all())

    @staticmethod
    def by_id_query(article_id: int, *, for_update: bool = False) -> Select:
        q = select(Article).where(Article.id == article_id)
        if for_update:
            # Row lock on PostgreSQL; SQLite ignores FOR UPDATE and
            # serializes writers at the database level instead.
            q = q.with_for_update()
        return q

    async def find_by_id(self, article_id: int, *, for_update: bool = False) -> Article | None:
        result = await self._session.execute(self.by_id_query(article_id, for_update=for_update))
        return result.scalar_one_or_none()

    async def delete_by_id(self, article_id: int) -> bool:
        article = await self._session.get(Article, article_id)
        if article is None:
            return False
        await self._session.delete(article)
        await self._session.flush()
        return True

    async def save(self, article: Article) -> Article:
        await self._session.flush()
        return article


class SQLAlchemyAccountStore(AccountStore):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, account: Account) -> Account:
        self._session.add(account)
        try:
            await self._session.flush()
        except IntegrityError:
            # Lost a signup race on the unique email. The failed flush has
            # already doomed the transaction; roll back so the request
            # session stays usable.
            await self._session.rollback()
            raise DuplicateAccountError(account.email)
        return account

    async def find_by_id(self, account_id: int) -> Account | None:
        return await self._session.get(Account, account_id)

    async def find_by_email(self, email: str) -> Account | None:
        result = await self._session.execute(select(Account).where(Account.email == email))
        return result.scalar_one_or_none()
