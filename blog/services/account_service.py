"""
Account service — registration and credential checks for the Account
aggregate.

Accounts are append-only: there is no update or delete path. Passwords
only ever reach the store as an argon2 digest produced by the
``PasswordHasher``.
"""
import logging

from blog.exceptions import AuthenticationError, DuplicateAccountError, NotFoundError
from blog.models import Account
from blog.repositories import AccountStore
from blog.schemas import AccountCreate
from blog.security import PasswordHasher, password_hasher

logger = logging.getLogger(__name__)


async def register(
    store: AccountStore,
    data: AccountCreate,
    hasher: PasswordHasher = password_hasher,
) -> Account:
    """
    Create a new account and return it; ``account.id`` is the new identifier.

    Email uniqueness is checked up front so a duplicate never reaches the
    unique constraint in the common case. Two concurrent signups can both
    pass the check; the loser hits the constraint and the store reports it
    as the same ``DuplicateAccountError``.
    """
    if await store.find_by_email(data.email) is not None:
        raise DuplicateAccountError(data.email)

    account = await store.create(
        Account(email=data.email, password=hasher.hash(data.password))
    )
    logger.info("Account registered: id=%s", account.id)
    return account


async def get_account(store: AccountStore, account_id: int) -> Account:
    account = await store.find_by_id(account_id)
    if account is None:
        raise NotFoundError(account_id)
    return account


async def authenticate(
    store: AccountStore,
    email: str,
    password: str,
    hasher: PasswordHasher = password_hasher,
) -> Account:
    """
    Return the account for *email* if *password* matches its digest.

    Unknown email and wrong password raise the same ``AuthenticationError``
    so callers cannot tell which accounts exist.
    """
    account = await store.find_by_email(email)
    if account is None or not hasher.matches(password, account.password):
        logger.info("Login rejected")
        raise AuthenticationError()
    return account
