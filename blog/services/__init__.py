# Services package.
#
# Each module exposes a focused set of async functions that encapsulate
# business logic for a single domain aggregate:
#
#   article_service  — create / list / get / delete / update-in-place for Article
#   account_service  — registration, lookup and credential checks for Account
#
# All service functions accept a store (see ``blog.repositories``) as their
# first argument. Stores wrap the request's AsyncSession, so the router
# layer controls the transaction boundary via the ``get_db`` dependency.
