"""Domain errors raised by the service layer.

Services raise these; the API layer maps them to status codes and the view
layer maps them to redirects or error pages. Malformed input never gets this
far: pydantic schemas reject it at the boundary with a 422.
"""


class BlogError(Exception):
    """Base class for all domain errors."""


class NotFoundError(BlogError):
    """Raised when a lookup by id finds nothing."""

    def __init__(self, entity_id: int | str):
        self.entity_id = entity_id
        super().__init__(f"not found:{entity_id}")


class DuplicateAccountError(BlogError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"An account with email '{email}' already exists")


class AuthenticationError(BlogError):
    """Bad credentials. Deliberately carries no detail about which part failed."""

    def __init__(self):
        super().__init__("Invalid credentials")
