from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


# --- Account ---

class AccountCreate(BaseModel):
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=8, max_length=128)


class AccountResponse(BaseModel):
    id: int
    email: str
    model_config = ConfigDict(from_attributes=True)


# --- Article ---

class ArticleBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str


class ArticleCreate(ArticleBase):
    pass


class ArticleUpdate(ArticleBase):
    """Full replacement of the mutable fields; both are required."""


class ArticleResponse(ArticleBase):
    id: int
    created_at: datetime
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class ArticleListItem(BaseModel):
    """Lean projection used by the HTML list view."""
    id: int
    title: str
    content: str
    model_config = ConfigDict(from_attributes=True)
