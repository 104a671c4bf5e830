from pydantic import BaseModel, ConfigDict
from datetime import datetime

from blog.validation import FieldFailure

# Request schemas deliberately carry no length constraints: the validators in
# blog.validation own those rules and report every failure in one pass.


# --- Comment ---

class CommentCreate(BaseModel):
    commenter: str | None = ""
    body: str | None = None
    article_id: int | None = None


class CommentBody(BaseModel):
    """Comment payload posted under an article; the URL supplies article_id."""
    commenter: str | None = ""
    body: str | None = None


class CommentUpdate(BaseModel):
    commenter: str | None = None
    body: str | None = None
    article_id: int | None = None


class CommentResponse(BaseModel):
    id: int
    commenter: str
    body: str | None
    article_id: int | None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Article ---

class ArticleCreate(BaseModel):
    title: str | None = ""
    body: str | None = None


class ArticleUpdate(BaseModel):
    title: str | None = None
    body: str | None = None


class ArticleResponse(BaseModel):
    id: int
    title: str
    body: str | None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class ArticleDetail(ArticleResponse):
    comments: list[CommentResponse] = []


# --- Errors ---

class ValidationErrorResponse(BaseModel):
    detail: str
    failures: list[FieldFailure]
