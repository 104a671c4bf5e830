"""
Article service — business logic for the Article aggregate.

Design notes
------------
- Every write runs ``validate_article`` on the full candidate record
  before touching the session.  Updates validate the record as it would
  look after the change, so a partial payload cannot sneak an invalid
  stored value past the rules.
- Comments are loaded with ``selectinload`` for the detail view only;
  the list view returns articles without their comments.
- Deletion is delegated to ``association.cascade_delete``.
- Service functions flush but do not commit; the transaction boundary
  is owned by the ``get_db`` dependency in the router layer.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from blog.exceptions import ValidationError
from blog.models import Article
from blog.schemas import ArticleCreate, ArticleUpdate
from blog.services.association import cascade_delete
from blog.services.comment_service import comment_to_dict
from blog.validation import validate_article

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _article_to_dict(article: Article) -> dict:
    """Serialise an Article ORM instance to a plain dict (list view)."""
    return {
        "id": article.id,
        "title": article.title,
        "body": article.body,
        "created_at": article.created_at.isoformat() if article.created_at else None,
        "updated_at": article.updated_at.isoformat() if article.updated_at else None,
    }


def _article_detail_to_dict(article: Article) -> dict:
    """Serialise an Article ORM instance to a plain dict (detail view)."""
    data = _article_to_dict(article)
    data["comments"] = [comment_to_dict(c) for c in article.comments]
    return data


def _check(candidate) -> None:
    result = validate_article(candidate)
    if not result.ok:
        logger.info("Rejected article: %s", [f.model_dump() for f in result.failures])
        raise ValidationError(result.failures)


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def get_articles(db: AsyncSession) -> list[dict]:
    """Return every article, oldest first."""
    result = await db.execute(select(Article).order_by(Article.id))
    return [_article_to_dict(a) for a in result.scalars().all()]


async def get_article(db: AsyncSession, article_id: int) -> dict | None:
    """
    Return the detail dict for *article_id*, including its comments.

    Returns None when the article does not exist.
    """
    q = (
        select(Article)
        .where(Article.id == article_id)
        .options(selectinload(Article.comments))
        .execution_options(populate_existing=True)
    )
    result = await db.execute(q)
    article = result.scalar_one_or_none()
    if article is None:
        return None
    return _article_detail_to_dict(article)


async def create_article(db: AsyncSession, data: ArticleCreate) -> dict:
    """
    Validate *data* and insert a new article.

    Raises ``ValidationError`` carrying every failing rule; nothing is
    added to the session in that case.
    """
    _check(data)

    article = Article(title=data.title, body=data.body)
    db.add(article)
    await db.flush()

    logger.info("Created article %d", article.id)
    return _article_to_dict(article)


async def update_article(
    db: AsyncSession, article_id: int, data: ArticleUpdate
) -> dict | None:
    """
    Partially update an existing article and return its updated dict.

    Returns None when the article does not exist.  Only fields explicitly
    set in the payload are changed (``model_dump(exclude_unset=True)``);
    the merged record is re-validated before anything is written.
    """
    result = await db.execute(select(Article).where(Article.id == article_id))
    article = result.scalar_one_or_none()
    if article is None:
        return None

    changes = data.model_dump(exclude_unset=True)
    candidate = ArticleCreate.model_construct(title=article.title, body=article.body)
    _check(candidate.model_copy(update=changes))

    for field, value in changes.items():
        setattr(article, field, value)
    await db.flush()

    logger.info("Updated article %d (%s)", article_id, ", ".join(sorted(changes)) or "no changes")
    return _article_to_dict(article)


async def delete_article(db: AsyncSession, article_id: int) -> bool:
    """
    Delete the article identified by *article_id* and all of its comments.

    Returns True on success, False when the article does not exist.
    """
    return await cascade_delete(db, article_id)
