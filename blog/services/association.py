"""
Association manager for the Article -> Comment one-to-many relationship.

The ORM relationships on the models are only used for eager loading.
Every structural operation on the association is spelled out here:

- ``ensure_article_exists`` guards comment writes against dangling
  ``article_id`` values before the database foreign key ever sees them.
- ``cascade_delete`` removes an article's comments and then the article,
  and checks that nothing was left behind.

Both run inside the caller's transaction (the ``get_db`` dependency), so
an exception rolls the whole unit back and a partial cascade is never
visible to other sessions.
"""
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog.exceptions import CascadeFailure, ReferentialIntegrityError
from blog.models import Article, Comment

logger = logging.getLogger(__name__)


async def article_exists(db: AsyncSession, article_id: int) -> bool:
    result = await db.execute(select(Article.id).where(Article.id == article_id))
    return result.scalar_one_or_none() is not None


async def ensure_article_exists(db: AsyncSession, article_id: int | None) -> None:
    """Raise ``ReferentialIntegrityError`` unless *article_id* names a stored article."""
    if article_id is None or not await article_exists(db, article_id):
        raise ReferentialIntegrityError(article_id)


async def count_comments(db: AsyncSession, article_id: int) -> int:
    q = select(func.count()).select_from(Comment).where(Comment.article_id == article_id)
    return (await db.execute(q)).scalar_one()


async def cascade_delete(db: AsyncSession, article_id: int) -> bool:
    """
    Delete the article *article_id* together with all of its comments.

    Returns False when the article does not exist, True once both the
    comments and the article are gone.  Raises ``CascadeFailure`` if any
    comment still references the article after the delete; the caller's
    transaction must then be rolled back.
    """
    if not await article_exists(db, article_id):
        return False

    comments_deleted = (
        await db.execute(delete(Comment).where(Comment.article_id == article_id))
    ).rowcount
    await db.execute(delete(Article).where(Article.id == article_id))
    await db.flush()

    # Catches comments inserted concurrently by another transaction.
    remaining = await count_comments(db, article_id)
    if remaining:
        logger.error(
            "Cascade delete of article %d left %d comment(s)", article_id, remaining
        )
        raise CascadeFailure(article_id, remaining)

    logger.info("Deleted article %d with %d comment(s)", article_id, comments_deleted)
    return True
