"""
Comment service — business logic for comments attached to an Article.

A comment is written only when both hold:

1. ``validate_comment`` reports no failures and an ``article_id`` is set
   (the association requires a parent even though the column is
   nullable in storage).
2. The referenced article exists.  This is checked up front so the
   caller gets a ``ReferentialIntegrityError`` rather than a driver
   error; an ``IntegrityError`` raised by the database foreign key on
   flush is translated to the same exception.
"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.exceptions import ReferentialIntegrityError, ValidationError
from blog.models import Comment
from blog.schemas import CommentCreate, CommentUpdate
from blog.services.association import article_exists, ensure_article_exists
from blog.validation import MissingField, validate_comment

logger = logging.getLogger(__name__)


def comment_to_dict(comment: Comment) -> dict:
    """Serialise a Comment ORM instance to a plain dict."""
    return {
        "id": comment.id,
        "commenter": comment.commenter,
        "body": comment.body,
        "article_id": comment.article_id,
        "created_at": comment.created_at.isoformat() if comment.created_at else None,
        "updated_at": comment.updated_at.isoformat() if comment.updated_at else None,
    }


def _check(candidate) -> None:
    failures = list(validate_comment(candidate).failures)
    if candidate.article_id is None:
        failures.append(MissingField(field="article_id"))
    if failures:
        logger.info("Rejected comment: %s", [f.model_dump() for f in failures])
        raise ValidationError(failures)


async def _flush(db: AsyncSession, article_id: int | None) -> None:
    try:
        await db.flush()
    except IntegrityError as exc:
        raise ReferentialIntegrityError(article_id) from exc


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def get_comments(db: AsyncSession, article_id: int) -> list[dict] | None:
    """
    Return the comments of *article_id*, oldest first.

    Returns None when the article does not exist.
    """
    if not await article_exists(db, article_id):
        return None
    q = select(Comment).where(Comment.article_id == article_id).order_by(Comment.id)
    result = await db.execute(q)
    return [comment_to_dict(c) for c in result.scalars().all()]


async def get_comment(db: AsyncSession, comment_id: int) -> dict | None:
    """Return the comment *comment_id*, or None when it does not exist."""
    result = await db.execute(select(Comment).where(Comment.id == comment_id))
    comment = result.scalar_one_or_none()
    return comment_to_dict(comment) if comment else None


async def create_comment(db: AsyncSession, data: CommentCreate) -> dict:
    """
    Validate *data* and attach a new comment to its article.

    Raises ``ValidationError`` for field failures and
    ``ReferentialIntegrityError`` when the article does not exist.
    """
    _check(data)
    await ensure_article_exists(db, data.article_id)

    comment = Comment(
        commenter=data.commenter,
        body=data.body,
        article_id=data.article_id,
    )
    db.add(comment)
    await _flush(db, data.article_id)

    logger.info("Created comment %d on article %d", comment.id, comment.article_id)
    return comment_to_dict(comment)


async def update_comment(
    db: AsyncSession, comment_id: int, data: CommentUpdate
) -> dict | None:
    """
    Partially update a comment and return its updated dict.

    Returns None when the comment does not exist.  Moving a comment to
    another article re-checks that the new parent exists.
    """
    result = await db.execute(select(Comment).where(Comment.id == comment_id))
    comment = result.scalar_one_or_none()
    if comment is None:
        return None

    changes = data.model_dump(exclude_unset=True)
    candidate = CommentCreate.model_construct(
        commenter=comment.commenter,
        body=comment.body,
        article_id=comment.article_id,
    ).model_copy(update=changes)
    _check(candidate)
    if candidate.article_id != comment.article_id:
        await ensure_article_exists(db, candidate.article_id)

    for field, value in changes.items():
        setattr(comment, field, value)
    await _flush(db, comment.article_id)

    logger.info("Updated comment %d (%s)", comment_id, ", ".join(sorted(changes)) or "no changes")
    return comment_to_dict(comment)


async def delete_comment(db: AsyncSession, comment_id: int) -> bool:
    """
    Delete the comment identified by *comment_id*.

    Returns True on success, False when the comment does not exist.
    """
    result = await db.execute(select(Comment).where(Comment.id == comment_id))
    comment = result.scalar_one_or_none()
    if comment is None:
        return False

    await db.delete(comment)
    await db.flush()
    logger.info("Deleted comment %d", comment_id)
    return True
