from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from blog.database import get_db
from blog.exceptions import ReferentialIntegrityError
from blog.schemas import (
    ArticleCreate,
    ArticleDetail,
    ArticleResponse,
    ArticleUpdate,
    CommentBody,
    CommentCreate,
    CommentResponse,
)
from blog.services import article_service, comment_service

router = APIRouter(prefix="/api/v1/articles", tags=["articles"])

@router.get("", response_model=list[ArticleResponse])
async def list_articles(db: AsyncSession = Depends(get_db)):
    return await article_service.get_articles(db)

@router.get("/{article_id}", response_model=ArticleDetail)
async def get_article(article_id: int, db: AsyncSession = Depends(get_db)):
    article = await article_service.get_article(db, article_id)
    if not article:
        raise HTTPException(status_code=404, detail="Article not found")
    return article

@router.post("", status_code=201, response_model=ArticleResponse)
async def create_article(data: ArticleCreate, db: AsyncSession = Depends(get_db)):
    return await article_service.create_article(db, data)

@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(article_id: int, data: ArticleUpdate, db: AsyncSession = Depends(get_db)):
    article = await article_service.update_article(db, article_id, data)
    if not article:
        raise HTTPException(status_code=404, detail="Article not found")
    return article

@router.delete("/{article_id}", status_code=204)
async def delete_article(article_id: int, db: AsyncSession = Depends(get_db)):
    deleted = await article_service.delete_article(db, article_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Article not found")

@router.get("/{article_id}/comments", response_model=list[CommentResponse])
async def list_comments(article_id: int, db: AsyncSession = Depends(get_db)):
    comments = await comment_service.get_comments(db, article_id)
    if comments is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return comments

@router.post("/{article_id}/comments", status_code=201, response_model=CommentResponse)
async def add_comment(article_id: int, data: CommentBody, db: AsyncSession = Depends(get_db)):
    try:
        return await comment_service.create_comment(
            db, CommentCreate(**data.model_dump(), article_id=article_id)
        )
    except ReferentialIntegrityError as exc:
        raise HTTPException(status_code=404, detail="Article not found") from exc
