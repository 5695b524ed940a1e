from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from bloqqer.api.deps import get_current_user_id
from bloqqer.core.logging import get_request_logger
from bloqqer.db.session import get_async_session
from bloqqer.schemas import Article as ArticleSchema, ArticleCreate, ArticleUpdate
from bloqqer.services.article import article_service

router = APIRouter(dependencies=[Depends(get_current_user_id)])


@router.post("", response_model=ArticleSchema, status_code=status.HTTP_201_CREATED)
async def create_article(
    request: Request,
    article_in: ArticleCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session)
):
    """新しい記事を作成"""
    logger = get_request_logger(request)
    logger.info(f"記事作成リクエスト: 作成者={current_user_id}")

    article = await article_service.create(db, content=article_in.content, owner_id=current_user_id)
    logger.info(f"記事作成成功: 記事ID={article.id}")
    return article


@router.get("/user/{user_id}/all", response_model=List[ArticleSchema])
async def read_articles_by_user(
    request: Request,
    user_id: UUID,
    include_deleted: bool = Query(False, alias="includeDeleted"),
    db: AsyncSession = Depends(get_async_session)
):
    """ユーザーが作成した記事の一覧を取得"""
    logger = get_request_logger(request)
    logger.info(f"記事一覧取得リクエスト: user_id={user_id}, includeDeleted={include_deleted}")

    articles = await article_service.get_all_by_owner(db, owner_id=user_id, include_deleted=include_deleted)
    logger.info(f"記事一覧取得成功: {len(articles)}件")
    return articles


@router.get("/{article_id}", response_model=ArticleSchema)
async def read_article(
    request: Request,
    article_id: UUID,
    include_deleted: bool = Query(False, alias="includeDeleted"),
    db: AsyncSession = Depends(get_async_session)
):
    """IDで記事を取得"""
    logger = get_request_logger(request)
    logger.info(f"記事取得リクエスト: article_id={article_id}, includeDeleted={include_deleted}")

    return await article_service.get_by_id(db, article_id, include_deleted=include_deleted)


@router.put("/{article_id}", response_model=ArticleSchema)
async def update_article(
    request: Request,
    article_id: UUID,
    article_in: ArticleUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session)
):
    """記事を更新（作成者のみ）"""
    logger = get_request_logger(request)
    logger.info(f"記事更新リクエスト: article_id={article_id}, 更新者={current_user_id}")

    article = await article_service.update(
        db, article_id=article_id, content=article_in.content, requestor_id=current_user_id
    )
    logger.info(f"記事更新成功: article_id={article_id}")
    return article


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    request: Request,
    article_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session)
):
    """記事を削除（作成者のみ・論理削除）"""
    logger = get_request_logger(request)
    logger.info(f"記事削除リクエスト: article_id={article_id}, 削除者={current_user_id}")

    await article_service.delete(db, article_id=article_id, requestor_id=current_user_id)
    logger.info(f"記事削除成功: article_id={article_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
