from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from bloqqer.core.exceptions import ArticleNotFoundError, ArticleOwnershipError
from bloqqer.core.logging import get_logger
from bloqqer.db.query_filter import include_deleted as with_deleted
from bloqqer.models import Article
from bloqqer.services.rules import ArticleContentRule, validate
from bloqqer.services.user import user_service


class ArticleService:
    """記事関連の操作"""
    logger = get_logger(__name__)

    async def get_by_id(self, db: AsyncSession, article_id: UUID, include_deleted: bool = False) -> Article:
        """IDで記事を取得"""
        self.logger.info(f"Retrieving article by id: {article_id} (include_deleted={include_deleted})")
        result = await db.execute(
            with_deleted(select(Article).where(Article.id == article_id), include_deleted)
        )
        article = result.scalar_one_or_none()
        if article is None:
            self.logger.info(f"Article with id {article_id} not found")
            raise ArticleNotFoundError(article_id)
        return article

    async def get_all_by_owner(
        self,
        db: AsyncSession,
        owner_id: UUID,
        include_deleted: bool = False
    ) -> List[Article]:
        """ユーザーが作成した記事の一覧を取得"""
        self.logger.info(f"Retrieving articles of user: {owner_id} (include_deleted={include_deleted})")
        result = await db.execute(
            with_deleted(
                select(Article)
                .where(Article.created_by_id == owner_id)
                .order_by(Article.created_at, Article.id),
                include_deleted
            )
        )
        articles = list(result.scalars().all())
        self.logger.info(f"Retrieved {len(articles)} articles")
        return articles

    async def create(self, db: AsyncSession, content: str, owner_id: UUID) -> Article:
        """新しい記事を作成"""
        validate(ArticleContentRule, content=content)

        # 作成者の存在チェック
        await user_service.get_by_id(db, owner_id)

        self.logger.info(f"Creating new article for user: {owner_id}")
        db_obj = Article(content=content, created_by_id=owner_id)
        db.add(db_obj)
        await db.flush()
        # commitはsessionのfinallyで行う
        return db_obj

    async def update(self, db: AsyncSession, article_id: UUID, content: str, requestor_id: UUID) -> Article:
        """記事の内容を更新（作成者のみ）"""
        db_obj = await self.get_by_id(db, article_id)
        if db_obj.created_by_id != requestor_id:
            self.logger.warning(f"User {requestor_id} attempted to update article {article_id}")
            raise ArticleOwnershipError("更新")

        validate(ArticleContentRule, content=content)

        self.logger.info(f"Updating article: {article_id}")
        db_obj.content = content
        await db.flush()
        return db_obj

    async def delete(self, db: AsyncSession, article_id: UUID, requestor_id: UUID) -> None:
        """記事を削除（作成者のみ。保存時に論理削除へ変換される）"""
        db_obj = await self.get_by_id(db, article_id)
        if db_obj.created_by_id != requestor_id:
            self.logger.warning(f"User {requestor_id} attempted to delete article {article_id}")
            raise ArticleOwnershipError("削除")

        self.logger.info(f"Deleting article: {article_id}")
        await db.delete(db_obj)
        await db.flush()


# シングルトンインスタンス
article_service = ArticleService()
