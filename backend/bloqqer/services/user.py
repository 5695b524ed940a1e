from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from uuid import UUID

from bloqqer.core.exceptions import (
    EmailAlreadyTakenError,
    UserHasArticlesError,
    UserNotFoundError,
    UserOwnershipError
)
from bloqqer.core.logging import get_logger
from bloqqer.db.query_filter import include_deleted as with_deleted
from bloqqer.models import Article, User
from bloqqer.services.rules import UserCreateRule, UsernameRule, normalize_email, validate


class UserService:
    """ユーザー関連の操作"""
    logger = get_logger(__name__)

    async def get_by_id(self, db: AsyncSession, user_id: UUID) -> User:
        """IDでユーザーを取得"""
        self.logger.info(f"Retrieving user by id: {user_id}")
        result = await db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            self.logger.info(f"User with id {user_id} not found")
            raise UserNotFoundError(user_id=user_id)
        return user

    async def get_by_email(self, db: AsyncSession, email: str) -> User:
        """メールアドレスでユーザーを取得"""
        user = await self.get_by_email_optional(db, email)
        if user is None:
            self.logger.debug(f"User with email {email} not found")
            raise UserNotFoundError(email=email)
        return user

    async def get_by_email_optional(
        self,
        db: AsyncSession,
        email: str,
        include_deleted: bool = False
    ) -> Optional[User]:
        """メールアドレスでユーザーを取得（例外を投げない。大文字・小文字は区別しない）"""
        self.logger.debug(f"Retrieving user by email: {email}")
        result = await db.execute(
            with_deleted(select(User).where(User.email == normalize_email(email)), include_deleted)
        )
        return result.scalar_one_or_none()

    async def is_email_taken(self, db: AsyncSession, email: str) -> bool:
        """メールアドレスが使用済みか（論理削除済みのユーザーも一意制約を占有する）"""
        return await self.get_by_email_optional(db, email, include_deleted=True) is not None

    async def create(self, db: AsyncSession, username: str, email: str) -> User:
        """新しいユーザーを作成"""
        rule = validate(UserCreateRule, username=username, email=email)
        email = normalize_email(rule.email)

        if await self.is_email_taken(db, email):
            raise EmailAlreadyTakenError(email)

        db_obj = User(username=username, email=email)
        db.add(db_obj)
        await db.flush()
        # commitはsessionのfinallyで行う
        self.logger.info(f"Created new user: {db_obj.id}")
        return db_obj

    async def update(self, db: AsyncSession, user_id: UUID, username: str, requestor_id: UUID) -> User:
        """ユーザー名を更新（本人のみ）"""
        validate(UsernameRule, username=username)

        db_obj = await self.get_by_id(db, user_id)
        if requestor_id != db_obj.id:
            self.logger.warning(f"User {requestor_id} attempted to update user {user_id}")
            raise UserOwnershipError("更新")

        self.logger.info(f"Updating user: {user_id}")
        db_obj.username = username
        await db.flush()
        return db_obj

    async def delete(self, db: AsyncSession, user_id: UUID, requestor_id: UUID) -> None:
        """ユーザーを削除（本人のみ・記事を所有していない場合のみ）"""
        db_obj = await self.get_by_id(db, user_id)
        if requestor_id != db_obj.id:
            raise UserOwnershipError("削除")

        # 論理削除済みの記事も含めて参照があれば削除を制限する
        owns_articles = await db.scalar(
            with_deleted(select(exists().where(Article.created_by_id == user_id)))
        )
        if owns_articles:
            self.logger.warning(f"Refusing to delete user {user_id}: user owns articles")
            raise UserHasArticlesError(user_id)

        self.logger.info(f"Deleting user: {user_id}")
        await db.delete(db_obj)
        await db.flush()


# シングルトンインスタンス
user_service = UserService()
