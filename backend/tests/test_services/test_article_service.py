"""
ArticleService のテスト
"""
import asyncio
import pytest
from uuid import uuid4
from sqlalchemy.ext.asyncio import AsyncSession

from bloqqer.services.article import article_service
from bloqqer.models import Article, User
from bloqqer.models.article import MAX_CONTENT_LENGTH
from bloqqer.core.exceptions import (
    ArticleNotFoundError,
    ArticleOwnershipError,
    UnauthorizedError,
    UserNotFoundError,
    ValidationError
)


class TestArticleService:
    """ArticleService のテストクラス"""

    @pytest.mark.asyncio
    async def test_create_success(self, db_session: AsyncSession, sample_user: User):
        """記事作成 - 正常系"""
        # 実行
        article = await article_service.create(db_session, content="hello bloqqer", owner_id=sample_user.id)

        # 検証
        assert article.id is not None
        assert article.content == "hello bloqqer"
        assert article.created_by_id == sample_user.id
        assert article.is_deleted is False
        assert article.created_at == article.modified_at

    @pytest.mark.asyncio
    async def test_create_max_length_content(self, db_session: AsyncSession, sample_user: User):
        """記事作成 - 上限ちょうどの長さは許可される"""
        # 実行
        article = await article_service.create(
            db_session, content="a" * MAX_CONTENT_LENGTH, owner_id=sample_user.id
        )

        # 検証
        assert len(article.content) == MAX_CONTENT_LENGTH

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "a" * (MAX_CONTENT_LENGTH + 1)])
    async def test_create_invalid_content(self, db_session: AsyncSession, sample_user: User, content: str):
        """記事作成 - 空・空白のみ・長すぎる内容はバリデーションエラー"""
        # 実行・検証
        with pytest.raises(ValidationError):
            await article_service.create(db_session, content=content, owner_id=sample_user.id)

    @pytest.mark.asyncio
    async def test_create_unknown_owner(self, db_session: AsyncSession):
        """記事作成 - 存在しない作成者"""
        # 実行・検証
        with pytest.raises(UserNotFoundError):
            await article_service.create(db_session, content="orphan", owner_id=uuid4())

    @pytest.mark.asyncio
    async def test_get_by_id_success(self, db_session: AsyncSession, sample_article: Article):
        """記事取得 - 正常系"""
        # 実行
        result = await article_service.get_by_id(db_session, sample_article.id)

        # 検証
        assert result.id == sample_article.id
        assert result.content == sample_article.content

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, db_session: AsyncSession):
        """記事取得 - 存在しないID"""
        non_existent_id = uuid4()

        # 実行・検証
        with pytest.raises(ArticleNotFoundError) as exc_info:
            await article_service.get_by_id(db_session, non_existent_id)

        assert str(non_existent_id) in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_get_by_id_deleted(self, db_session: AsyncSession, sample_article: Article, sample_user: User):
        """記事取得 - 削除済みは既定で見つからず、includeDeleted で取得できる"""
        # 準備
        await article_service.delete(db_session, sample_article.id, requestor_id=sample_user.id)

        # 実行・検証
        with pytest.raises(ArticleNotFoundError):
            await article_service.get_by_id(db_session, sample_article.id)

        result = await article_service.get_by_id(db_session, sample_article.id, include_deleted=True)
        assert result.id == sample_article.id
        assert result.is_deleted is True
        assert result.deleted_at is not None

    @pytest.mark.asyncio
    async def test_get_all_by_owner(self, db_session: AsyncSession, sample_user: User, other_user: User):
        """記事一覧取得 - 作成者の記事のみ、削除済みは既定で除外"""
        # 準備
        first = await article_service.create(db_session, content="first", owner_id=sample_user.id)
        second = await article_service.create(db_session, content="second", owner_id=sample_user.id)
        await article_service.create(db_session, content="not mine", owner_id=other_user.id)
        await article_service.delete(db_session, second.id, requestor_id=sample_user.id)

        # 実行
        visible = await article_service.get_all_by_owner(db_session, sample_user.id)
        everything = await article_service.get_all_by_owner(db_session, sample_user.id, include_deleted=True)

        # 検証
        assert [a.id for a in visible] == [first.id]
        assert {a.id for a in everything} == {first.id, second.id}

    @pytest.mark.asyncio
    async def test_get_all_by_owner_empty(self, db_session: AsyncSession, other_user: User):
        """記事一覧取得 - 記事がない場合は空リスト"""
        # 実行
        result = await article_service.get_all_by_owner(db_session, other_user.id)

        # 検証
        assert result == []

    @pytest.mark.asyncio
    async def test_update_success(self, db_session: AsyncSession, sample_article: Article, sample_user: User):
        """記事更新 - 正常系"""
        # 準備
        created_at = sample_article.created_at
        modified_at = sample_article.modified_at
        await asyncio.sleep(0.01)

        # 実行
        result = await article_service.update(
            db_session, sample_article.id, content="updated content", requestor_id=sample_user.id
        )

        # 検証
        assert result.content == "updated content"
        assert result.created_at == created_at
        assert result.modified_at > modified_at

    @pytest.mark.asyncio
    async def test_update_by_non_owner(self, db_session: AsyncSession, sample_article: Article, other_user: User):
        """記事更新 - 作成者以外は認可エラー"""
        # 実行・検証
        with pytest.raises(ArticleOwnershipError) as exc_info:
            await article_service.update(
                db_session, sample_article.id, content="hijacked", requestor_id=other_user.id
            )

        assert isinstance(exc_info.value, UnauthorizedError)
        assert sample_article.content != "hijacked"

    @pytest.mark.asyncio
    async def test_update_not_found(self, db_session: AsyncSession, sample_user: User):
        """記事更新 - 存在しないID"""
        # 実行・検証
        with pytest.raises(ArticleNotFoundError):
            await article_service.update(db_session, uuid4(), content="nothing", requestor_id=sample_user.id)

    @pytest.mark.asyncio
    async def test_update_empty_content(self, db_session: AsyncSession, sample_article: Article, sample_user: User):
        """記事更新 - 空の内容はバリデーションエラー"""
        # 実行・検証
        with pytest.raises(ValidationError):
            await article_service.update(db_session, sample_article.id, content="", requestor_id=sample_user.id)

    @pytest.mark.asyncio
    async def test_update_checks_owner_before_content(
        self,
        db_session: AsyncSession,
        sample_article: Article,
        other_user: User
    ):
        """記事更新 - 作成者以外の不正な内容は認可エラーが優先される"""
        # 実行・検証
        with pytest.raises(UnauthorizedError):
            await article_service.update(db_session, sample_article.id, content="", requestor_id=other_user.id)

    @pytest.mark.asyncio
    async def test_update_deleted_article(self, db_session: AsyncSession, sample_article: Article, sample_user: User):
        """記事更新 - 削除済みの記事は見つからない"""
        # 準備
        await article_service.delete(db_session, sample_article.id, requestor_id=sample_user.id)

        # 実行・検証
        with pytest.raises(ArticleNotFoundError):
            await article_service.update(
                db_session, sample_article.id, content="too late", requestor_id=sample_user.id
            )

    @pytest.mark.asyncio
    async def test_delete_success(self, db_session: AsyncSession, sample_article: Article, sample_user: User):
        """記事削除 - 論理削除される"""
        # 実行
        await article_service.delete(db_session, sample_article.id, requestor_id=sample_user.id)

        # 検証
        result = await article_service.get_by_id(db_session, sample_article.id, include_deleted=True)
        assert result.is_deleted is True
        assert result.modified_at == result.deleted_at

    @pytest.mark.asyncio
    async def test_delete_by_non_owner(self, db_session: AsyncSession, sample_article: Article, other_user: User):
        """記事削除 - 作成者以外は認可エラー"""
        # 実行・検証
        with pytest.raises(ArticleOwnershipError):
            await article_service.delete(db_session, sample_article.id, requestor_id=other_user.id)

        result = await article_service.get_by_id(db_session, sample_article.id)
        assert result.is_deleted is False

    @pytest.mark.asyncio
    async def test_delete_twice(self, db_session: AsyncSession, sample_article: Article, sample_user: User):
        """記事削除 - 削除済みの記事は見つからない"""
        # 準備
        await article_service.delete(db_session, sample_article.id, requestor_id=sample_user.id)

        # 実行・検証
        with pytest.raises(ArticleNotFoundError):
            await article_service.delete(db_session, sample_article.id, requestor_id=sample_user.id)
