"""
テスト用の共通フィクスチャとセットアップ
"""
import pytest
import pytest_asyncio
from datetime import timedelta
from uuid import uuid4
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from bloqqer.core.security import create_access_token
from bloqqer.db.session import create_tables, get_async_session, make_engine, make_session_factory
from bloqqer.main import app
from bloqqer.models import User, Article


# テスト用のインメモリSQLiteデータベース設定
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """テスト用データベースエンジン（テストごとに新しいデータベース）"""
    engine = make_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={
            "check_same_thread": False,
        },
    )

    # テーブル作成
    await create_tables(engine)

    yield engine

    # クリーンアップ
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """テスト用データベースセッション（本番と同じ監査ポリシー付きファクトリー）"""
    session_factory = make_session_factory(test_engine)

    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest_asyncio.fixture
async def sample_user(db_session: AsyncSession) -> User:
    """サンプルユーザー"""
    user = User(username="testuser", email="testuser@bloqqer.net")
    db_session.add(user)
    await db_session.flush()
    return user


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    """記事の作成者ではないユーザー"""
    user = User(username="otheruser", email="otheruser@bloqqer.net")
    db_session.add(user)
    await db_session.flush()
    return user


@pytest_asyncio.fixture
async def sample_article(db_session: AsyncSession, sample_user: User) -> Article:
    """サンプル記事"""
    article = Article(content="This is a sample article content.", created_by_id=sample_user.id)
    db_session.add(article)
    await db_session.flush()
    return article


@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession):
    """非同期テストクライアント"""
    # データベースセッションをオーバーライド
    async def override_get_async_session():
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # オーバーライドをクリア
    app.dependency_overrides.clear()


def make_auth_headers(user: User, expires_delta: timedelta = timedelta(minutes=30)) -> dict:
    """ユーザーのJWTを持つ認証ヘッダーを作成"""
    token = create_access_token(
        user_id=user.id,
        username=user.username,
        email=user.email,
        expires_delta=expires_delta
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers_factory():
    """任意のユーザー・有効期限で認証ヘッダーを作成するファクトリー"""
    return make_auth_headers


@pytest.fixture
def authenticated_headers(sample_user: User) -> dict:
    """認証済みヘッダー"""
    return make_auth_headers(sample_user)


@pytest.fixture
def other_user_headers(other_user: User) -> dict:
    """作成者以外のユーザーの認証済みヘッダー"""
    return make_auth_headers(other_user)


@pytest.fixture
def unique_email():
    """重複しないメールアドレスを生成するファクトリー"""
    def _make(prefix: str = "user") -> str:
        return f"{prefix}_{uuid4().hex[:8]}@bloqqer.net"
    return _make
