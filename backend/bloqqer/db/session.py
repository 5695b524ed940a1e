from typing import Any, AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session

from bloqqer.core.config import settings
from bloqqer.core.logging import get_logger
from bloqqer.db.base import Base
from bloqqer.db.interceptor import install_save_interceptor
from bloqqer.db.query_filter import install_soft_delete_filter
import bloqqer.models  # noqa: F401  テーブル定義をメタデータに登録


logger = get_logger(__name__)


class BloqqerSession(Session):
    """
    アプリケーション用のセッションクラス

    保存時インターセプターと論理削除フィルターが登録されており、
    このクラスから作られるすべてのセッションに監査ポリシーが適用される。
    """
    pass


install_save_interceptor(BloqqerSession)
install_soft_delete_filter(BloqqerSession)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(database_url: str, **kwargs: Any) -> AsyncEngine:
    """非同期エンジンを作成（SQLiteの場合は外部キー制約を有効化）"""
    kwargs.setdefault("echo", settings.SQLALCHEMY_ECHO)
    engine = create_async_engine(database_url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """監査ポリシー付きのセッションファクトリーを作成"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        sync_session_class=BloqqerSession,
        expire_on_commit=False,
    )


async_engine = make_engine(settings.DATABASE_URL)
async_session_factory = make_session_factory(async_engine)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """リクエスト単位のセッションを提供する依存性（成功時にコミット、失敗時にロールバック）"""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables(engine: AsyncEngine) -> None:
    """すべてのモデルのテーブルを作成（既存のテーブルはそのまま）"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Created tables: {', '.join(sorted(Base.metadata.tables))}")
