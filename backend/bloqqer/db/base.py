from datetime import datetime, UTC
from typing import Optional
import uuid

from sqlalchemy import Boolean, DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """タイムゾーン情報を持たないUTCの現在時刻"""
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    """全モデル共通の宣言的ベースクラス"""
    pass


class AuditableEntity(Base):
    """
    監査フィールドを持つエンティティの抽象基底クラス

    このクラスを継承したモデルには、保存時のタイムスタンプ付与と論理削除
    （db.interceptor）、および削除済み行の除外（db.query_filter）が自動的に
    適用される。テーブルは持たない。

    不変条件:
        - deleted_at が設定されているのは is_deleted が True のときのみ
        - created_at <= modified_at
    """
    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    modified_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
