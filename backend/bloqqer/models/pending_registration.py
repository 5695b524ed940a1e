from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from bloqqer.db.base import AuditableEntity


class PendingRegistration(AuditableEntity):
    """登録確認待ちのレコード（確認コードは1回のみ使用可能）"""
    __tablename__ = "pending_registrations"

    email: Mapped[str] = mapped_column(String(320), index=True)
    confirmation_code: Mapped[str] = mapped_column(String(36), unique=True, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime)
