from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bloqqer.db.base import AuditableEntity

if TYPE_CHECKING:
    from bloqqer.models.article import Article


USERNAME_COLUMN_LENGTH = 100


class User(AuditableEntity):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(USERNAME_COLUMN_LENGTH))
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    last_login_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # リレーションシップ（子の記事を連鎖削除・NULL化しない）
    articles: Mapped[List["Article"]] = relationship(
        "Article",
        back_populates="created_by",
        passive_deletes="all",
    )
