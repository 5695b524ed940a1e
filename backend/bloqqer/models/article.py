import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bloqqer.db.base import AuditableEntity

if TYPE_CHECKING:
    from bloqqer.models.user import User


MAX_CONTENT_LENGTH = 1000


class Article(AuditableEntity):
    __tablename__ = "articles"

    # 作成者（作成後は変更しない）。記事を持つユーザーの削除は制限される
    created_by_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), index=True
    )
    content: Mapped[str] = mapped_column(String(MAX_CONTENT_LENGTH))

    # リレーションシップ
    created_by: Mapped["User"] = relationship("User", back_populates="articles")
