from datetime import datetime
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from bloqqer.core.logging import get_logger
from bloqqer.models import PendingRegistration


class RegistrationService:
    """登録確認待ちレコードの操作"""
    logger = get_logger(__name__)

    async def create(self, db: AsyncSession, email: str, expires_at: datetime) -> PendingRegistration:
        """新しい確認コードを発行"""
        db_obj = PendingRegistration(
            email=email,
            confirmation_code=str(uuid.uuid4()),
            expires_at=expires_at
        )
        db.add(db_obj)
        await db.flush()
        self.logger.info(f"Created pending registration {db_obj.id} (expires at {expires_at})")
        return db_obj

    async def get_by_code(self, db: AsyncSession, confirmation_code: str) -> Optional[PendingRegistration]:
        """確認コードで取得（使用済みのコードは論理削除されているため返らない）"""
        result = await db.execute(
            select(PendingRegistration).where(PendingRegistration.confirmation_code == confirmation_code)
        )
        return result.scalar_one_or_none()

    async def consume(self, db: AsyncSession, registration: PendingRegistration) -> None:
        """確認コードを使用済みにする"""
        await db.delete(registration)
        await db.flush()
        self.logger.info(f"Consumed pending registration {registration.id}")


# シングルトンインスタンス
registration_service = RegistrationService()
