from datetime import timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from typing import NamedTuple

from bloqqer.core.config import settings
from bloqqer.core.exceptions import (
    EmailAlreadyTakenError,
    ExpiredConfirmationCodeError,
    InvalidConfirmationCodeError,
    InvalidCredentialsError
)
from bloqqer.core.logging import get_logger
from bloqqer.core.security import create_access_token
from bloqqer.db.base import utcnow
from bloqqer.models import User
from bloqqer.services.registration import registration_service
from bloqqer.services.rules import EmailRule, LoginRule, normalize_email, validate
from bloqqer.services.user import user_service


class LoginResult(NamedTuple):
    user: User
    jwt: str


class AuthService:
    """
    認証関連の操作

    パスワードは入力として必須だが、照合・保存は行わない。
    """
    logger = get_logger(__name__)

    async def login(self, db: AsyncSession, email: str, password: str) -> LoginResult:
        """メールアドレスでログインし、JWTを発行する（未登録のメールアドレスは認証エラー）"""
        validate(LoginRule, email=email, password=password)

        user = await user_service.get_by_email_optional(db, email)
        if user is None:
            self.logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError()

        user.last_login_at = utcnow()
        await db.flush()

        jwt = create_access_token(user_id=user.id, username=user.username, email=user.email)
        self.logger.info(f"User {user.id} logged in")
        return LoginResult(user=user, jwt=jwt)

    async def register(self, db: AsyncSession, email: str) -> str:
        """登録を受け付け、確認コードを返す"""
        email = normalize_email(validate(EmailRule, email=email).email)

        if await user_service.is_email_taken(db, email):
            raise EmailAlreadyTakenError(email)

        expires_at = utcnow() + timedelta(hours=settings.REGISTRATION_CONFIRMATION_EXPIRE_HOURS)
        registration = await registration_service.create(db, email=email, expires_at=expires_at)
        return registration.confirmation_code

    async def confirm_registration(
        self,
        db: AsyncSession,
        confirmation_code: str,
        username: str,
        password: str
    ) -> User:
        """確認コードを検証してユーザーを作成する"""
        registration = await registration_service.get_by_code(db, confirmation_code)
        if registration is None:
            self.logger.warning("Registration confirmation with unknown or used code")
            raise InvalidConfirmationCodeError()

        if registration.expires_at <= utcnow():
            self.logger.warning(f"Pending registration {registration.id} has expired")
            raise ExpiredConfirmationCodeError()

        if await user_service.is_email_taken(db, registration.email):
            raise EmailAlreadyTakenError(registration.email)

        user = await user_service.create(db, username=username, email=registration.email)
        await registration_service.consume(db, registration)

        self.logger.info(f"Registration confirmed: user {user.id}")
        return user


# シングルトンインスタンス
auth_service = AuthService()
