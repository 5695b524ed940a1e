from datetime import datetime, timedelta, UTC
from typing import Any, Dict, Optional
from uuid import UUID

from jose import jwt, JWTError

from bloqqer.core.config import settings
from bloqqer.core.exceptions import InvalidTokenError


USER_ID_CLAIM = "userid"


def create_access_token(
        user_id: UUID,
        username: str,
        email: str,
        expires_delta: Optional[timedelta] = None
        ) -> str:
    """
    共有秘密鍵でアクセストークンを作成する関数

    Args:
        user_id: トークンの所有者となるユーザーID
        username: ユーザー名
        email: メールアドレス
        expires_delta: トークンの有効期限（指定がない場合は設定値を使用）

    Returns:
        str: 生成されたJWTトークン
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)

    to_encode = {
        USER_ID_CLAIM: str(user_id),
        "username": username,
        "email": email,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    JWTトークンを検証し、ペイロードを返す関数

    署名・有効期限・発行者・対象者を検証する。

    Raises:
        InvalidTokenError: トークンが無効な場合
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e


def get_user_id_from_token(token: str) -> UUID:
    """トークンの userid クレームからユーザーIDを取り出す"""
    payload = decode_access_token(token)

    user_id = payload.get(USER_ID_CLAIM)
    if user_id is None:
        raise InvalidTokenError(f"クレーム '{USER_ID_CLAIM}' がありません")

    try:
        return UUID(str(user_id))
    except ValueError as e:
        raise InvalidTokenError(f"クレーム '{USER_ID_CLAIM}' の形式が不正です") from e
