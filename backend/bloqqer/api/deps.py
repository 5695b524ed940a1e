from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
from uuid import UUID

from bloqqer.core.exceptions import InvalidTokenError
from bloqqer.core.logging import get_request_logger
from bloqqer.core.security import get_user_id_from_token

# セキュリティ設定（未認証時の応答は例外ハンドラーで401に統一する）
security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> UUID:
    """JWTの userid クレームから現在のユーザーIDを取得する依存性"""
    if credentials is None:
        raise InvalidTokenError("Authorizationヘッダーがありません")

    try:
        return get_user_id_from_token(credentials.credentials)
    except InvalidTokenError as e:
        get_request_logger(request).warning(f"トークン検証失敗: {e.details.get('reason')}")
        raise
