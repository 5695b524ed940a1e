from typing import Any, Dict, Optional


class BloqqerException(Exception):
    """Bloqqerアプリケーションの基底例外クラス"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.details = details or {}
        self.error_code = error_code
        super().__init__(self.message)


class ValidationError(BloqqerException):
    """バリデーションエラー"""
    pass


class NotFoundError(BloqqerException):
    """リソースが見つからないエラー"""
    pass


class UnauthorizedError(BloqqerException):
    """認証・認可エラー"""
    pass


# 具体的な例外クラス
class UserNotFoundError(NotFoundError):
    """ユーザーが見つからないエラー"""

    def __init__(self, user_id: Optional[Any] = None, email: Optional[str] = None):
        if user_id:
            message = f"ユーザーID '{user_id}' が見つかりません"
            details = {"user_id": str(user_id)}
        elif email:
            message = f"メールアドレス '{email}' のユーザーが見つかりません"
            details = {"email": email}
        else:
            message = "ユーザーが見つかりません"
            details = {}

        super().__init__(message=message, details=details, error_code="USER_NOT_FOUND")


class ArticleNotFoundError(NotFoundError):
    """記事が見つからないエラー"""

    def __init__(self, article_id: Optional[Any] = None):
        if article_id:
            message = f"記事ID '{article_id}' が見つかりません"
            details = {"article_id": str(article_id)}
        else:
            message = "記事が見つかりません"
            details = {}

        super().__init__(message=message, details=details, error_code="ARTICLE_NOT_FOUND")


class EmailAlreadyTakenError(ValidationError):
    """メールアドレス重複エラー"""

    def __init__(self, email: str):
        message = f"メールアドレス '{email}' は既に使用されています"
        details = {"email": email}
        super().__init__(message=message, details=details, error_code="EMAIL_ALREADY_TAKEN")


class InvalidConfirmationCodeError(ValidationError):
    """無効な登録確認コードエラー"""

    def __init__(self):
        super().__init__(message="確認コードが無効です", error_code="INVALID_CONFIRMATION_CODE")


class ExpiredConfirmationCodeError(ValidationError):
    """期限切れの登録確認コードエラー"""

    def __init__(self):
        super().__init__(message="確認コードの有効期限が切れています", error_code="EXPIRED_CONFIRMATION_CODE")


class UserHasArticlesError(ValidationError):
    """記事を所有するユーザーの削除エラー"""

    def __init__(self, user_id: Any):
        message = f"ユーザーID '{user_id}' は記事を所有しているため削除できません"
        details = {"user_id": str(user_id)}
        super().__init__(message=message, details=details, error_code="USER_HAS_ARTICLES")


class ArticleOwnershipError(UnauthorizedError):
    """記事の作成者以外による操作エラー"""

    def __init__(self, action: str):
        message = f"記事を{action}できるのは作成者のみです"
        details = {"action": action}
        super().__init__(message=message, details=details, error_code="ARTICLE_OWNERSHIP")


class UserOwnershipError(UnauthorizedError):
    """本人以外によるユーザー操作エラー"""

    def __init__(self, action: str):
        message = f"ユーザー情報を{action}できるのは本人のみです"
        details = {"action": action}
        super().__init__(message=message, details=details, error_code="USER_OWNERSHIP")


class InvalidCredentialsError(UnauthorizedError):
    """認証情報が無効なエラー"""

    def __init__(self):
        super().__init__(message="メールアドレスまたはパスワードが正しくありません", error_code="INVALID_CREDENTIALS")


class InvalidTokenError(UnauthorizedError):
    """無効なトークンエラー"""

    def __init__(self, reason: Optional[str] = None):
        message = "無効なトークンです"
        details = {"reason": reason} if reason else {}
        super().__init__(message=message, details=details, error_code="INVALID_TOKEN")
