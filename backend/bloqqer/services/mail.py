from urllib.parse import urlencode

from bloqqer.core.config import settings
from bloqqer.core.logging import get_logger


class EmailService:
    """メール送信（送信処理の代わりに確認リンクをログに出力する）"""
    logger = get_logger(__name__)

    def build_confirmation_link(self, confirmation_code: str) -> str:
        """登録確認用のリンクを生成"""
        return f"{settings.REGISTRATION_CONFIRMATION_URL}?{urlencode({'code': confirmation_code})}"

    async def send_registration_confirmation(self, email: str, confirmation_code: str) -> None:
        """登録確認メールを送信"""
        link = self.build_confirmation_link(confirmation_code)
        self.logger.info(f"Registration confirmation for {email}: {link}")


# シングルトンインスタンス
email_service = EmailService()
