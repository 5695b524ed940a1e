# モデルのインポート
from bloqqer.models.user import User
from bloqqer.models.article import Article
from bloqqer.models.pending_registration import PendingRegistration

# すべてのモデルをエクスポート
__all__ = [
    "User",
    "Article",
    "PendingRegistration"
]
