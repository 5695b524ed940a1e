"""
保存時インターセプター

フラッシュのたびに保留中の変更を走査し、AuditableEntity に対して
監査タイムスタンプの付与と論理削除への書き換えを行う。

- 追加: created_at / modified_at を設定し、構築時に is_deleted が True なら deleted_at も設定
- 更新: modified_at を更新（created_at は変更しない）
- 削除: 物理削除を取り消し、is_deleted / deleted_at / modified_at を設定する更新に変換

1回のフラッシュで扱うすべてのエンティティには同一の時刻が設定される。
"""
from datetime import datetime
from typing import Callable, Type

from sqlalchemy import event
from sqlalchemy.orm import Session

from bloqqer.core.logging import get_logger
from bloqqer.db.base import AuditableEntity, utcnow


logger = get_logger(__name__)


def _convert_deletes(session: Session, now: datetime) -> int:
    count = 0
    for entity in list(session.deleted):
        if not isinstance(entity, AuditableEntity):
            continue
        # add() で削除予定から外し、UPDATEとしてフラッシュさせる
        session.add(entity)
        entity.is_deleted = True
        entity.deleted_at = now
        entity.modified_at = now
        count += 1
    return count


def _stamp_inserts(session: Session, now: datetime) -> None:
    for entity in session.new:
        if not isinstance(entity, AuditableEntity):
            continue
        entity.is_deleted = bool(entity.is_deleted)
        entity.created_at = now
        entity.modified_at = now
        entity.deleted_at = now if entity.is_deleted else None


def _stamp_updates(session: Session, now: datetime) -> None:
    for entity in session.dirty:
        if not isinstance(entity, AuditableEntity):
            continue
        if not session.is_modified(entity, include_collections=False):
            continue
        entity.modified_at = now
        if entity.is_deleted and entity.deleted_at is None:
            entity.deleted_at = now
        elif not entity.is_deleted and entity.deleted_at is not None:
            entity.deleted_at = None


def apply_audit_policy(session: Session, now: datetime) -> None:
    """保留中の変更に監査ポリシーを適用する"""
    soft_deleted = _convert_deletes(session, now)
    _stamp_inserts(session, now)
    _stamp_updates(session, now)
    if soft_deleted:
        logger.debug(f"Converted {soft_deleted} delete(s) into soft deletes")


def install_save_interceptor(
        session_class: Type[Session],
        clock: Callable[[], datetime] = utcnow
        ) -> None:
    """セッションクラスに before_flush リスナーを登録する"""

    @event.listens_for(session_class, "before_flush")
    def _before_flush(session, flush_context, instances):
        apply_audit_policy(session, clock())
