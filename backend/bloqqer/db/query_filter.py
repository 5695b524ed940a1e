"""
論理削除クエリフィルター

AuditableEntity を対象とするすべてのORM SELECTに ``is_deleted = False`` の
条件を自動的に追加する。呼び出し側で条件を書き忘れることはできない。

削除済みの行も取得したい場合は、そのステートメントにだけ
``include_deleted`` 実行オプションを付与する（削除済み・未削除の両方が返る）。
オプションはステートメント単位のため、他のクエリには影響しない。
"""
from typing import Type, TypeVar

from sqlalchemy import event
from sqlalchemy.orm import ORMExecuteState, Session, with_loader_criteria
from sqlalchemy.sql import Executable

from bloqqer.db.base import AuditableEntity


INCLUDE_DELETED_OPTION = "include_deleted"

StatementT = TypeVar("StatementT", bound=Executable)


def include_deleted(statement: StatementT, enabled: bool = True) -> StatementT:
    """enabled が True の場合のみ、ステートメントの論理削除フィルターを無効化する"""
    if not enabled:
        return statement
    return statement.execution_options(**{INCLUDE_DELETED_OPTION: True})


def _should_filter(execute_state: ORMExecuteState) -> bool:
    return (
        execute_state.is_select
        and not execute_state.is_column_load
        and not execute_state.is_relationship_load
        and not execute_state.execution_options.get(INCLUDE_DELETED_OPTION, False)
    )


def install_soft_delete_filter(session_class: Type[Session]) -> None:
    """セッションクラスに do_orm_execute リスナーを登録する"""

    @event.listens_for(session_class, "do_orm_execute")
    def _exclude_soft_deleted(execute_state: ORMExecuteState):
        if not _should_filter(execute_state):
            return
        execute_state.statement = execute_state.statement.options(
            with_loader_criteria(
                AuditableEntity,
                lambda cls: cls.is_deleted == False,  # noqa: E712
                include_aliases=True,
            )
        )
