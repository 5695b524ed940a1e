"""
サービス層の入力ルール

各ルールは pydantic モデルとして定義し、違反した場合は
アプリケーションの ValidationError に変換して送出する。

メールアドレスはログインキーのため大文字・小文字を区別しない。
保存・一意性チェック・検索はすべて normalize_email を通した値で行う。
"""
from typing import Type, TypeVar

import pydantic
from pydantic import BaseModel, EmailStr, Field, field_validator

from bloqqer.core.exceptions import ValidationError
from bloqqer.models.article import MAX_CONTENT_LENGTH


MIN_USERNAME_LENGTH = 5
MAX_USERNAME_LENGTH = 50

RuleT = TypeVar("RuleT", bound=BaseModel)


def _not_blank(value: str, field_label: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field_label}が必要です")
    return value


class ArticleContentRule(BaseModel):
    content: str = Field(max_length=MAX_CONTENT_LENGTH)

    @field_validator("content")
    @classmethod
    def content_required(cls, v):
        return _not_blank(v, "コンテンツ")


class UsernameRule(BaseModel):
    username: str

    @field_validator("username")
    @classmethod
    def username_length(cls, v):
        _not_blank(v, "ユーザー名")
        if not MIN_USERNAME_LENGTH <= len(v) <= MAX_USERNAME_LENGTH:
            raise ValueError(
                f"ユーザー名は{MIN_USERNAME_LENGTH}文字以上{MAX_USERNAME_LENGTH}文字以下である必要があります"
            )
        return v


def normalize_email(email: str) -> str:
    """比較・保存用のメールアドレス（前後の空白を除き小文字化）"""
    return email.strip().lower()


class EmailRule(BaseModel):
    email: EmailStr


class UserCreateRule(UsernameRule, EmailRule):
    pass


class LoginRule(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def email_required(cls, v):
        return _not_blank(v, "メールアドレス")

    @field_validator("password")
    @classmethod
    def password_required(cls, v):
        return _not_blank(v, "パスワード")


def validate(rule: Type[RuleT], **values) -> RuleT:
    """ルールを検証し、違反があれば ValidationError を送出する"""
    try:
        return rule(**values)
    except pydantic.ValidationError as e:
        errors = [
            {"field": ".".join(str(loc) for loc in error["loc"]), "message": error["msg"]}
            for error in e.errors()
        ]
        message = "\n".join(f"{error['field']}: {error['message']}" for error in errors)
        raise ValidationError(message=message, details={"errors": errors}, error_code="VALIDATION_FAILED") from e
