from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bloqqer.core.logging import get_request_logger
from bloqqer.db.session import get_async_session
from bloqqer.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    RegistrationConfirmationRequest,
    RegistrationConfirmationResponse,
    User as UserSchema
)
from bloqqer.services.auth import auth_service
from bloqqer.services.mail import email_service


router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    login_in: LoginRequest,
    db: AsyncSession = Depends(get_async_session)
):
    """メールアドレスでログインしてJWTを取得"""
    logger = get_request_logger(request)
    logger.info("ログインリクエスト")

    result = await auth_service.login(db, email=login_in.email, password=login_in.password)

    logger.info(f"ログイン成功: ユーザーID={result.user.id}")
    return LoginResponse(jwt=result.jwt, user=UserSchema.model_validate(result.user))


@router.post("/register", response_model=RegisterResponse)
async def register(
    request: Request,
    register_in: RegisterRequest,
    db: AsyncSession = Depends(get_async_session)
):
    """登録を受け付け、確認メールを送信"""
    logger = get_request_logger(request)
    logger.info("ユーザー登録リクエスト")

    confirmation_code = await auth_service.register(db, email=register_in.email)
    await email_service.send_registration_confirmation(register_in.email, confirmation_code)

    return RegisterResponse(message=f"確認メールを {register_in.email} に送信しました")


@router.post("/register/confirm", response_model=RegistrationConfirmationResponse)
async def confirm_registration(
    request: Request,
    confirmation_in: RegistrationConfirmationRequest,
    db: AsyncSession = Depends(get_async_session)
):
    """確認コードを検証してユーザー登録を完了"""
    logger = get_request_logger(request)
    logger.info("ユーザー登録確認リクエスト")

    user = await auth_service.confirm_registration(
        db,
        confirmation_code=confirmation_in.confirmation_code,
        username=confirmation_in.username,
        password=confirmation_in.password
    )

    logger.info(f"ユーザー登録成功: ユーザーID={user.id}")
    return RegistrationConfirmationResponse(user_id=user.id, username=user.username, email=user.email)
