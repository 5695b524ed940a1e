from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from bloqqer.api.deps import get_current_user_id
from bloqqer.core.logging import get_request_logger
from bloqqer.db.session import get_async_session
from bloqqer.schemas import User as UserSchema, UserCreate, UserUpdate
from bloqqer.services.user import user_service

router = APIRouter(dependencies=[Depends(get_current_user_id)])


@router.post("", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: Request,
    user_in: UserCreate,
    db: AsyncSession = Depends(get_async_session)
):
    """新しいユーザーを作成"""
    logger = get_request_logger(request)
    logger.info("ユーザー作成リクエスト")

    db_user = await user_service.create(db, username=user_in.username, email=user_in.email)
    logger.info(f"ユーザー作成成功: ユーザーID={db_user.id}")
    return db_user


@router.get("/me", response_model=UserSchema)
async def read_current_user(
    request: Request,
    current_user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session)
):
    """現在のユーザー情報を取得"""
    logger = get_request_logger(request)
    logger.info(f"ユーザー情報取得リクエスト: ユーザーID={current_user_id}")

    return await user_service.get_by_id(db, current_user_id)


@router.get("/id/{user_id}", response_model=UserSchema)
async def read_user_by_id(
    request: Request,
    user_id: UUID,
    db: AsyncSession = Depends(get_async_session)
):
    """IDでユーザーを取得"""
    logger = get_request_logger(request)
    logger.info(f"ユーザー詳細取得リクエスト: user_id={user_id}")

    return await user_service.get_by_id(db, user_id)


@router.get("/email/{email}", response_model=UserSchema)
async def read_user_by_email(
    request: Request,
    email: str,
    db: AsyncSession = Depends(get_async_session)
):
    """メールアドレスでユーザーを取得"""
    logger = get_request_logger(request)
    logger.debug(f"ユーザー詳細取得リクエスト: email={email}")

    return await user_service.get_by_email(db, email)


@router.put("/{user_id}", response_model=UserSchema)
async def update_user(
    request: Request,
    user_id: UUID,
    user_in: UserUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session)
):
    """ユーザー名を更新（本人のみ）"""
    logger = get_request_logger(request)
    logger.info(f"ユーザー更新リクエスト: user_id={user_id}, 更新者={current_user_id}")

    db_user = await user_service.update(
        db, user_id=user_id, username=user_in.username, requestor_id=current_user_id
    )
    logger.info(f"ユーザー更新成功: user_id={user_id}")
    return db_user
