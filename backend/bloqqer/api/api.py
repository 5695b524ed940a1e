from fastapi import APIRouter

from bloqqer.api.endpoints import articles, auth, users

api_router = APIRouter()

# 各エンドポイントのルーターを登録
api_router.include_router(auth.router, prefix="/auth", tags=["認証"])
api_router.include_router(users.router, prefix="/user", tags=["ユーザー"])
api_router.include_router(articles.router, prefix="/article", tags=["記事"])
