from contextlib import asynccontextmanager
import time
import uuid

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bloqqer.api.api import api_router
from bloqqer.core.config import settings
from bloqqer.core.exceptions import BloqqerException, NotFoundError, UnauthorizedError, ValidationError
from bloqqer.core.logging import app_logger, get_request_logger
from bloqqer.db.session import async_engine, create_tables
from bloqqer.schemas import ProblemDetails


@asynccontextmanager
async def lifespan(app: FastAPI):
    """アプリケーションのライフサイクルを管理"""
    # 起動の処理
    try:
        await create_tables(async_engine)
    except Exception as e:
        app_logger.error(f"Initialization failed: {str(e)}")
        raise

    yield  # アプリケーションの実行中

    # シャットダウンの処理
    app_logger.info("Shutting down application...")
    await async_engine.dispose()


# FastAPIアプリケーションの作成
app = FastAPI(
    title=settings.APP_NAME,
    description="記事投稿システムAPI",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# CORSミドルウェアの設定
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


def problem_response(status_code: int, title: str, error_type: str, detail: str, headers=None) -> JSONResponse:
    """エラーレスポンスを作成"""
    problem = ProblemDetails(status=status_code, title=title, type=error_type, detail=detail)
    return JSONResponse(status_code=status_code, content=problem.model_dump(), headers=headers)


# リクエストIDとロギングミドルウェア
@app.middleware("http")
async def request_middleware(request: Request, call_next):
    # リクエストIDを生成（予期しないエラーの相関IDとしても使用）
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    # リクエストロガーの取得
    logger = get_request_logger(request)

    # リクエスト情報のロギング
    logger.info(
        f"Request started: {request.method} {request.url.path} "
        f"(Client: {request.client.host if request.client else 'unknown'})"
    )

    # 処理時間の計測
    start_time = time.time()

    try:
        # リクエスト処理
        response = await call_next(request)
    except Exception as e:
        # 予期しない例外は内容を返さず、相関IDのみをクライアントに返す
        process_time = time.time() - start_time
        logger.error(
            f"Request failed: {request.method} {request.url.path} "
            f"Error: {str(e)} Error id: {request_id} "
            f"Process time: {process_time:.3f}s",
            exc_info=True
        )
        response = problem_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
            type(e).__name__,
            f"予期しないエラーが発生しました。エラーID: {request_id}",
        )
        response.headers["X-Request-ID"] = request_id
        return response

    process_time = time.time() - start_time

    # レスポンスヘッダーの設定
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = str(process_time)

    # レスポンス情報のロギング
    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Process time: {process_time:.3f}s"
    )

    return response


# カスタム例外ハンドラー
@app.exception_handler(BloqqerException)
async def bloqqer_exception_handler(request: Request, exc: BloqqerException):
    logger = get_request_logger(request)
    error_type = type(exc).__name__

    if isinstance(exc, UnauthorizedError):
        logger.warning(f"Unauthorized: {exc.message}")
        return problem_response(
            status.HTTP_401_UNAUTHORIZED, "Unauthorized", error_type, exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(exc, ValidationError):
        logger.warning(f"Validation error: {exc.message}")
        return problem_response(status.HTTP_400_BAD_REQUEST, "Bad request", error_type, exc.message)
    if isinstance(exc, NotFoundError):
        logger.info(f"Not found: {exc.message}")
        return problem_response(status.HTTP_404_NOT_FOUND, "Not Found", error_type, exc.message)

    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    logger.error(f"Unhandled application error: {exc.message} Error id: {request_id}", exc_info=exc)
    return problem_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
        error_type,
        f"予期しないエラーが発生しました。エラーID: {request_id}",
    )


# バリデーションエラーハンドラー
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger = get_request_logger(request)

    messages = [
        f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]

    logger.warning(f"Validation error: {request.method} {request.url.path} Errors: {messages}")

    return problem_response(
        status.HTTP_400_BAD_REQUEST, "Bad request", "RequestValidationError", "\n".join(messages)
    )


# APIルーターの登録
app.include_router(api_router, prefix="/api")

# ルートエンドポイント
@app.get("/")
async def root():
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs_url": "/docs"
    }

# ヘルスチェックエンドポイント
@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    # アプリケーション起動時のログ
    app_logger.info(
        f"Starting {settings.APP_NAME} in {settings.ENVIRONMENT} mode "
        f"(Log level: {settings.LOG_LEVEL})"
    )

    uvicorn.run(app, host="0.0.0.0", port=8000)
