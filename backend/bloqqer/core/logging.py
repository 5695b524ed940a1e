import logging
import os
import sys
from typing import Any, MutableMapping

from fastapi import Request

from bloqqer.core.config import settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s"

ROOT_LOGGER_NAME = "bloqqer"


class RequestIdFilter(logging.Filter):
    """リクエストIDを持たないレコードにデフォルト値を設定する"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True


class RequestLoggerAdapter(logging.LoggerAdapter):
    """リクエストIDをすべてのログレコードに付与するアダプター"""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]):
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("request_id", self.extra["request_id"])
        kwargs["extra"] = extra
        return msg, kwargs


def _configure_root_logger() -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(settings.LOG_LEVEL.upper())
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(RequestIdFilter())
    logger.addHandler(console_handler)

    # ファイル出力が有効な場合のみファイルハンドラーを追加
    if settings.LOG_TO_FILE:
        log_dir = os.path.dirname(settings.LOG_FILE_PATH)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        file_handler = logging.FileHandler(settings.LOG_FILE_PATH, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.addFilter(RequestIdFilter())
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """モジュール用のロガーを取得"""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def get_request_logger(request: Request) -> RequestLoggerAdapter:
    """リクエストIDを付与したロガーを取得"""
    request_id = getattr(request.state, "request_id", "-")
    return RequestLoggerAdapter(logging.getLogger(f"{ROOT_LOGGER_NAME}.request"), {"request_id": request_id})


app_logger = _configure_root_logger()
