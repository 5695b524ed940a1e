from pydantic import BaseModel


class ProblemDetails(BaseModel):
    """エラーレスポンスの本文"""
    status: int
    title: str
    type: str
    detail: str
