from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional
from uuid import UUID


# Article関連のスキーマ
class ArticleCreate(BaseModel):
    content: str

class ArticleUpdate(BaseModel):
    content: str

class Article(BaseModel):
    id: UUID
    content: str
    created_by_id: UUID
    is_deleted: bool
    created_at: datetime
    modified_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
