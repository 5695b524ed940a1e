from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional
from uuid import UUID


# User関連のスキーマ
class UserCreate(BaseModel):
    username: str
    email: str

class UserUpdate(BaseModel):
    username: str

class User(BaseModel):
    id: UUID
    username: str
    email: str
    last_login_at: Optional[datetime] = None
    created_at: datetime
    modified_at: datetime

    model_config = ConfigDict(from_attributes=True)
