from pydantic import BaseModel
from uuid import UUID

from .user import User


class LoginRequest(BaseModel):
    email: str
    password: str

class LoginResponse(BaseModel):
    jwt: str
    token_type: str = "bearer"
    user: User

class RegisterRequest(BaseModel):
    email: str

class RegisterResponse(BaseModel):
    message: str

class RegistrationConfirmationRequest(BaseModel):
    confirmation_code: str
    username: str
    password: str

class RegistrationConfirmationResponse(BaseModel):
    user_id: UUID
    username: str
    email: str
