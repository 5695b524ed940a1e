# User schemas
from .user import (
    UserCreate,
    UserUpdate,
    User
)

# Article schemas
from .article import (
    ArticleCreate,
    ArticleUpdate,
    Article
)

# Auth schemas
from .auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    RegistrationConfirmationRequest,
    RegistrationConfirmationResponse
)

# Error schemas
from .error import ProblemDetails

__all__ = [
    # User schemas
    "UserCreate",
    "UserUpdate",
    "User",

    # Article schemas
    "ArticleCreate",
    "ArticleUpdate",
    "Article",

    # Auth schemas
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "RegistrationConfirmationRequest",
    "RegistrationConfirmationResponse",

    # Error schemas
    "ProblemDetails"
]
