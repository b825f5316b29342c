"""
Registration and login endpoints.

Both routes are public.  Invalid payloads are answered with 422, which
differs from the 400 used by the post and comment routes.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from blog_api.app.core.exceptions import (
    BlogAPIError,
    InvalidCredentialsError,
    NotAuthorizedError,
    StoreError,
    ValidationFailedError,
)
from blog_api.app.core.security import CredentialService, get_credentials
from blog_api.app.schemas.user import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from blog_api.app.schemas.validation import InvalidResult, json_payload, validate
from blog_api.app.services.user_service import UserService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, summary="Register a user")
async def register(
    payload: Any = Depends(json_payload),
    credentials: CredentialService = Depends(get_credentials),
) -> RegisterResponse:
    """Create a user and return its id.

    The password is hashed before it reaches the store.  A duplicate
    username or e‑mail is answered with 409.
    """
    result = validate(payload, RegisterRequest)
    if isinstance(result, InvalidResult):
        logger.info("Registration payload rejected: %s", result.issues)
        raise ValidationFailedError("Incorrect input", status_code=422)
    data = result.data
    password_hash = credentials.hash_password(data.password)
    user = await UserService.create_user(data.username, data.email, password_hash)
    return RegisterResponse(message="Registration successful", userId=user.id)


@router.post("/login", response_model=LoginResponse, summary="Log in and obtain a token")
async def login(
    payload: Any = Depends(json_payload),
    credentials: CredentialService = Depends(get_credentials),
) -> LoginResponse:
    """Authenticate by username or e‑mail and return a signed token.

    Exactly one lookup is made: by username when it is present,
    otherwise by e‑mail.
    """
    result = validate(payload, LoginRequest)
    if isinstance(result, InvalidResult):
        logger.info("Login payload rejected: %s", result.issues)
        raise ValidationFailedError("Invalid input", status_code=422)
    data = result.data
    try:
        if data.username is not None:
            user = await UserService.get_by_username(data.username)
        else:
            user = await UserService.get_by_email(data.email)
    except BlogAPIError:
        raise
    except Exception as e:
        logger.exception("User lookup failed during login")
        raise StoreError("Unable to log in") from e
    if user is None:
        raise NotAuthorizedError()
    if not credentials.verify_password(data.password, user.password_hash):
        logger.info("Wrong password for user %s", user.id)
        raise InvalidCredentialsError()
    token = credentials.issue_token(user.id)
    logger.info("User %s logged in", user.id)
    return LoginResponse(message="Login successful", token=token)
