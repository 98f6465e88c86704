"""
Authentication endpoints
"""
from typing import Annotated

from fastapi import APIRouter, HTTPException, status, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm

from chaifi.config import ACCESS_TOKEN_EXPIRE_MINUTES, LANG, LOGIN_RATE_LIMIT
from chaifi.core.dependencies import DbDependency, CurrentUser
from chaifi.core.i18n_logger import get_i18n_logger
from chaifi.core.security import authenticate_user, create_access_token, limiter
from chaifi.schemas.user import Token, UserResponse

logger = get_i18n_logger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post(
    "/token",
    response_model=Token,
    summary="Login to get access token",
    description="Authenticate with username and password to receive a JWT token"
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: DbDependency,
    request: Request
):
    logger.info(
        "auth.login.attempt",
        language=LANG,
        username=form_data.username,
        ip_address=request.client.host if request.client else "unknown"
    )

    user = await authenticate_user(db, form_data.username, form_data.password)
    if user is None:
        logger.warning(
            "auth.login.failed",
            language=LANG,
            username=form_data.username,
            reason="Invalid credentials"
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(data={"sub": user.username, "role": user.role.value})

    logger.info("auth.login.success", language=LANG, username=user.username, role=user.role.value)

    return Token(access_token=access_token, expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user profile"
)
async def get_current_user_info(current_user: CurrentUser):
    return current_user
