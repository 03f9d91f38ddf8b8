import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from task_api.dependencies import get_db, get_token_service
from task_api.errors import AuthInvalid, DuplicateUsername
from task_api.schemas.user import (
    AuthResponse, MessageResponse, Token, TokenClaims, TokenRequest, UserCredentials, VerifyResponse,
)
from task_api.services import users as user_service
from task_api.services.tokens import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
async def signup(
    credentials: UserCredentials,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    if await user_service.is_username_taken(db, credentials.username):
        logger.warning("Username '%s' already exists", credentials.username)
        raise DuplicateUsername()

    try:
        user = await user_service.create_user(db, credentials.username, credentials.password)
    except DuplicateUsername:
        logger.warning("Username '%s' already exists", credentials.username)
        raise

    token = tokens.issue(user.user_id, user.username)
    logger.info("User '%s' successfully registered", user.username)
    return {"message": "Successfully Registered", "token": token}


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
async def login(
    credentials: UserCredentials,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user = await user_service.authenticate_user(db, credentials.username, credentials.password)
    if not user:
        logger.warning("Invalid credentials for user '%s'", credentials.username)
        raise AuthInvalid("Bad Credentials")

    token = tokens.issue(user.user_id, user.username)
    logger.info("User '%s' logged in successfully", user.username)
    return {"message": "Login Successful", "token": token}


@router.post("/token", response_model=Token)
async def login_for_access_token(
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    form_data: OAuth2PasswordRequestForm = Depends(),
):
    """OAuth2 password flow, so the interactive docs can authorize requests."""
    user = await user_service.authenticate_user(db, form_data.username, form_data.password)
    if not user:
        logger.warning("Invalid credentials for user '%s'", form_data.username)
        raise AuthInvalid("Incorrect username or password")

    return {"access_token": tokens.issue(user.user_id, user.username), "token_type": "bearer"}


@router.post(
    "/auth",
    response_model=VerifyResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": VerifyResponse}},
    openapi_extra={
        "requestBody": {"content": {"application/json": {"schema": TokenRequest.model_json_schema()}}},
    },
)
async def verify_token(request: Request, tokens: TokenService = Depends(get_token_service)):
    # Read the body by hand: an unparseable body or a non-string token is
    # an invalid token, not a request validation error
    try:
        body = await request.json()
    except ValueError:
        body = None
    token = body.get("token") if isinstance(body, dict) else None

    claims = tokens.verify(token)
    if claims is None:
        logger.warning("Invalid token")
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"user": None, "valid": False},
        )

    logger.info("Token validated successfully")
    return {"user": TokenClaims.model_validate(claims), "valid": True}
