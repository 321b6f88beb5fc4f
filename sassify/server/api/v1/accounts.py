"""
Account Endpoints.

Registration, login, and e-mail address verification. Registering logs the
new user in straight away; verification is confirmed through a signed link
sent by e-mail.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from sassify.core.database.entities.users import User
from sassify.core.database.repositories.bundle import SqlRepoBundle
from sassify.core.logging_config import get_logger
from sassify.core.models.io.users import (
    LoginRequest,
    MessageResponse,
    RegistrationResponse,
    TokenResponse,
    UserRead,
    UserRegister,
)
from sassify.core.security import (
    VERIFICATION_TOKEN_TYPE,
    TokenError,
    create_access_token,
    create_verification_token,
    decode_token,
    hash_password,
    verify_password,
)
from sassify.server.services.auth import get_current_user
from sassify.server.services.deps import get_mailer, get_repos
from sassify.server.services.mailer import Mailer

logger = get_logger(__name__)

router = APIRouter(tags=["accounts"])

INVALID_TOKEN_MESSAGE = "The token is invalid or has expired"


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create an account, send the activation e-mail, and log the new user in.",
    response_description="The created user and an access token.",
    responses={
        201: {"description": "Account created"},
        409: {"description": "E-mail already registered"},
        422: {"description": "Invalid e-mail or password shorter than 6 characters"},
    },
)
async def register(
    data: UserRegister,
    repos: SqlRepoBundle = Depends(get_repos),
    mailer: Mailer = Depends(get_mailer),
) -> RegistrationResponse:
    if await repos.users.get_by_email(data.email) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="An account already exists with this e-mail")

    user = User(
        email=data.email,
        roles=[],
        password_hash=hash_password(data.password),
        **data.model_dump(exclude={"email", "password"}),
    )
    user = await repos.users.create(user)
    logger.info("User %s registered", user.id)

    token = create_verification_token(user.id)
    sent = await mailer.send_verification_email(user, token)

    return RegistrationResponse(
        user=UserRead.model_validate(user),
        access_token=create_access_token(user.id, user.get_roles()),
        verification_sent=sent,
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log In",
    description="Exchange an e-mail and password for a bearer access token.",
    response_description="The access token.",
    responses={401: {"description": "Invalid credentials"}},
)
async def login(data: LoginRequest, repos: SqlRepoBundle = Depends(get_repos)) -> TokenResponse:
    user = await repos.users.get_by_email(data.email)
    if user is None or not verify_password(data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(access_token=create_access_token(user.id, user.get_roles()))


@router.get(
    "/verify/{token}",
    response_model=MessageResponse,
    summary="Verify E-mail Address",
    description="Activate the account identified by a verification token.",
    response_description="Confirmation message.",
    responses={400: {"description": "The token is invalid, expired, or the account is already active"}},
)
async def verify_user(token: str, repos: SqlRepoBundle = Depends(get_repos)) -> MessageResponse:
    try:
        claims = decode_token(token, VERIFICATION_TOKEN_TYPE)
        user_id = int(claims["user_id"])
    except (TokenError, KeyError, TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_TOKEN_MESSAGE)

    user = await repos.users.get_by_id(user_id)
    if user is None or user.is_verified:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_TOKEN_MESSAGE)

    user.is_verified = True
    await repos.users.update(user)
    logger.info("User %s verified", user.id)
    return MessageResponse(message="Account activated")


@router.post(
    "/resend-verification",
    response_model=MessageResponse,
    summary="Resend Verification E-mail",
    description="Send a new activation e-mail to the logged-in user.",
    response_description="Confirmation message.",
    responses={
        400: {"description": "Account already verified"},
        401: {"description": "Not authenticated"},
        503: {"description": "The e-mail could not be sent"},
    },
)
async def resend_verification(
    user: User = Depends(get_current_user),
    mailer: Mailer = Depends(get_mailer),
) -> MessageResponse:
    if user.is_verified:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="This account is already verified")

    sent = await mailer.send_verification_email(user, create_verification_token(user.id))
    if not sent:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="The verification e-mail could not be sent"
        )
    return MessageResponse(message="Verification e-mail sent")
