"""Registration and login. Both return a JWT for the Authorization header."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from remix.api.deps import get_credential_verifier, get_user_repository
from remix.core.security import CredentialVerifier
from remix.repositories import UserRepository
from remix.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserInfo,
)

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    users: Annotated[UserRepository, Depends(get_user_repository)],
    credentials: Annotated[CredentialVerifier, Depends(get_credential_verifier)],
) -> RegisterResponse:
    """
    Create an account and log it in.
    Username 5-30 chars, password 8+ chars and at most 72 bytes; a taken username is a 400.
    """
    user = users.register_new_user(body.username.strip(), body.email.strip(), body.password)
    token = credentials.issue_token(user["id"], user["username"], user["email"])
    return RegisterResponse(
        newUserInfo=UserInfo(username=user["username"], email=user["email"]),
        token=token,
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    users: Annotated[UserRepository, Depends(get_user_repository)],
    credentials: Annotated[CredentialVerifier, Depends(get_credential_verifier)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = users.authenticate_user(body.username, body.password)
    token = credentials.issue_token(user["id"], user["username"], user["email"])
    return LoginResponse(
        userInfo=UserInfo(username=user["username"], email=user["email"]),
        token=token,
    )
