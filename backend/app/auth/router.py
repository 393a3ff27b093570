# backend/app/auth/router.py

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status

from .config import get_account_service
from .schemas import (
    AccountPublic,
    CredentialsRequest,
    LoginResponse,
    LogoutResponse,
    SignupResponse,
)
from .service import (
    AccountService,
    DuplicateEmailError,
    InvalidCredentialsError,
    SessionNotFoundError,
)
from .validators import CredentialError, parse_bearer_token

router = APIRouter(prefix="/auth", tags=["auth"])


def _require_token(authorization: Optional[str]) -> str:
    try:
        return parse_bearer_token(authorization)
    except CredentialError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="デモアカウントを作成",
)
def signup(
    body: CredentialsRequest,
    accounts: AccountService = Depends(get_account_service),
) -> SignupResponse:
    """
    メールアドレスを正規化してアカウントを登録する。

    - 登録済みメールアドレス → 400 Bad Request
    """
    try:
        account = accounts.signup(body.email, body.password)
    except DuplicateEmailError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return SignupResponse(account=account)


@router.post("/login", response_model=LoginResponse, summary="ログインしてセッショントークンを取得")
def login(
    body: CredentialsRequest,
    accounts: AccountService = Depends(get_account_service),
) -> LoginResponse:
    try:
        token, account = accounts.login(body.email, body.password)
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return LoginResponse(access_token=token, account=account)


@router.post("/logout", response_model=LogoutResponse, summary="セッションを失効")
def logout(
    authorization: Optional[str] = Header(None),
    accounts: AccountService = Depends(get_account_service),
) -> LogoutResponse:
    """未知のトークンでもエラーにはせず revoked=False を返す。"""
    token = _require_token(authorization)
    return LogoutResponse(revoked=accounts.logout(token))


@router.get("/me", response_model=AccountPublic, summary="ログイン中のアカウント")
def me(
    authorization: Optional[str] = Header(None),
    accounts: AccountService = Depends(get_account_service),
) -> AccountPublic:
    token = _require_token(authorization)
    try:
        return accounts.get_session_account(token)
    except SessionNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc
