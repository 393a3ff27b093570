"""
認証まわりの Pydantic スキーマ定義。
"""

from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """ベアラートークンの検証に成功した呼び出し元。"""

    id: str = Field(..., description="ユーザー ID")
    email: str = Field(..., description="ユーザーのメールアドレス（lookup のキー）")


class AccountPublic(BaseModel):
    """クライアントに返すアカウント情報（パスワードハッシュは含めない）。"""

    id: str
    email: str


class StoredAccount(AccountPublic):
    """ストレージに保存するアカウント。"""

    password_hash: str


class CredentialsRequest(BaseModel):
    """/auth/signup と /auth/login のリクエストボディ。"""

    email: str = Field(..., min_length=3, description="メールアドレス（大文字小文字は区別しない）")
    password: str = Field(..., min_length=1, description="パスワード")


class SignupResponse(BaseModel):
    account: AccountPublic
    message: str = "Account created successfully! Please log in."


class LoginResponse(BaseModel):
    """ログイン成功時のレスポンス。access_token をベアラートークンとして使う。"""

    access_token: str
    token_type: str = "bearer"
    account: AccountPublic


class LogoutResponse(BaseModel):
    message: str = "You have been logged out."
    revoked: bool = Field(True, description="有効なセッションを失効させたかどうか")
