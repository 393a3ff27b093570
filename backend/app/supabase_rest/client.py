"""
Supabase の REST エンドポイント（GoTrue / PostgREST）への薄い HTTP クライアント。

SDK は使わず、必要な 2 つの呼び出しだけを httpx で叩く。
"""

from typing import Any, Dict, List, Optional

import httpx

from .config import SupabaseConfig


class SupabaseClientError(RuntimeError):
    """Supabase クライアント全般の基底例外。"""


class SupabaseAuthError(SupabaseClientError):
    """アクセストークンが無効・期限切れなど、ユーザーを特定できない場合の例外。"""


class SupabaseHTTPError(SupabaseClientError):
    """HTTP ステータスコードがエラーだった場合の例外。"""

    def __init__(self, status_code: int, body: Any | None = None) -> None:
        super().__init__(f"Supabase API error: status_code={status_code}")
        self.status_code = status_code
        self.body = body


class SupabaseClient:
    """
    Supabase REST API クライアント。

    - get_user: GET {url}/auth/v1/user （ユーザーのアクセストークンで認証）
    - select_rows: GET {url}/rest/v1/{table} （anon key で PostgREST を検索）
    """

    def __init__(self, config: SupabaseConfig) -> None:
        self._config = config

    @property
    def base_url(self) -> str:
        return self._config.url

    def _build_headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        return {
            "apikey": self._config.anon_key,
            "Authorization": f"Bearer {access_token or self._config.anon_key}",
            "Accept": "application/json",
        }

    def _get(
        self,
        path: str,
        *,
        access_token: Optional[str] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        try:
            return httpx.get(
                f"{self.base_url}{path}",
                headers=self._build_headers(access_token),
                params=params,
                timeout=self._config.timeout_seconds,
            )
        except httpx.RequestError as exc:
            raise SupabaseClientError(f"Failed to call Supabase API: {exc}") from exc

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise SupabaseClientError("Supabase API returned a non-JSON response.") from exc

    def get_user(self, access_token: str) -> Dict[str, Any]:
        """
        アクセストークンに対応するユーザーオブジェクトを返す。

        :raises SupabaseAuthError: 401/403 もしくはユーザーが取れない場合
        """
        response = self._get("/auth/v1/user", access_token=access_token)

        if response.status_code in (401, 403):
            raise SupabaseAuthError("Invalid or expired access token.")
        if response.status_code // 100 != 2:
            raise SupabaseHTTPError(status_code=response.status_code, body=response.text)

        user = self._json(response)
        if not isinstance(user, dict) or not user.get("id"):
            raise SupabaseAuthError("No user found for access token.")
        return user

    def select_rows(self, table: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """
        PostgREST でテーブルを検索し、行の配列を返す。

        params は PostgREST のクエリ文字列そのもの（例: {"email": "ilike.a@b.c"}）。
        """
        response = self._get(f"/rest/v1/{table}", params=params)

        if response.status_code // 100 != 2:
            raise SupabaseHTTPError(status_code=response.status_code, body=response.text)

        rows = self._json(response)
        if not isinstance(rows, list):
            raise SupabaseClientError("Unexpected PostgREST response format: expected a list.")
        return rows
