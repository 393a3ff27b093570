"""
Notion API との通信を担当するクライアントモジュール。
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import NotionConfig, get_notion_config

logger = logging.getLogger(__name__)


class NotionClientError(RuntimeError):
    """Notion クライアント全般の例外。"""


class NotionAuthError(NotionClientError):
    """認証・権限関連のエラー。"""


class NotionNotFoundError(NotionClientError):
    """ページ / ブロックが存在しない、またはインテグレーションに共有されていない。"""


class NotionAPIError(NotionClientError):
    """その他 Notion API 呼び出し時のエラー（不正なレスポンス形式を含む）。"""


class NotionClient:
    """
    Notion API の薄いラッパークライアント。

    - ページの取得 (GET /pages/{page_id})
    - 直下の子ブロック一覧の取得 (GET /blocks/{block_id}/children)
    """

    def __init__(self, config: Optional[NotionConfig] = None) -> None:
        self.config = config or get_notion_config()

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Notion-Version": self.config.api_version,
            "Content-Type": "application/json",
        }

    def _raise_for_status(self, response: httpx.Response) -> None:
        """
        HTTP レスポンスコードに応じて適切な例外を投げる。
        """
        if response.status_code == 401:
            raise NotionAuthError("Unauthorized. Check NOTION_API_KEY.")
        if response.status_code == 403:
            raise NotionAuthError("Forbidden. Check Notion integration permissions.")
        if response.status_code == 404:
            raise NotionNotFoundError(
                "Notion object not found. Is the page shared with the integration?"
            )
        if response.status_code >= 400:
            raise NotionAPIError(
                f"Notion API error: {response.status_code} {response.text}"
            )

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = httpx.get(
                url,
                headers=self._build_headers(),
                params=params,
                timeout=self.config.timeout_seconds,
            )
        except httpx.RequestError as exc:
            raise NotionClientError(f"Failed to call Notion API: {exc}") from exc

        self._raise_for_status(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise NotionAPIError("Notion API returned a non-JSON response.") from exc

        if not isinstance(data, dict):
            raise NotionAPIError("Unexpected Notion API response format: expected an object.")

        return data

    def retrieve_page(self, page_id: str) -> Dict[str, Any]:
        """
        ページオブジェクトを取得する。

        返り値は Notion API の生のページオブジェクト（properties を含む dict）。
        """
        return self._get_json(f"{self.config.api_base_url}/pages/{page_id}")

    def list_block_children(self, block_id: str) -> List[Dict[str, Any]]:
        """
        ブロック直下の子ブロックを順番通りに取得する。

        has_more / next_cursor を辿って結合するが、孫ブロックまでは取得しない。
        辿るページ数は NotionConfig.max_block_pages で打ち切る。
        """
        url = f"{self.config.api_base_url}/blocks/{block_id}/children"
        blocks: List[Dict[str, Any]] = []
        cursor: Optional[str] = None

        for _ in range(self.config.max_block_pages):
            params: Dict[str, Any] = {"page_size": 100}
            if cursor:
                params["start_cursor"] = cursor

            data = self._get_json(url, params=params)

            results = data.get("results", [])
            if not isinstance(results, list):
                raise NotionAPIError(
                    "Unexpected Notion API response format: 'results' is not a list."
                )
            blocks.extend(results)

            cursor = data.get("next_cursor")
            if not data.get("has_more") or not cursor:
                break
        else:
            logger.warning(
                "Stopped paging children of block %s after %s pages.",
                block_id,
                self.config.max_block_pages,
            )

        return blocks
