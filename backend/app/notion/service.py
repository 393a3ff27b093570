"""
NotionClient と HTML 変換処理をつなぐサービス層。

- ページ本体と直下ブロックの取得
- Notion API レスポンス → RenderedPage への変換
"""

import logging
from typing import Optional

from .client import NotionClient
from .renderer import extract_page_title, render_blocks
from .schemas import RenderedPage

logger = logging.getLogger(__name__)


class NotionPageService:
    """
    NotionClient を利用してページを取得し、HTML に描画するサービス。

    - 取得は page → children の順に逐次実行する
    - NotionClientError はそのまま呼び出し元へ送出する（変換はハンドラ側の責務）
    """

    def __init__(self, client: Optional[NotionClient] = None) -> None:
        self.client = client or NotionClient()

    def render_page(self, page_id: str) -> RenderedPage:
        page = self.client.retrieve_page(page_id)
        blocks = self.client.list_block_children(page_id)

        logger.info("Retrieved Notion page %s with %s blocks.", page_id, len(blocks))

        return RenderedPage(
            page_id=page_id,
            title=extract_page_title(page),
            html=render_blocks(page, blocks),
            block_count=len(blocks),
        )
