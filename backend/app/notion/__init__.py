"""
Notion 連携用モジュール群。

主な責務:
- Notion API からページと直下ブロックを読み取る
- ブロックを HTML 断片に変換し、1 つのページ HTML に組み立てる
"""

from .blocks import BlockType, block_to_html, extract_block_text  # noqa: F401
from .renderer import extract_page_title, render_blocks, render_page_html  # noqa: F401
from .schemas import RenderedPage  # noqa: F401
from .service import NotionPageService  # noqa: F401
