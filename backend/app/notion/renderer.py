"""
ページタイトルとブロック断片から 1 つの HTML 文字列を組み立てる。
"""

import html
from typing import Any, Dict, Iterable, Optional

from .blocks import block_to_html, extract_block_text, extract_first_plain_text

DEFAULT_PAGE_TITLE = "Untitled"


def _find_title_property(properties: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    タイトルプロパティを探す。

    通常ページは "title" というキー、データベース配下のページは
    任意名のプロパティが type == "title" になっている。
    """
    prop = properties.get("title")
    if isinstance(prop, dict):
        return prop

    for value in properties.values():
        if isinstance(value, dict) and value.get("type") == "title":
            return value
    return None


def extract_page_title(page: Dict[str, Any]) -> str:
    """ページのタイトルを返す。取れない場合は "Untitled"。"""
    if not isinstance(page, dict):
        return DEFAULT_PAGE_TITLE

    properties = page.get("properties")
    if not isinstance(properties, dict):
        return DEFAULT_PAGE_TITLE

    prop = _find_title_property(properties)
    if prop is None:
        return DEFAULT_PAGE_TITLE

    return extract_first_plain_text(prop.get("title")) or DEFAULT_PAGE_TITLE


def render_page_html(title: str, fragments: Iterable[str]) -> str:
    """
    タイトルと断片列を notion-page コンテナで包む。

    断片はブロック順のまま連結し、並べ替え・重複除去はしない。
    """
    body = "".join(fragments)
    return f'<div class="notion-page"><h1>{html.escape(title)}</h1>{body}</div>'


def render_blocks(page: Dict[str, Any], blocks: Iterable[Dict[str, Any]]) -> str:
    """ページオブジェクトとブロック列から HTML を生成する。"""
    fragments = [block_to_html(block, extract_block_text(block)) for block in blocks]
    return render_page_html(extract_page_title(page), fragments)
