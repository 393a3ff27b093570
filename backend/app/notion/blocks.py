"""
Notion ブロック → HTML 断片の変換。

- extract_block_text: ブロックから表示用プレーンテキストを取り出す
- block_to_html: ブロック種別に応じた HTML 断片を返す

対応していないブロック種別は空文字として黙って落とす。
"""

import html
from enum import Enum
from typing import Any, Dict, Optional


class BlockType(str, Enum):
    """HTML に変換できるブロック種別。"""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"


# BlockType を追加したら必ずここにもタグを追加すること（tests で全件チェックしている）
BLOCK_HTML_TAGS: Dict[BlockType, str] = {
    BlockType.PARAGRAPH: "p",
    BlockType.HEADING_1: "h1",
    BlockType.HEADING_2: "h2",
    BlockType.HEADING_3: "h3",
    # <ul> で囲まない（既存の出力との互換のため）
    BlockType.BULLETED_LIST_ITEM: "li",
}


def resolve_block_type(block: Dict[str, Any]) -> Optional[BlockType]:
    """
    ブロックの種別を判定する。

    通常は "type" を見るが、欠けている場合は対応種別のキーが存在するかで判定する。
    """
    if not isinstance(block, dict):
        return None

    tag = block.get("type")
    if isinstance(tag, str):
        try:
            return BlockType(tag)
        except ValueError:
            return None

    for block_type in BlockType:
        if block_type.value in block:
            return block_type
    return None


def extract_first_plain_text(rich_text: Any) -> str:
    """
    rich_text 配列の先頭スパンの plain_text を返す。

    2 つ目以降のスパンは使わない。欠損・型違いは空文字。
    """
    if not isinstance(rich_text, list) or not rich_text:
        return ""

    first = rich_text[0]
    if not isinstance(first, dict):
        return ""

    text = first.get("plain_text")
    return text if isinstance(text, str) else ""


def extract_block_text(block: Dict[str, Any]) -> str:
    """ブロックの主テキストを返す。どんな入力でも例外は投げない。"""
    block_type = resolve_block_type(block)
    if block_type is None:
        return ""

    body = block.get(block_type.value)
    if not isinstance(body, dict):
        return ""

    return extract_first_plain_text(body.get("rich_text"))


def block_to_html(block: Dict[str, Any], text: Optional[str] = None) -> str:
    """
    ブロックを HTML 断片に変換する。

    :param block: Notion API の生のブロックオブジェクト
    :param text: 抽出済みテキスト。None の場合は extract_block_text で取り出す
    :return: "<p>...</p>" などの断片。未対応種別は空文字
    """
    block_type = resolve_block_type(block)
    if block_type is None:
        return ""

    if text is None:
        text = extract_block_text(block)

    tag = BLOCK_HTML_TAGS[block_type]
    return f"<{tag}>{html.escape(text)}</{tag}>"
